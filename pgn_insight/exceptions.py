# pgn_insight/pgn_insight/exceptions.py
"""
Defines custom exceptions for the PGN Insight application.

Centralizing exceptions here avoids circular dependencies when different
modules need to catch exceptions defined by other components.
"""

# --- General ---
class PGNInsightError(Exception):
    """Base class for all application-specific errors."""
    pass

# --- Validation Errors (recovered into error records by the analyzer) ---
class PGNValidationError(PGNInsightError):
    """Base class for input that cannot be analysed. `reason` becomes the record's error reason."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

class EmptyInputError(PGNValidationError):
    """The trimmed input text is empty."""
    pass

class NoMovesFoundError(PGNValidationError):
    """No move-number token was found anywhere in the movetext."""
    pass

class MalformedMoveError(PGNValidationError):
    """A malformed token was met while parsing in strict mode."""

    def __init__(self, token: str, detail: str):
        super().__init__(f"Malformed token '{token}': {detail}")
        self.token = token
        self.detail = detail

# --- PGN Handler Errors ---
class PGNError(PGNInsightError):
    """Base class for PGN file handling errors."""
    pass

class PGNImportError(PGNError):
    """Error encountered while reading a PGN file."""
    pass

class PGNExportError(PGNError):
    """Error encountered while writing analysed records."""
    pass

# --- Serialization Errors ---
class SerializationError(PGNInsightError):
    """A structured form could not be converted back into a GameRecord."""
    pass

# --- Reporting Errors ---
class ReportGenerationError(PGNInsightError):
    """Base class for errors encountered during report generation."""
    pass

class CSVReportError(ReportGenerationError):
    """Specific error for CSV report generation issues."""
    pass
