# pgn_insight/pgn_insight/utils/signal_manager.py
"""
Stops a batch run cleanly between games when the user interrupts it.

`SignalManager` installs handlers for the signals named in
`settings.SHUTDOWN_SIGNALS` for the duration of a batch run. The first
signal sets the pipeline's shutdown event, so the game being analysed is
finished and everything analysed so far is still written out; the
interruption is recorded in the run statistics. A second signal exits
immediately. Original handlers are always restored on exit.
"""
import logging
import signal
import sys
import threading
from types import FrameType
from typing import Callable, List, Optional, Tuple, TypeAlias, Union

from pgn_insight.config import settings
from pgn_insight.statistics import StatisticsTracker

logger = logging.getLogger(settings.APP_NAME + ".SignalManager")

# A handler is a callable or one of the integer constants SIG_DFL / SIG_IGN.
Handler: TypeAlias = Union[Callable[[int, Optional[FrameType]], None], int, None]


def shutdown_signals() -> List[signal.Signals]:
    """The configured shutdown signals that exist on this platform."""
    return [sig for name in settings.SHUTDOWN_SIGNALS if (sig := getattr(signal, name, None)) is not None]


class SignalManager:
    """A context manager that turns shutdown signals into a stop request for a batch run."""

    def __init__(self, shutdown_event: threading.Event, stats_tracker: Optional[StatisticsTracker] = None):
        """
        Args:
            shutdown_event: Set on the first signal; the pipeline checks it between games.
            stats_tracker: If given, the interruption and the number of games
                           read so far are recorded on it.
        """
        self.shutdown_event = shutdown_event
        self.stats_tracker = stats_tracker
        self._original_handlers: List[Tuple[signal.Signals, Handler]] = []

    def __enter__(self) -> "SignalManager":
        self._original_handlers = []
        for sig in shutdown_signals():
            try:
                self._original_handlers.append((sig, signal.getsignal(sig)))
                signal.signal(sig, self._signal_handler)
            except (ValueError, OSError, RuntimeError) as e:
                # Raised outside the main thread, e.g. when a run is driven from a worker.
                logger.warning(f"Could not set signal handler for {sig.name}: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for sig, handler in self._original_handlers:
            try:
                if signal.getsignal(sig) == self._signal_handler:
                    signal.signal(sig, handler)
            except (ValueError, OSError, RuntimeError) as e:
                logger.warning(f"Error restoring original handler for {sig.name}: {e}")
        logger.debug("Original signal handlers restored.")

    def _signal_handler(self, signum: int, frame: Optional[FrameType]) -> None:
        signal_name = signal.Signals(signum).name
        if self.shutdown_event.is_set():
            logger.critical(f"Second signal {signal_name} received. Forcing exit.")
            sys.exit(settings.FORCED_EXIT_CODE)

        games_read = 0
        if self.stats_tracker is not None:
            self.stats_tracker.mark_interrupted(signal_name)
            games_read = self.stats_tracker.stats["games_read"]
        logger.warning(
            f"Signal {signal_name} received after {games_read} games. "
            "Finishing the current game and writing results; press Ctrl+C again to force quit."
        )
        self.shutdown_event.set()
