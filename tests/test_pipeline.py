# tests/test_pipeline.py
"""
Tests for the batch pipeline, PGN file handling, reporting and the CLI.
"""
import csv
import io
import json
import logging
import signal
import threading

import pytest

import main
from pgn_insight.exceptions import PGNImportError
from pgn_insight.game_analyzer import GameAnalyzer
from pgn_insight.pgn.pgn_handler import PGNHandler
from pgn_insight.pipeline import AnalysisPipeline
from pgn_insight.statistics import StatisticsTracker
from pgn_insight.utils.logging_config import TqdmLoggingHandler, setup_logging
from pgn_insight.utils.signal_manager import SignalManager

MULTI_GAME_PGN = """[Event "Game A"]
[White "Alice"]
[Black "Bob"]

1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7# 1-0

[Event "Game B"]
[White "Carol"]
[Black "Dave"]

1. d4 d5 2. c4 dxc4 1/2-1/2

[Event "Game C"]
[White "Eve"]
"""


@pytest.fixture
def multi_game_file(tmp_path):
    path = tmp_path / "games.pgn"
    path.write_text(MULTI_GAME_PGN, encoding="utf-8")
    return path


WRAPPED_COMMENT_PGN = """[Event "Game A"]

1. e4 {A long comment that wraps onto
[%clk 0:03:00]} e5 2. Nf3 *

[Event "Game B"]

1. d4 d5 *
"""


def test_split_games_yields_each_game():
    games = list(PGNHandler().split_games(io.StringIO(MULTI_GAME_PGN)))
    assert len(games) == 3
    assert games[0].startswith('[Event "Game A"]')
    assert "Qxf7#" in games[0]
    assert games[1].startswith('[Event "Game B"]')
    assert games[2].strip() == '[Event "Game C"]\n[White "Eve"]'


def test_split_games_keeps_wrapped_comments_inside_their_game():
    games = list(PGNHandler().split_games(io.StringIO(WRAPPED_COMMENT_PGN)))
    assert len(games) == 2
    assert games[1].startswith('[Event "Game B"]')

    record = GameAnalyzer(strict=True).analyze(games[0])
    assert record.error is False
    assert [(m.white_move.san, m.black_move.san if m.black_move else None) for m in record.moves] == [
        ("e4", "e5"), ("Nf3", None),
    ]
    assert record.moves[0].clock == "0:03:00"


def test_count_games(multi_game_file):
    assert PGNHandler().count_games(str(multi_game_file)) == 3


def test_missing_input_file_raises(tmp_path):
    with pytest.raises(PGNImportError):
        list(PGNHandler().stream_game_texts(str(tmp_path / "missing.pgn")))


def test_pipeline_writes_json_and_csv(tmp_path, multi_game_file):
    output_path = tmp_path / "out" / "games.json"
    report_path = tmp_path / "out" / "report.csv"

    records = AnalysisPipeline().run(str(multi_game_file), str(output_path), report_path=str(report_path))

    assert [r.error for r in records] == [False, False, True]
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert [d["title"] for d in data] == [
        "Alice vs Bob: A Masterful Victory in Open Game",
        "Carol vs Dave: A Hard-Fought Draw in Closed Game",
        "Invalid Game",
    ]
    assert data[2]["errorReason"] == "No moves found in PGN"

    with open(report_path, newline="", encoding="utf-8") as report:
        rows = list(csv.DictReader(report))
    assert [row["White"] for row in rows] == ["Alice", "Carol"]
    assert rows[0]["FinalResult"] == "1-0"
    assert rows[0]["TotalMoves"] == "4"
    assert rows[1]["Tactical"] == "1"


def test_pipeline_tracks_statistics(tmp_path, multi_game_file):
    pipeline = AnalysisPipeline()
    pipeline.run(str(multi_game_file), str(tmp_path / "games.json"))
    assert pipeline.stats_tracker.stats["games_read"] == 3
    assert pipeline.stats_tracker.stats["games_analyzed"] == 2
    assert pipeline.stats_tracker.error_reasons["No moves found in PGN"] == 1


def test_pipeline_stops_when_shutdown_requested(tmp_path, multi_game_file):
    pipeline = AnalysisPipeline()
    pipeline.shutdown_event.set()
    assert pipeline.analyze_games(str(multi_game_file)) == []


def test_signal_manager_restores_handlers():
    original = signal.getsignal(signal.SIGINT)
    event = threading.Event()
    with SignalManager(event) as manager:
        assert signal.getsignal(signal.SIGINT) == manager._signal_handler
    assert signal.getsignal(signal.SIGINT) == original


def test_first_signal_requests_shutdown_and_second_forces_exit():
    tracker = StatisticsTracker()
    tracker.add_game_read()
    event = threading.Event()
    manager = SignalManager(event, tracker)

    manager._signal_handler(signal.SIGINT, None)
    assert event.is_set()
    assert tracker.interrupted_by == "SIGINT"

    with pytest.raises(SystemExit) as exc_info:
        manager._signal_handler(signal.SIGINT, None)
    assert exc_info.value.code == 130


@pytest.fixture
def root_logging():
    """Restores the root logger after a test reconfigures it."""
    root_logger = logging.getLogger()
    saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
    yield root_logger
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


def test_extra_handlers_replace_plain_console_handler(root_logging, capsys):
    handler = TqdmLoggingHandler()
    setup_logging(log_level_str="INFO", log_to_file=False, extra_handlers=[handler])
    assert root_logging.handlers == [handler]

    logging.getLogger("PGNInsight.Test").info("above the bar")
    assert "INFO     - PGNInsight.Test - above the bar" in capsys.readouterr().err


def test_cli_batch_run_logs_through_progress_bar(root_logging, tmp_path, multi_game_file):
    output_path = tmp_path / "games.json"
    exit_code = main.main([str(multi_game_file), "-o", str(output_path), "--no-file-log", "--log-level", "WARNING"])
    assert exit_code == 0
    assert [type(h) for h in root_logging.handlers] == [TqdmLoggingHandler]
    assert len(json.loads(output_path.read_text(encoding="utf-8"))) == 3


def test_cli_analyzes_single_game_from_stdin(root_logging, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1. e4 c5 2. Nf3"))
    exit_code = main.main(["-", "--no-file-log", "--log-level", "WARNING"])
    assert exit_code == 0
    assert [type(h) for h in root_logging.handlers] == [logging.StreamHandler]
    data = json.loads(capsys.readouterr().out)
    assert data["opening"]["name"] == "Sicilian Defense"


def test_cli_requires_output_for_file_input(root_logging, multi_game_file):
    assert main.main([str(multi_game_file), "--no-console-log", "--no-file-log"]) == 2
