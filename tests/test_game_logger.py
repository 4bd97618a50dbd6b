"""
Unit tests for GameLogger.

Tests the pluggable writer system for logging game actions in different formats.
"""

import os
import sys
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller.game_logger import GameLogger
from game.chain_game import ChainGame
from game.writers import NotationWriter, TranscriptWriter


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def game():
    return ChainGame(rows=3, cols=3)


@pytest.fixture
def mock_session():
    """Create a mock session for testing."""
    session = Mock()
    session.is_replay_mode.return_value = False
    session.get_seed.return_value = 12345
    return session


# ============================================================================
# Basic behaviour
# ============================================================================


def test_logger_with_no_writers(mock_session, game):
    logger = GameLogger(session=mock_session)
    logger.start_log(seed=12345, rows=3, cols=3)
    logger.log_action(1, {"action": "PUT", "pos": "a1"})
    logger.log_comment("ignored")
    logger.end_log(game)
    assert logger.writers == []
    assert logger.get_log_filenames() == []


def test_custom_writers_receive_everything(mock_session, game):
    logger = GameLogger(session=mock_session)
    output = StringIO()
    logger.add_writer(TranscriptWriter(output))

    logger.start_log(seed=7, rows=3, cols=3, player_names={1: "A", 2: "B"})
    _, action_dict = game.action_to_str(0, 0)
    result = game.take_action(0, 0)
    logger.log_action(1, action_dict, result)
    logger.log_comment("status")

    text = output.getvalue()
    assert "# Seed: 7" in text
    assert "# Player 2: B" in text
    assert "Player 1: {'action': 'PUT', 'pos': 'a1', 'move': 1, 'explosions': 0}" in text
    assert "# status" in text


def test_remove_writer(mock_session):
    logger = GameLogger(session=mock_session)
    writer = NotationWriter(StringIO())
    logger.add_writer(writer)
    logger.remove_writer(writer)
    assert writer not in logger.writers


# ============================================================================
# File writers
# ============================================================================


def test_file_writers_named_by_seed(mock_session, temp_dir):
    logger = GameLogger(session=mock_session, transcript_dir=temp_dir, notation_dir=temp_dir)
    assert sorted(os.path.basename(p) for p in logger.get_log_filenames()) == [
        "chainlog_12345.txt",
        "chainlog_12345_notation.txt",
    ]


def test_file_writers_recreated_for_next_game(mock_session, temp_dir, game):
    reported = []
    logger = GameLogger(
        session=mock_session, transcript_dir=temp_dir, status_reporter=reported.append
    )
    logger.start_log(12345, 3, 3)
    logger.end_log(game)

    mock_session.get_seed.return_value = 999
    logger.start_log(999, 3, 3)
    logger.end_log(game)

    assert os.path.exists(os.path.join(temp_dir, "chainlog_12345.txt"))
    assert os.path.exists(os.path.join(temp_dir, "chainlog_999.txt"))
    assert any("chainlog_999.txt" in message for message in reported)
    with open(os.path.join(temp_dir, "chainlog_999.txt")) as f:
        assert f.readline() == "# Seed: 999\n"


def test_footer_written_to_file(mock_session, temp_dir, game):
    logger = GameLogger(session=mock_session, transcript_dir=temp_dir)
    logger.start_log(12345, 3, 3)
    logger.end_log(game)
    with open(os.path.join(temp_dir, "chainlog_12345.txt")) as f:
        content = f.read()
    assert "# Final game state:" in content
    assert "# Moves made: 0" in content


def test_replay_mode_skips_file_writers(mock_session, temp_dir):
    mock_session.is_replay_mode.return_value = True
    logger = GameLogger(session=mock_session, transcript_dir=temp_dir)
    assert logger.writers == []
    assert os.listdir(temp_dir) == []


def test_unwritable_directory_disables_file_logging(mock_session, temp_dir, capsys):
    blocker = os.path.join(temp_dir, "blocker")
    with open(blocker, "w") as f:
        f.write("not a directory")

    logger = GameLogger(session=mock_session, transcript_dir=os.path.join(blocker, "logs"))
    assert logger.writers == []
    assert "logging to file disabled" in capsys.readouterr().err


def test_screen_writers_persist(mock_session, game, capsys):
    logger = GameLogger(session=mock_session, log_notation_to_screen=True)
    logger.start_log(1, 3, 3)
    logger.end_log(game)
    logger.start_log(2, 3, 3)
    assert len(logger.writers) == 1
    assert capsys.readouterr().out.count("3x3") == 2
