"""Tests for the notation and transcript formatters."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from game.action_result import CascadeAnomaly, ExplosionEvent, PlacementResult
from game.formatters import NotationFormatter, TranscriptFormatter


def make_result(explosions=0, anomaly=False, move_number=3):
    events = [ExplosionEvent(0, 0, 1, ((1, 0), (0, 1)))] * explosions
    result = PlacementResult(
        0, 0, 1, events, CascadeAnomaly(10, ((0, 0),)) if anomaly else None
    )
    result.move_number = move_number
    return result


class TestNotationFormatter:
    def test_plain_coordinate(self):
        assert NotationFormatter.action_to_notation({"action": "PUT", "pos": "c5"}) == "c5"

    def test_anomaly_marker(self):
        action = {"action": "PUT", "pos": "c5"}
        assert NotationFormatter.action_to_notation(action, make_result(anomaly=True)) == "c5!"
        assert NotationFormatter.action_to_notation(action, make_result(explosions=2)) == "c5"

    def test_parse(self):
        assert NotationFormatter.notation_to_action_dict("c5") == {"action": "PUT", "pos": "c5"}
        assert NotationFormatter.notation_to_action_dict(" C12! ") == {"action": "PUT", "pos": "c12"}

    @pytest.mark.parametrize("text", ["", "5c", "c0", "cc5", "c5!!"])
    def test_parse_rejects(self, text):
        with pytest.raises(ValueError):
            NotationFormatter.notation_to_action_dict(text)

    def test_unknown_action_type(self):
        with pytest.raises(ValueError):
            NotationFormatter.action_to_notation({"action": "PASS", "pos": "c5"})


class TestTranscriptFormatter:
    def test_without_result(self):
        text = TranscriptFormatter.action_to_transcript({"action": "PUT", "pos": "a1"})
        assert text == "{'action': 'PUT', 'pos': 'a1'}"

    def test_with_result(self):
        text = TranscriptFormatter.action_to_transcript(
            {"action": "PUT", "pos": "a1"}, make_result(explosions=2, anomaly=True)
        )
        parsed = TranscriptFormatter.transcript_to_action_dict(text)
        assert parsed["move"] == 3
        assert parsed["explosions"] == 2
        assert parsed["anomaly"] is True

    def test_does_not_modify_action_dict(self):
        action = {"action": "PUT", "pos": "a1"}
        TranscriptFormatter.action_to_transcript(action, make_result())
        assert action == {"action": "PUT", "pos": "a1"}

    @pytest.mark.parametrize("text", ["[1, 2]", "{'action': 'PUT'}"])
    def test_parse_rejects(self, text):
        with pytest.raises(ValueError):
            TranscriptFormatter.transcript_to_action_dict(text)
