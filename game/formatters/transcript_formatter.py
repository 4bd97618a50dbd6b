"""Transcript action formatter for Chain Reaction.

Converts between action dictionaries and transcript file string format.
Transcript format: "{'action': 'PUT', 'pos': 'c5', 'move': 3, 'explosions': 2}"
"""

import ast


class TranscriptFormatter:
    """Converts actions to/from transcript file string format."""

    REQUIRED_KEYS = ("action", "pos")

    @staticmethod
    def action_to_transcript(action_dict: dict, action_result=None) -> str:
        """Convert action_dict to transcript string format.

        Args:
            action_dict: Dictionary with action details
            action_result: Optional PlacementResult; adds move number, explosion
                count and the anomaly marker

        Returns:
            str: String representation of the action dict
        """
        record = dict(action_dict)
        if action_result is not None:
            record["move"] = action_result.move_number
            record["explosions"] = action_result.explosion_count()
            if action_result.has_anomaly():
                record["anomaly"] = True
        return str(record)

    @staticmethod
    def transcript_to_action_dict(transcript_str: str) -> dict:
        """Parse transcript string to action dictionary.

        Raises:
            ValueError: If the string is not a dict literal with action and pos
            SyntaxError: If the string is not valid Python
        """
        action_dict = ast.literal_eval(transcript_str)
        if not isinstance(action_dict, dict):
            raise ValueError(f"Transcript entry is not a dict: {transcript_str}")
        missing = [k for k in TranscriptFormatter.REQUIRED_KEYS if k not in action_dict]
        if missing:
            raise ValueError(f"Transcript entry missing {', '.join(missing)}: {transcript_str}")
        return action_dict
