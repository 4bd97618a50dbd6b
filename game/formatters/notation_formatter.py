"""Compact notation formatter.

One placement per line, written as a column letter followed by a 1-based row
number ("a1" is the top-left cell). A trailing "!" marks a placement whose
cascade was cut off at the explosion limit.
"""

import re


class NotationFormatter:
    """Converts actions to/from compact notation."""

    _NOTATION_RE = re.compile(r"^([a-z])([1-9][0-9]*)(!?)$")

    @staticmethod
    def action_to_notation(action_dict: dict, action_result=None) -> str:
        """Convert action_dict to notation.

        Args:
            action_dict: Dictionary with action details
            action_result: Optional PlacementResult (for the anomaly marker)

        Returns:
            str: Notation string, e.g. "c5" or "c5!"
        """
        if action_dict["action"] != "PUT":
            raise ValueError(f"Unknown action type: {action_dict['action']}")
        notation = action_dict["pos"].lower()
        if action_result is not None and action_result.has_anomaly():
            notation += "!"
        return notation

    @staticmethod
    def notation_to_action_dict(notation: str) -> dict:
        """Parse notation to an action dictionary.

        Raises:
            ValueError: If notation is not a coordinate such as "c5"
        """
        match = NotationFormatter._NOTATION_RE.match(notation.strip().lower())
        if match is None:
            raise ValueError(f"Invalid notation: {notation!r}")
        return {"action": "PUT", "pos": f"{match.group(1)}{match.group(2)}"}
