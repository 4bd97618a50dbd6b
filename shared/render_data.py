"""Render data value object for action visualization.

Carries everything a renderer needs to show one placement, so the controller
never has to inspect renderer configuration or convert coordinates itself.
"""


class RenderData:
    """Encapsulates all rendering data for a game action.

    Attributes:
        action_dict: Dictionary containing the action details.
            Format: {'action': 'PUT', 'pos': 'c5'}

        events: Explosions in resolution order, each as a dict with notation strings.
            Format: [{'pos': 'a1', 'owner': 1, 'targets': ['b1', 'a2']}, ...]

        board_text: Grid after the placement settled (empty when not requested).

        anomaly: Description of a cut-off cascade, or None.
    """

    def __init__(self, action_dict, events=None, board_text="", anomaly=None):
        self.action_dict = action_dict
        self.events = events if events is not None else []
        self.board_text = board_text
        self.anomaly = anomaly

    def __repr__(self):
        pos = self.action_dict.get("pos", "?")
        return f"RenderData(pos={pos}, explosions={len(self.events)})"

    def has_explosions(self):
        return len(self.events) > 0

    def has_board(self):
        return bool(self.board_text)
