"""Player configuration system for Chain Reaction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from game.constants import DEFAULT_JITTER, DEFAULT_TOP_K

PlayerType = Literal["heuristic", "random", "human", "off"]

PLAYER_TYPES = ("heuristic", "random", "human", "off")


@dataclass
class PlayerConfig:
    """Configuration for a single seat.

    Attributes:
        player_type: 'heuristic', 'random', 'human' or 'off' (seat unused)
        top_k: Heuristic picks uniformly among this many best moves
        jitter: Upper bound of the random noise added to heuristic scores
        rng_seed: Random seed for this player (None = derived from session seed)
        name: Display name (None = default "<Type> <n>")
    """

    player_type: PlayerType = "heuristic"

    # Heuristic parameters
    top_k: int = DEFAULT_TOP_K
    jitter: float = DEFAULT_JITTER

    # General player settings
    rng_seed: int | None = None
    name: str | None = None

    @property
    def is_active(self) -> bool:
        return self.player_type != "off"

    @classmethod
    def heuristic(
        cls,
        top_k: int = DEFAULT_TOP_K,
        *,
        jitter: float = DEFAULT_JITTER,
        seed: int | None = None,
        name: str | None = None,
    ) -> PlayerConfig:
        """Create a heuristic (computer) player configuration."""
        return cls(player_type="heuristic", top_k=top_k, jitter=jitter, rng_seed=seed, name=name)

    @classmethod
    def random(cls, seed: int | None = None, name: str | None = None) -> PlayerConfig:
        """Create a random player configuration."""
        return cls(player_type="random", rng_seed=seed, name=name)

    @classmethod
    def human(cls, name: str | None = None) -> PlayerConfig:
        """Create a human player configuration."""
        return cls(player_type="human", name=name)

    @classmethod
    def off(cls) -> PlayerConfig:
        """Create an unused seat."""
        return cls(player_type="off")


def parse_player_spec(spec: str) -> PlayerConfig:
    """Parse a player specification string into a PlayerConfig.

    Format:
        TYPE[:PARAM=VALUE,PARAM=VALUE,...]

    Examples:
        "heuristic" -> Heuristic player with defaults
        "heuristic:top_k=1,jitter=0" -> Greedy, deterministic heuristic
        "random:seed=7" -> Seeded random player
        "human:name=Alice" -> Named human player
        "off" -> Seat not in use

    Supported parameters:
        - top_k (int): Number of best moves to choose from (heuristic only)
        - jitter (float): Score noise upper bound (heuristic only)
        - seed (int): Random seed
        - name (str): Display name
    """
    parts = spec.split(":", 1)
    player_type = parts[0].strip().lower()

    if player_type not in PLAYER_TYPES:
        raise ValueError(
            f"Invalid player type: {player_type}. Must be one of {', '.join(PLAYER_TYPES)}"
        )

    params = {}
    if len(parts) == 2:
        for param_pair in parts[1].split(","):
            param_pair = param_pair.strip()
            if not param_pair:
                continue
            if "=" not in param_pair:
                raise ValueError(f"Invalid parameter format: {param_pair}. Expected PARAM=VALUE")
            key, value = param_pair.split("=", 1)
            key = key.strip()
            value = value.strip()

            if key in ["top_k", "seed"]:
                params[key] = int(value)
            elif key == "jitter":
                params[key] = float(value)
            elif key == "name":
                params[key] = value
            else:
                raise ValueError(f"Unknown parameter: {key}")

    if player_type == "off":
        if params:
            raise ValueError("Seat 'off' takes no parameters")
        return PlayerConfig.off()
    if player_type in ("random", "human") and ({"top_k", "jitter"} & params.keys()):
        raise ValueError("Parameters top_k/jitter only apply to heuristic players")
    if player_type == "human":
        if "seed" in params:
            raise ValueError("Human players take no seed")
        return PlayerConfig.human(name=params.get("name"))
    if player_type == "random":
        return PlayerConfig.random(seed=params.get("seed"), name=params.get("name"))

    top_k = params.get("top_k", DEFAULT_TOP_K)
    if top_k < 1:
        raise ValueError(f"top_k must be at least 1, got {top_k}")
    return PlayerConfig.heuristic(
        top_k,
        jitter=params.get("jitter", DEFAULT_JITTER),
        seed=params.get("seed"),
        name=params.get("name"),
    )
