from typing import Any, Dict, Optional

from partycards.tsar.constants import SETTING_LIMITS, SettingLimit


class GameSettings:
    """
    Tunable values of one game.

    :param player_cards: Number of white cards each hand is refilled to
    :param win_points: Score that wins the game. Only an exact match wins,
                       which relies on rounds awarding a single point.
    :param game_player_count: Maximum number of seated players
    """

    def __init__(
        self,
        player_cards: int = SETTING_LIMITS["player_cards"].default,
        win_points: int = SETTING_LIMITS["win_points"].default,
        game_player_count: int = SETTING_LIMITS["game_player_count"].default,
    ):
        self.player_cards = player_cards
        self.win_points = win_points
        self.game_player_count = game_player_count

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "GameSettings":
        """Build settings from a config dictionary, ignoring unknown keys."""
        config = config or {}
        return cls(
            **{key: config[key] for key in SETTING_LIMITS if key in config}
        )

    @staticmethod
    def limits() -> Dict[str, SettingLimit]:
        """Advisory min/max/default metadata, keyed by setting name."""
        return dict(SETTING_LIMITS)

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for serialization."""
        return {
            "player_cards": self.player_cards,
            "win_points": self.win_points,
            "game_player_count": self.game_player_count,
        }

    def __repr__(self) -> str:
        return (
            f"GameSettings(player_cards={self.player_cards}, "
            f"win_points={self.win_points}, "
            f"game_player_count={self.game_player_count})"
        )
