"""Stage names, rule constants and setting metadata for tsar judged games."""

from dataclasses import dataclass
from enum import Enum, auto

class GameStage(Enum):
    """Stages of a game, in the order a normal game meets them."""

    INIT = auto()
    EMPTY = auto()
    WAITING = auto()
    DEALING = auto()
    PLAYING = auto()
    INBETWEENTURN = auto()
    TSARTURN = auto()
    ENDGAME = auto()
    KILLED = auto()

# Players needed before a round can be played
MIN_PLAYERS = 3

# Stages a round can be dealt from
DEALING_SOURCES = (
    GameStage.WAITING,
    GameStage.PLAYING,
    GameStage.INBETWEENTURN,
    GameStage.TSARTURN,
)

# Stages of a running round: a tsar is seated and joiners are dealt in
ROUND_STAGES = (
    GameStage.DEALING,
    GameStage.PLAYING,
    GameStage.INBETWEENTURN,
    GameStage.TSARTURN,
)


@dataclass(frozen=True)
class SettingLimit:
    """Advisory bounds for one tunable setting. The engine does not enforce them."""

    default: int
    minimum: int
    maximum: int

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

SETTING_LIMITS = {
    "player_cards": SettingLimit(default=10, minimum=1, maximum=20),
    "win_points": SettingLimit(default=10, minimum=1, maximum=50),
    "game_player_count": SettingLimit(default=10, minimum=MIN_PLAYERS, maximum=20),
}
