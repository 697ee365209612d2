"""
Tsar judged party card game module.

This module provides the implementation of the game, including its stages,
settings, stage transitions and the game itself.
"""

from partycards.tsar.constants import GameStage, SettingLimit, SETTING_LIMITS
from partycards.tsar.settings import GameSettings
from partycards.tsar.transitions import StageTransitions, register_stages
from partycards.tsar.game import Game, Outcome

__all__ = [
    "Game",
    "Outcome",
    "GameStage",
    "GameSettings",
    "SettingLimit",
    "SETTING_LIMITS",
    "StageTransitions",
    "register_stages",
]
