"""
Stage guards and hooks for tsar judged games.

This module wires the game's stages onto its state machine. The guards and
hooks live on ``StageTransitions`` as static methods taking the game first;
``register_stages`` binds them to one game and registers them in the order
the stages are declared in ``GameStage``.
"""

import logging
import time
from functools import partial
from typing import TYPE_CHECKING

from partycards.common.errors import IllegalTransitionError
from partycards.common.util import random_index
from partycards.events import GameEventType
from partycards.state import StateMachine
from partycards.tsar.constants import DEALING_SOURCES, MIN_PLAYERS, GameStage

if TYPE_CHECKING:
    from partycards.tsar.game import Game

logger = logging.getLogger("partycards.tsar")


class StageTransitions:
    """
    Guards and hooks of every stage after INIT.

    Guards return a bool. Hooks return nothing. Each takes the game followed
    by the machine's usual ``(machine, stage, kind, *args)`` arguments.
    """

    @staticmethod
    def only_to(allowed, game, machine, stage, kind, target) -> bool:
        return target in allowed

    @staticmethod
    def only_from(allowed, game, machine: StateMachine, stage, kind) -> bool:
        return machine.state in allowed

    @staticmethod
    def deny(game, machine, stage, kind, *args) -> bool:
        return False

    @staticmethod
    def has_players(minimum, game, machine, stage, kind) -> bool:
        return game.players is not None and len(game.players) >= minimum

    @staticmethod
    def has_no_players(game, machine, stage, kind) -> bool:
        return not game.players

    @staticmethod
    def clear_hands(game, machine, stage, kind, previous) -> None:
        """Everyone starts from an empty hand at the next deal."""
        for player in game.players:
            player.clear_hand()
        game.tsar = None
        game.black_card = None

    @staticmethod
    def deal(game, machine: StateMachine, stage, kind, previous) -> None:
        """
        Deal a round and hand over to PLAYING.

        Last round's submissions leave the hands, every hand is refilled, and a
        tsar and a prompt are drawn at random.
        """
        for player in game.players:
            player.discard_played()

        for player in game.players:
            if not player.fill_hand(game.settings.player_cards, game.cards, game.rng):
                logger.warning(
                    "Ran out of white cards while dealing to %s", player.id
                )

        game.tsar = game.players[random_index(len(game.players), game.rng)]
        game.black_card = game.cards.get_random_black_card(True, game.rng)
        logger.debug(
            "Dealt round: tsar %s, black card %r", game.tsar.id, game.black_card
        )

        game.events.emit(
            GameEventType.ROUND_DEALT,
            {
                "game_id": game.id,
                "tsar": game.tsar,
                "tsar_id": game.tsar.id,
                "black_card": game.black_card,
                "timestamp": time.time(),
            },
        )

        machine.set_state(GameStage.PLAYING, force_from=True)

    @staticmethod
    def tear_down(game, machine, stage, kind, previous) -> None:
        """Drop every reference the game owns."""
        game.host = None
        game.tsar = None
        game.players = None
        game.cards = None
        game.black_card = None
        game.settings = None
        logger.info("Game %s was killed", game.id)

    @staticmethod
    def refuse_revival(game, machine, stage, kind, target) -> None:
        raise IllegalTransitionError(
            f"Game {game.id} is KILLED and cannot move to {target.name}"
        )


def register_stages(game: "Game") -> None:
    """Register every stage after INIT on the game's machine."""
    machine = game.machine

    machine.add_state(GameStage.EMPTY).set_from_transform(
        GameStage.EMPTY,
        partial(StageTransitions.only_to, (GameStage.WAITING,), game),
    )

    machine.add_state(GameStage.WAITING).set_to_transform(
        GameStage.WAITING, partial(StageTransitions.has_players, 1, game)
    ).set_set_transform(GameStage.WAITING, partial(StageTransitions.clear_hands, game))

    machine.add_state(GameStage.DEALING).set_to_transform(
        GameStage.DEALING, partial(StageTransitions.only_from, DEALING_SOURCES, game)
    ).set_set_transform(GameStage.DEALING, partial(StageTransitions.deal, game))

    machine.add_state(GameStage.PLAYING).set_to_transform(
        GameStage.PLAYING, partial(StageTransitions.has_players, MIN_PLAYERS, game)
    ).set_from_transform(
        GameStage.PLAYING,
        partial(
            StageTransitions.only_to,
            (GameStage.WAITING, GameStage.INBETWEENTURN),
            game,
        ),
    )

    machine.add_state(GameStage.INBETWEENTURN).set_to_transform(
        GameStage.INBETWEENTURN,
        partial(StageTransitions.only_from, (GameStage.PLAYING,), game),
    ).set_from_transform(
        GameStage.INBETWEENTURN,
        partial(StageTransitions.only_to, (GameStage.TSARTURN,), game),
    )

    machine.add_state(GameStage.TSARTURN).set_to_transform(
        GameStage.TSARTURN,
        partial(StageTransitions.only_from, (GameStage.INBETWEENTURN,), game),
    ).set_from_transform(
        GameStage.TSARTURN,
        partial(StageTransitions.only_to, (GameStage.DEALING,), game),
    )

    machine.add_state(GameStage.ENDGAME).set_to_transform(
        GameStage.ENDGAME,
        partial(StageTransitions.only_from, (GameStage.TSARTURN,), game),
    ).set_from_transform(GameStage.ENDGAME, partial(StageTransitions.deny, game))

    machine.add_state(GameStage.KILLED).set_to_transform(
        GameStage.KILLED, partial(StageTransitions.has_no_players, game)
    ).set_from_transform(
        GameStage.KILLED, partial(StageTransitions.deny, game)
    ).set_set_transform(
        GameStage.KILLED, partial(StageTransitions.tear_down, game)
    ).set_unset_transform(
        GameStage.KILLED, partial(StageTransitions.refuse_revival, game)
    )
