"""
Tsar judged party card game.

Each round a randomly chosen tsar reveals a black card, every other player
answers it with white cards from their hand, and the tsar picks the answer
they like best. The picked player scores a point; the first player to reach
the winning score ends the game.

A ``Game`` owns its state machine and its event channel. Every public
operation runs to completion, chained transitions included, before it
returns. Operations that can fail for ordinary reasons (wrong stage, wrong
player, bad index) return an ``Outcome`` instead of raising.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from partycards.common.card import BlackCard, WhiteCard
from partycards.common.collection import CardCollection
from partycards.common.player import Player
from partycards.common.util import RandomSource, make_rng
from partycards.events import EventEmitter, EventPriority, GameEventType
from partycards.state import StateMachine
from partycards.tsar.constants import MIN_PLAYERS, ROUND_STAGES, GameStage
from partycards.tsar.settings import GameSettings
from partycards.tsar.transitions import register_stages

logger = logging.getLogger("partycards.tsar")


@dataclass(frozen=True)
class Outcome:
    """
    Result of a game operation: whether it worked, and text to show.

    Truthy when the operation worked, and unpacks as ``ok, message``.
    """

    ok: bool
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    def __iter__(self) -> Iterator[Any]:
        return iter((self.ok, self.message))


class Game:
    """
    One table of a tsar judged party card game.

    Attributes:
        id: Unique identifier for this game
        players: Seated players, in join order
        host: Player running the table, always the earliest seated player
        tsar: Judge of the current round
        cards: Collection every card is drawn from
        black_card: Prompt of the current round
        settings: Tunable values
        rng: Random generator behind every draw
        events: Channel every notification is emitted on
        machine: State machine over ``GameStage``
    """

    def __init__(
        self,
        cards: Optional[CardCollection] = None,
        settings: Optional[GameSettings] = None,
        rng: RandomSource = None,
        events: Optional[EventEmitter] = None,
    ):
        """
        Initialize a game with no players.

        Args:
            cards: Collection to merge into the game's own deck
            settings: Tunable values, defaults when omitted
            rng: Generator or seed for every random draw
            events: Channel to emit on, a private one when omitted
        """
        self.id = str(uuid.uuid4())
        self.events = events if events is not None else EventEmitter()

        self.host: Optional[Player] = None
        self.tsar: Optional[Player] = None
        self.players: List[Player] = []

        self.cards = CardCollection(name=f"game-{self.id}")
        if cards is not None:
            self.cards.merge(cards)
        self.black_card: Optional[BlackCard] = None

        self.settings = settings if settings is not None else GameSettings()
        self.rng = make_rng(rng)
        self.rounds_played = 0

        self.machine = StateMachine(GameStage, GameStage.INIT, self.events)
        register_stages(self)
        self.machine.set_state(GameStage.EMPTY)

    @classmethod
    def create(
        cls,
        host: Player,
        cards: Optional[CardCollection] = None,
        settings: Optional[GameSettings] = None,
        rng: RandomSource = None,
    ) -> "Game":
        """Create a game seating ``host``, waiting for more players."""
        game = cls(cards=cards, settings=settings, rng=rng)
        game.add_player(host)
        return game

    @property
    def state(self) -> GameStage:
        return self.machine.state

    def on(
        self,
        event_type: Union[GameEventType, str],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """Subscribe to one of the game's notifications."""
        return self.events.on(event_type, callback, priority)

    def is_killed(self) -> bool:
        return self.machine.is_in(GameStage.KILLED)

    def is_tsar(self, player: Player) -> bool:
        return self.tsar is not None and self.tsar is player

    def is_host(self, player: Player) -> bool:
        return self.host is not None and self.host is player

    def has_player(self, player: Player) -> bool:
        return self.players is not None and any(p is player for p in self.players)

    def find_player(self, player_id: str) -> Optional[Player]:
        if self.players is None:
            return None
        return next((p for p in self.players if p.id == player_id), None)

    # Seats

    def add_player(self, player: Player) -> Outcome:
        """
        Seat a player.

        A player joining while a round runs is dealt a full hand straight away.
        """
        if self.is_killed():
            return Outcome(False, "This game has ended.")

        if self.has_player(player) or self.find_player(player.id) is not None:
            return Outcome(False, "You're already in this game.")

        if len(self.players) >= self.settings.game_player_count:
            return Outcome(False, "The game is full.")

        self.players.append(player)
        self.find_host()

        if self.machine.is_in(GameStage.EMPTY):
            self.machine.set_state(GameStage.WAITING)

        if self.state in ROUND_STAGES:
            player.fill_hand(self.settings.player_cards, self.cards, self.rng)

        logger.info("Player %s joined game %s", player.id, self.id)
        self.events.emit(
            GameEventType.PLAYER_JOINED,
            {
                "game_id": self.id,
                "player": player,
                "player_id": player.id,
                "timestamp": time.time(),
            },
        )
        return Outcome(True)

    def remove_player(self, player: Player) -> Outcome:
        index = -1
        if self.players is not None:
            index = next(
                (i for i, p in enumerate(self.players) if p is player), -1
            )
        return self.remove_player_by_index(index)

    def remove_player_by_index(self, index: int = -1) -> Outcome:
        """
        Unseat the player at ``index``.

        Removing the last player kills the game. A round being played cannot
        continue short handed, so leaving during PLAYING returns the game to
        WAITING. So does losing the tsar, dropping below the minimum table or
        losing every finished answer while the tsar is choosing.
        """
        if self.is_killed():
            return Outcome(False, "This game has ended.")

        if index < 0 or index >= len(self.players):
            logger.warning("Trying to remove player by index out of range: %s", index)
            return Outcome(False, "I can't find that player.")

        player = self.players.pop(index)
        was_tsar = self.is_tsar(player)

        logger.info("Player %s left game %s", player.id, self.id)
        self.events.emit(
            GameEventType.PLAYER_LEFT,
            {
                "game_id": self.id,
                "player": player,
                "player_id": player.id,
                "timestamp": time.time(),
            },
        )

        self.find_host()
        if self.is_killed():
            return Outcome(True, "Removed player.")

        if self.machine.is_in(GameStage.PLAYING):
            self.machine.set_state(GameStage.WAITING)
        elif self.machine.is_in(GameStage.TSARTURN) and (
            was_tsar
            or len(self.players) < MIN_PLAYERS
            or not self.get_filled_in_cards_with_player()
        ):
            self.machine.set_state(GameStage.WAITING, force_from=True)
        elif was_tsar:
            self.tsar = None

        return Outcome(True, "Removed player.")

    def find_host(self) -> bool:
        """
        Make sure a seated player hosts the game.

        Kills the game once nobody is left.

        Returns:
            True if a new host was elected
        """
        if self.is_killed():
            return False

        if self.host is not None and self.has_player(self.host):
            return False

        if not self.players:
            self.kill()
            return False

        previous = self.host
        self.host = self.players[0]
        self.events.emit(
            GameEventType.HOST_CHANGED,
            {
                "game_id": self.id,
                "host": self.host,
                "host_id": self.host.id,
                "previous_host_id": previous.id if previous is not None else None,
            },
        )
        return True

    # Rounds

    def start(self) -> Outcome:
        """Deal the first round. The game moves on to PLAYING by itself."""
        if not self.machine.is_in(GameStage.WAITING):
            return Outcome(False, "The game is not currently waiting to be started.")

        if len(self.players) < MIN_PLAYERS:
            return Outcome(
                False, f"At least {MIN_PLAYERS} players are needed to start."
            )

        if not self.cards.white or not self.cards.black:
            return Outcome(False, "There are no cards to play with.")

        if not self.machine.set_state(GameStage.DEALING):
            return Outcome(False, "The game could not be started.")

        return Outcome(True)

    def play(self, player: Player, card: WhiteCard) -> Outcome:
        return self.play_by_card_index(player, player.hand.index_of(card))

    def play_by_card_index(self, player: Player, index: int) -> Outcome:
        """
        Submit the card at ``index`` of the player's hand for this round.

        Once every player but the tsar has submitted as many cards as the black
        card has slots, the game moves on to TSARTURN.
        """
        if not self.machine.is_in(GameStage.PLAYING):
            return Outcome(False, "You can't play a card right now.")

        if not self.has_player(player):
            return Outcome(False, "You're not in this game.")

        if self.is_tsar(player):
            return Outcome(False, "The Tsar cannot play a card.")

        fill_count = self.black_card.get_fill_count()
        if len(player.played) >= fill_count:
            return Outcome(False, "You have already played the max amount of cards.")

        if not player.hand.has_index(index):
            return Outcome(False, "That card does not exist.")

        if index in player.played:
            return Outcome(False, "You have already played that card.")

        player.played.append(index)

        if len(player.played) == fill_count:
            self.events.emit(
                GameEventType.PLAYER_PLAYED_ALL,
                {
                    "game_id": self.id,
                    "player": player,
                    "player_id": player.id,
                    "cards": [card.text for card in player.played_cards()],
                },
            )

        if self.done_playing():
            self.machine.set_state(GameStage.INBETWEENTURN, force_from=True)
            self.machine.set_state(GameStage.TSARTURN, force_from=True)

        return Outcome(True)

    def done_playing(self) -> bool:
        """True once every player but the tsar has filled the black card."""
        if self.black_card is None or not self.players:
            return False

        fill_count = self.black_card.get_fill_count()
        return all(
            len(player.played) == fill_count
            for player in self.players
            if not self.is_tsar(player)
        )

    def get_filled_in_cards_with_player(self) -> List[Tuple[Player, str]]:
        """
        The completed answers of this round, in seating order.

        Slot ``n`` of the black card takes the ``n``-th card the player
        submitted. Players that have not finished submitting are left out.
        """
        if self.black_card is None or not self.players:
            return []

        fill_count = self.black_card.get_fill_count()
        return [
            (player, self.black_card.get_display(True, *player.played_cards()))
            for player in self.players
            if not self.is_tsar(player) and len(player.played) == fill_count
        ]

    def get_filled_in_card_text(self) -> List[str]:
        return [text for _, text in self.get_filled_in_cards_with_player()]

    def choose_turn_winner(self, tsar: Player, player: Player) -> Outcome:
        """Pick the round's winner by player instead of by answer position."""
        choices = self.get_filled_in_cards_with_player()
        index = next((i for i, (p, _) in enumerate(choices) if p is player), -1)
        return self.choose_turn_winner_by_index(tsar, index)

    def choose_turn_winner_by_index(self, tsar: Player, index: int = -1) -> Outcome:
        """
        Let the tsar pick the winning answer.

        The picked player scores a point. Without a game winner the next round
        is dealt; otherwise the game ends.
        """
        if not self.is_tsar(tsar):
            return Outcome(False, "You can't choose, you're not the Tsar.")

        if not self.machine.is_in(GameStage.TSARTURN):
            return Outcome(False, "It's not currently the time to choose!")

        choices = self.get_filled_in_cards_with_player()
        if index < 0 or index > len(choices) - 1:
            return Outcome(False, "That's not a valid card.")

        winner, text = choices[index]
        winner.points += 1
        self.rounds_played += 1

        logger.info("Tsar %s picked %s: %r", tsar.id, winner.id, text)
        self.events.emit(
            GameEventType.TSAR_CHOICE,
            {
                "game_id": self.id,
                "choice": (winner, text),
                "player": winner,
                "player_id": winner.id,
                "text": text,
                "tsar_id": tsar.id,
            },
        )

        winners = self.get_winners()
        if not winners:
            self.machine.set_state(GameStage.DEALING)
            return Outcome(True, f"{winner.id} won the round.")

        if len(winners) > 1:
            logger.warning(
                "Game %s ended with %d winners: %s",
                self.id,
                len(winners),
                ", ".join(p.id for p in winners),
            )

        self.machine.set_state(GameStage.ENDGAME, force_from=True)
        self.events.emit(
            GameEventType.GAME_WINNER,
            {
                "game_id": self.id,
                "winners": winners,
                "winner_ids": [p.id for p in winners],
                "timestamp": time.time(),
            },
        )
        return Outcome(True, f"{', '.join(p.id for p in winners)} won the game!")

    def is_winner(self, player: Player) -> bool:
        """Only an exact match of the winning score counts."""
        return self.settings is not None and player.points == self.settings.win_points

    def get_winners(self) -> List[Player]:
        if not self.players:
            return []
        return [player for player in self.players if self.is_winner(player)]

    def check_winner(self) -> bool:
        return len(self.get_winners()) > 0

    def kill(self) -> bool:
        """End the game from any stage and drop everything it owns."""
        return self.machine.set_state(GameStage.KILLED, force_from=True, force_to=True)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game to a dictionary suitable for platform adapters.

        Returns:
            Dictionary representation of the game
        """
        players = self.players or []
        return {
            "id": self.id,
            "stage": self.state.name,
            "rounds_played": self.rounds_played,
            "host": self.host.id if self.host is not None else None,
            "tsar": self.tsar.id if self.tsar is not None else None,
            "black_card": (
                self.black_card.get_display() if self.black_card is not None else None
            ),
            "settings": self.settings.to_dict() if self.settings is not None else None,
            "players": [
                {
                    "id": player.id,
                    "points": player.points,
                    "hand_size": len(player.hand),
                    "played": len(player.played),
                }
                for player in players
            ],
        }

    def __repr__(self) -> str:
        count = len(self.players) if self.players is not None else 0
        return f"Game({self.id!r}, stage={self.state.name}, players={count})"
