"""
This module contains the Player class, one participant of a party card game.

A player holds a hand of white cards, the positions in that hand they have
submitted for the current round, and their score.
"""

import logging
from typing import List, Optional

import numpy as np

from partycards.common.card import WhiteCard
from partycards.common.collection import CardCollection
from partycards.common.hand import Hand

logger = logging.getLogger("partycards.common")


class Player:
    """
    A participant in a game.

    :param id: Caller supplied identifier (a chat handle, a hash, anything)
    """

    def __init__(self, id: str):
        self.id = id
        self.hand = Hand()
        self.played: List[int] = []
        self.points = 0

    @classmethod
    def create(cls, id: str) -> "Player":
        return cls(id)

    @property
    def cards(self) -> List[WhiteCard]:
        return self.hand.cards

    def fill_hand(
        self,
        size: int,
        collection: CardCollection,
        rng: Optional[np.random.Generator] = None,
    ) -> bool:
        """
        Draw cards until the hand holds ``size`` cards.

        :param size: Target hand size
        :param collection: Collection to draw clones from
        :param rng: Generator to draw with
        :return: False if the collection ran out of white cards
        """
        missing = size - len(self.hand)
        if missing > 0:
            logger.debug("Player %s was missing %d cards", self.id, missing)

        for _ in range(missing):
            card = collection.get_random_white_card(True, rng)
            if card is None:
                return False
            self.hand.add_card(card)
        return True

    def played_cards(self) -> List[WhiteCard]:
        """The submitted cards, in submission order."""
        return [self.hand[index] for index in self.played]

    def discard_played(self) -> List[WhiteCard]:
        """Drop this round's submitted cards from the hand."""
        removed = self.hand.discard_indices(self.played)
        self.played = []
        return removed

    def clear_hand(self) -> None:
        self.hand.clear()
        self.played = []

    def __repr__(self) -> str:
        return f"Player({self.id!r}, points={self.points})"

    def __str__(self) -> str:
        return f"{self.id} | Cards: {self.hand}"
