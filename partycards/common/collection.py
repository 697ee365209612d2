"""
This module contains the CardCollection class, a named bag of white and black
card templates that games draw from.

Collections can be merged into one another. The receiving collection remembers
every collection merged into it, so a merge can later be undone card for card.

>>> col = CardCollection.create({"name": "Base", "white": ["cheese"], "black": [["I like ", 0]]})
>>> col.size
2
"""

import logging
from typing import Any, Dict, List, Optional, Union

import numpy as np

from partycards.common.card import BlackCard, WhiteCard
from partycards.common.util import random_index

logger = logging.getLogger("partycards.common")

UNNAMED = "<Unnamed>"


class CardCollection:
    """
    A bag of card templates.

    :param white: White card templates
    :param black: Black card templates
    :param name: Display name of the collection
    """

    def __init__(
        self,
        white: Optional[List[WhiteCard]] = None,
        black: Optional[List[BlackCard]] = None,
        name: str = UNNAMED,
    ):
        self.name = name
        self.white: List[WhiteCard] = list(white) if isinstance(white, list) else []
        self.black: List[BlackCard] = list(black) if isinstance(black, list) else []
        self.sources: List["CardCollection"] = []

    def get_random_white_card(
        self, clone: bool = True, rng: Optional[np.random.Generator] = None
    ) -> Optional[WhiteCard]:
        return self.get_random_card("white", clone, rng)

    def get_random_black_card(
        self, clone: bool = True, rng: Optional[np.random.Generator] = None
    ) -> Optional[BlackCard]:
        return self.get_random_card("black", clone, rng)

    def get_random_card(
        self,
        color: str = "white",
        clone: bool = True,
        rng: Optional[np.random.Generator] = None,
    ) -> Optional[Union[WhiteCard, BlackCard]]:
        """
        Draw a card uniformly at random. The collection is not depleted.

        :param color: "white" or "black"
        :param clone: Return a copy instead of the stored template
        :param rng: Generator to draw with
        :return: A card, or None if there are no cards of that color
        """
        if color == "white":
            pool = self.white
        elif color == "black":
            pool = self.black
        else:
            raise ValueError(f"Unknown card color: {color!r}")

        if not pool:
            return None

        card = pool[random_index(len(pool), rng)]
        return card.clone() if clone else card

    def clone(self) -> "CardCollection":
        """Deep copy of the cards; the merge history is copied by reference."""
        col = CardCollection(
            [card.clone() for card in self.white],
            [card.clone() for card in self.black],
            self.name,
        )
        col.sources = list(self.sources)
        return col

    def has_merged(self, col: "CardCollection") -> bool:
        return any(source is col for source in self.sources)

    def merge(self, col: "CardCollection") -> bool:
        """
        Append another collection's templates to this one.

        :param col: Collection to merge in
        :return: False if that collection was merged before, True otherwise
        """
        if col is self or self.has_merged(col):
            return False

        self.white.extend(col.white)
        self.black.extend(col.black)
        self.sources.append(col)

        logger.debug(
            "Merged %r into %r (%d white, %d black)",
            col.name,
            self.name,
            len(col.white),
            len(col.black),
        )
        return True

    def unmerge(self, col: "CardCollection", force: bool = False) -> bool:
        """
        Remove exactly the templates another collection contributed.

        Cards are matched by identity, so templates that merely share text are
        left alone. Runs in time proportional to both collections.

        :param col: A previously merged collection
        :param force: Remove that collection's cards even if it was never merged
        :return: False if the collection was not merged and force is not set
        """
        if not self.has_merged(col) and not force:
            return False

        white_ids = {id(card) for card in col.white}
        black_ids = {id(card) for card in col.black}
        self.white = [card for card in self.white if id(card) not in white_ids]
        self.black = [card for card in self.black if id(card) not in black_ids]
        self.sources = [source for source in self.sources if source is not col]

        logger.debug("Unmerged %r from %r", col.name, self.name)
        return True

    @classmethod
    def create(cls, data: Dict[str, Any]) -> "CardCollection":
        """
        Build a collection from the deck import format.

        :param data: ``{"name": str, "white": [str], "black": [[str | int]]}``.
                     Missing or malformed keys are skipped.
        """
        col = cls()

        if isinstance(data.get("black"), list):
            col.black.extend(BlackCard.create(tokens) for tokens in data["black"])

        if isinstance(data.get("white"), list):
            col.white.extend(WhiteCard.create(text) for text in data["white"])

        if isinstance(data.get("name"), str):
            col.name = data["name"]

        return col

    def to_dict(self) -> Dict[str, Any]:
        """Export in the deck import format."""
        return {
            "name": self.name,
            "white": [card.text for card in self.white],
            "black": [list(card.tokens) for card in self.black],
        }

    @property
    def size(self) -> int:
        return len(self.white) + len(self.black)

    def is_empty(self) -> bool:
        return self.size == 0

    def __repr__(self) -> str:
        return (
            f"CardCollection(name={self.name!r}, white={len(self.white)}, "
            f"black={len(self.black)})"
        )

    def __str__(self) -> str:
        return (
            f"Collection '{self.name}' of {len(self.white)} white "
            f"and {len(self.black)} black cards"
        )
