"""
This module contains the `Hand` class, the ordered white cards a player holds.

Cards in a hand are addressed by position: a player's submissions for a round
are positions into their hand, so the order of a hand only changes when a
round's played cards are discarded or the hand is refilled.

Lookups compare cards by identity. Two clones of the same template are still
two different cards.
"""

from typing import Iterable, Iterator, List

from partycards.common.card import WhiteCard


class Hand:
    """
    An ordered collection of white cards.

    >>> hand = Hand()
    >>> hand.add_card(WhiteCard("cheese"))
    >>> len(hand)
    1
    """

    def __init__(self, cards: Iterable[WhiteCard] = ()):
        self._cards: List[WhiteCard] = list(cards)

    @property
    def cards(self) -> List[WhiteCard]:
        """Returns the cards in the hand."""
        return self._cards

    def add_card(self, card: WhiteCard) -> None:
        """
        Adds a card to the end of the hand.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def remove_card(self, card: WhiteCard) -> None:
        """
        Removes a card from the hand.

        Args:
            card: The card to remove.

        Raises:
            ValueError: If the card is not found in the hand.
        """
        index = self.index_of(card)
        if index == -1:
            raise ValueError(f"Card {card} not found in hand.")
        del self._cards[index]

    def index_of(self, card: WhiteCard) -> int:
        """Position of this exact card object in the hand, or -1."""
        for i, held in enumerate(self._cards):
            if held is card:
                return i
        return -1

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self._cards)

    def discard_indices(self, indices: Iterable[int]) -> List[WhiteCard]:
        """
        Remove the cards at the given positions.

        Args:
            indices: Positions to remove. Duplicates and out of range values
                are ignored.

        Returns:
            The removed cards, in hand order.
        """
        doomed = sorted({i for i in indices if self.has_index(i)})
        removed = [self._cards[i] for i in doomed]
        for i in reversed(doomed):
            del self._cards[i]
        return removed

    def clear(self) -> None:
        self._cards = []

    def __len__(self) -> int:
        return len(self._cards)

    def __getitem__(self, index: int) -> WhiteCard:
        return self._cards[index]

    def __iter__(self) -> Iterator[WhiteCard]:
        return iter(self._cards)

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand([WhiteCard(...), ...])".
        """
        return f"Hand({self._cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "text, text, ...".
        """
        return ", ".join(str(card) for card in self._cards)
