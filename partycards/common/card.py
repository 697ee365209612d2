"""
This module defines the `WhiteCard` and `BlackCard` classes, the two kinds of
card in a party deck.

- `WhiteCard`: an answer card holding a single phrase.

- `BlackCard`: a prompt card. Its text is a sequence of tokens, each either a
literal string or an integer slot marker that a white card fills in. Slot
markers do not need to be contiguous or unique; a marker that appears twice is
filled by the same white card both times.

Cards stored in a collection are templates. Everything handed out to players
is a clone, so a template is never mutated by a game.

This module is part of the `partycards` package, an engine for tsar judged
party card games.
"""

from typing import List, Sequence, Union

from partycards.common.errors import InvalidCardError, NotEnoughCardsError

Token = Union[str, int]

SLOT_PLACEHOLDER = "<slot {}>"


def is_slot(token) -> bool:
    """Return True if a black card token is a slot marker rather than text."""
    return isinstance(token, int) and not isinstance(token, bool)


class WhiteCard:
    """
    An answer card.

    >>> card = WhiteCard("cheese")
    >>> print(card)
    cheese
    """

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"White card text must be a string, got {text!r}")
        self.text = text

    def clone(self) -> "WhiteCard":
        return WhiteCard(self.text)

    def get_display(self) -> str:
        return self.text

    @classmethod
    def create(cls, data: str) -> "WhiteCard":
        return cls(data)

    def __repr__(self) -> str:
        return f"WhiteCard({self.text!r})"

    def __str__(self) -> str:
        return self.text


class BlackCard:
    """
    A prompt card made of literal text and numbered slots.

    >>> card = BlackCard(["I like ", 0, " with ", 1])
    >>> card.get_fill_count()
    2
    >>> card.get_display()
    'I like <slot 0> with <slot 1>'
    >>> card.get_display(True, WhiteCard("cheese"), WhiteCard("crackers"))
    'I like cheese with crackers'
    """

    def __init__(self, tokens: Sequence[Token]):
        """
        Initialize a BlackCard instance.

        :param tokens: Literal strings and non-negative integer slot markers
        :raises TypeError: If a token is neither a string nor an integer
        :raises ValueError: If a slot marker is negative
        """
        for token in tokens:
            if is_slot(token):
                if token < 0:
                    raise ValueError(f"Slot markers must not be negative: {token}")
            elif not isinstance(token, str):
                raise TypeError(f"Invalid black card token: {token!r}")

        self.tokens: List[Token] = list(tokens)

    def clone(self) -> "BlackCard":
        return BlackCard(self.tokens)

    def get_fill_spots(self) -> List[int]:
        """Distinct slot markers, in the order they first appear."""
        spots = []
        for token in self.tokens:
            if is_slot(token) and token not in spots:
                spots.append(token)
        return spots

    def get_fill_count(self) -> int:
        """Number of white cards needed to complete this card."""
        return len(self.get_fill_spots())

    def get_display(self, fill_in: bool = False, *cards: WhiteCard) -> str:
        """
        Render the card.

        In template mode every slot is shown as a numbered placeholder. In fill
        mode slot ``n`` is replaced by the text of ``cards[n]``, so callers
        must order the cards by slot number.

        :param fill_in: Whether to substitute the supplied cards into the slots
        :param cards: White cards, indexed by slot marker
        :return: The rendered text
        :raises NotEnoughCardsError: If a slot has no card at its position
        :raises InvalidCardError: If a slot's position holds a non white card
        """
        parts = []
        for token in self.tokens:
            if not is_slot(token):
                parts.append(token)
            elif not fill_in:
                parts.append(SLOT_PLACEHOLDER.format(token))
            else:
                if token > len(cards) - 1:
                    raise NotEnoughCardsError(
                        f"Slot {token} needs at least {token + 1} cards, "
                        f"got {len(cards)}"
                    )
                card = cards[token]
                if not isinstance(card, WhiteCard):
                    raise InvalidCardError(
                        f"Slot {token} was given {card!r}, not a white card"
                    )
                parts.append(card.get_display())
        return "".join(parts)

    @classmethod
    def create(cls, data: Sequence[Token]) -> "BlackCard":
        return cls(data)

    def __repr__(self) -> str:
        return f"BlackCard({self.tokens!r})"

    def __str__(self) -> str:
        return self.get_display()
