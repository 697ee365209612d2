"""
Exceptions raised by the partycards engine.

Only broken model invariants are raised. Expected failures during normal play
(wrong stage, wrong actor, bad index, seat limits) are reported through an
``Outcome`` record by the game itself and never reach this module.
"""


class PartyCardsError(Exception):
    """Base exception for all partycards errors."""

    pass


class DuplicateStateError(PartyCardsError):
    """Raised when a state is registered on a machine twice."""

    pass


class UnknownStateError(PartyCardsError, ValueError):
    """Raised when hooks are attached to a state the machine does not know."""

    pass


class IllegalTransitionError(PartyCardsError):
    """Raised when a terminal state is forced to hand over to another state."""

    pass


class NotEnoughCardsError(PartyCardsError, IndexError):
    """Raised when a black card is filled in with fewer cards than it has slots."""

    pass


class InvalidCardError(PartyCardsError, TypeError):
    """Raised when something other than a white card fills a black card slot."""

    pass
