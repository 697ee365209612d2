"""
Guarded finite state machine for the partycards engine.

A machine is built over an ``Enum`` of state names. Every registered state
carries four ordered lists of callables:

- ``to`` guards, asked whether the state may become active
- ``from`` guards, asked whether the active state may hand over to a target
- ``set`` hooks, run after the state becomes active
- ``unset`` hooks, run before the state stops being active

Every callable is invoked as ``hook(machine, state, kind, *args)``. Guards
veto only by returning ``False``; any non boolean result is neutral, so a
state with no opinion lets the transition through. All callables of a kind are
always run, even once one guard has vetoed, because hooks are allowed to have
side effects.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, Union

from partycards.common.errors import DuplicateStateError, UnknownStateError
from partycards.events import EventEmitter, GameEventType

logger = logging.getLogger("partycards.state")

Hook = Callable[..., Optional[bool]]
StateName = Union[Enum, str]


class TransformKind(Enum):
    """The four hook lists of a state."""

    TO = "to"
    FROM = "from"
    SET = "set"
    UNSET = "unset"


@dataclass
class StateHooks:
    """Ordered guards and hooks registered for one state."""

    hooks: Dict[TransformKind, List[Hook]] = field(
        default_factory=lambda: {kind: [] for kind in TransformKind}
    )

    def __getitem__(self, kind: TransformKind) -> List[Hook]:
        return self.hooks[kind]


def combine_guard_results(results: Iterable[Any]) -> bool:
    """AND together the boolean results, ignoring everything else."""
    allowed = True
    for result in results:
        if isinstance(result, bool):
            allowed = allowed and result
    return allowed


def _sole_state_guard(machine: "StateMachine", *_) -> bool:
    return len(machine.states) == 1


class StateMachine:
    """
    A guarded state machine over the members of one enum.

    The initial state is registered and entered during construction. Its
    ``to`` guard only passes while it is the sole registered state, so it can
    never be re-entered once the rest of the machine is built.

    Attributes:
        state_type: Enum whose members name the states
        events: Channel that transitions are reported on
        previous_state: State that was active before the last transition
    """

    def __init__(
        self,
        state_type: Type[Enum],
        initial: Enum,
        events: Optional[EventEmitter] = None,
    ):
        self.state_type = state_type
        self.events = events if events is not None else EventEmitter()
        self.previous_state: Optional[Enum] = None

        self._states: Dict[Enum, StateHooks] = {}
        self._state: Optional[Enum] = None

        self.add_state(initial).set_to_transform(initial, _sole_state_guard)
        self.set_state(initial)

    @property
    def state(self) -> Optional[Enum]:
        """The active state."""
        return self._state

    @property
    def states(self) -> List[Enum]:
        """Registered states, in registration order."""
        return list(self._states)

    def resolve(self, name: StateName) -> Optional[Enum]:
        """Map an enum member or member name onto a member of ``state_type``."""
        if isinstance(name, self.state_type):
            return name
        if isinstance(name, str):
            try:
                return self.state_type[name]
            except KeyError:
                return None
        return None

    def has_state(self, name: StateName) -> bool:
        return self.resolve(name) in self._states

    def is_in(self, *names: StateName) -> bool:
        """True if the active state is any of the given states."""
        return any(self._state is self.resolve(name) for name in names)

    def add_state(self, name: StateName) -> "StateMachine":
        """
        Register a state with empty guard and hook lists.

        Args:
            name: Member (or member name) of ``state_type``

        Returns:
            The machine, for chaining

        Raises:
            UnknownStateError: If the name is not a member of ``state_type``
            DuplicateStateError: If the state is already registered
        """
        state = self.resolve(name)
        if state is None:
            raise UnknownStateError(
                f"{name!r} is not a member of {self.state_type.__name__}"
            )
        if state in self._states:
            raise DuplicateStateError(f"State {state.name} is already registered")

        self._states[state] = StateHooks()
        self.events.emit(GameEventType.STATE_ADDED, {"state": state})
        return self

    def set_transform(
        self, kind: Union[TransformKind, str], name: StateName, hook: Hook
    ) -> "StateMachine":
        """Append a guard or hook to one of a state's lists."""
        self._hooks_for(name)[TransformKind(kind)].append(hook)
        return self

    def set_to_transform(self, name: StateName, hook: Hook) -> "StateMachine":
        return self.set_transform(TransformKind.TO, name, hook)

    def set_from_transform(self, name: StateName, hook: Hook) -> "StateMachine":
        return self.set_transform(TransformKind.FROM, name, hook)

    def set_set_transform(self, name: StateName, hook: Hook) -> "StateMachine":
        return self.set_transform(TransformKind.SET, name, hook)

    def set_unset_transform(self, name: StateName, hook: Hook) -> "StateMachine":
        return self.set_transform(TransformKind.UNSET, name, hook)

    def trigger(
        self, name: StateName, kind: Union[TransformKind, str], *args: Any
    ) -> List[Any]:
        """
        Run every callable registered for a state and kind, in order.

        Returns:
            The callables' results, one per callable
        """
        state = self.resolve(name)
        kind = TransformKind(kind)
        hooks = self._hooks_for(state)[kind]
        logger.debug("trigger %s %s %s", state.name, kind.value, args)
        return [hook(self, state, kind, *args) for hook in list(hooks)]

    def set_state(
        self, name: StateName, force_from: bool = False, force_to: bool = False
    ) -> bool:
        """
        Try to move to another state.

        Args:
            name: Target state
            force_from: Skip the active state's ``from`` guards and ignore the
                target's ``to`` guards. The ``to`` guards still run.
            force_to: Accepted for interface compatibility; it has no effect.

        Returns:
            True if the transition happened, False if it was refused or the
            target is unknown
        """
        target = self.resolve(name)
        if target is None or target not in self._states:
            logger.warning("Can't find state with name of: %s", name)
            self.events.emit(
                GameEventType.STATE_UNKNOWN, {"state": name, "current": self._state}
            )
            return False

        current = self._state

        if current is not None and not force_from:
            allowed = combine_guard_results(
                self.trigger(current, TransformKind.FROM, target)
            )
            self.events.emit(
                GameEventType.FROM_GUARD,
                {"state": current, "target": target, "allowed": allowed},
            )
            if not allowed:
                logger.debug("%s refused to hand over to %s", current.name, target.name)
                return False

        accepted = combine_guard_results(self.trigger(target, TransformKind.TO))
        self.events.emit(
            GameEventType.TO_GUARD,
            {
                "state": target,
                "current": current,
                "allowed": accepted,
                "forced": force_from,
            },
        )
        if not force_from and not accepted:
            logger.debug("%s refused to take over", target.name)
            return False

        if current is not None:
            self.trigger(current, TransformKind.UNSET, target)
            self.events.emit(
                GameEventType.STATE_LEAVING, {"state": current, "target": target}
            )

        self.previous_state = current
        self._state = target
        logger.info(
            "State %s -> %s%s",
            current.name if current is not None else None,
            target.name,
            " (forced)" if force_from else "",
        )

        self.trigger(target, TransformKind.SET, current)
        self.events.emit(
            GameEventType.STATE_ENTERING, {"state": target, "previous": current}
        )
        return True

    def _hooks_for(self, name: StateName) -> StateHooks:
        state = self.resolve(name)
        if state is None or state not in self._states:
            raise UnknownStateError(f"No state registered as {name!r}")
        return self._states[state]

    def __repr__(self) -> str:
        current = self._state.name if self._state is not None else None
        return f"StateMachine({self.state_type.__name__}, state={current})"
