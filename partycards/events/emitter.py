"""
Event system for the partycards engine.

Every game owns one EventEmitter. The state machine reports registrations,
guard outcomes and stage changes on it, and the game reports round results on
it, so chat bridges and other front ends can render a game without the engine
knowing anything about them.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Union
import threading
import logging
from enum import Enum

# Create a logger for the event system
logger = logging.getLogger("partycards.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class GameEventType(Enum):
    """
    Notifications emitted by a game and its state machine.

    The values are the wire names integrations may log or forward. Listeners
    may subscribe with a member, its name or its wire name; all three reach
    the same handlers.

    A hook that chains into another stage runs before its own stage is
    announced, so ``STATE_ENTERING`` for DEALING arrives after the one for
    the PLAYING it chains into. Read ``machine.state`` for the stage a game
    is in rather than the last entering notification.
    """

    # State machine
    STATE_ADDED = "fsm:state:added"
    STATE_UNKNOWN = "fsm:state:unknown"
    FROM_GUARD = "fsm:guard:from"
    TO_GUARD = "fsm:guard:to"
    STATE_LEAVING = "fsm:state:leaving"
    STATE_ENTERING = "fsm:state:entering"

    # Seats
    PLAYER_JOINED = "game:player:joined"
    PLAYER_LEFT = "game:player:left"
    HOST_CHANGED = "game:host:changed"

    # Rounds
    ROUND_DEALT = "game:round:dealt"
    PLAYER_PLAYED_ALL = "game:player:played-all-cards"
    TSAR_CHOICE = "game:tsar:choice"
    GAME_WINNER = "game:game-winner"


def event_key(event_type: Union[str, Enum]) -> str:
    """
    Map an event type onto the key its listeners are stored under.

    Enum members map to their name, game wire names to their member's name,
    and any other string is used as is.
    """
    if isinstance(event_type, Enum):
        return event_type.name
    try:
        return GameEventType(event_type).name
    except ValueError:
        return event_type


class EventEmitter:
    """
    Subscribable notification channel.

    Features:
    - Event subscription with priorities
    - Once-only subscriptions
    - Subscribing to all events with event type filtering in handler
    - Handlers that raise are logged and never break the emitting call
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        event_type = event_key(event_type)

        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            handlers = self._listeners[event_type]

            # Higher priorities run first, ties keep subscription order
            for i, existing in enumerate(handlers):
                if existing["priority"] < priority.value:
                    handlers.insert(i, handler)
                    break
            else:
                handlers.append(handler)

        def unsubscribe():
            with self._listener_lock:
                handlers = self._listeners[event_type]
                for i, existing in enumerate(handlers):
                    if existing["callback"] == callback:
                        handlers.pop(i)
                        break

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                if unsubscribe_ref and callable(unsubscribe_ref[0]):
                    unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            for i, existing in enumerate(self._global_listeners):
                if existing["priority"] < priority.value:
                    self._global_listeners.insert(i, handler)
                    break
            else:
                self._global_listeners.append(handler)

        def unsubscribe():
            with self._listener_lock:
                for i, existing in enumerate(self._global_listeners):
                    if existing["callback"] == callback:
                        self._global_listeners.pop(i)
                        break

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        event_type = event_key(event_type)

        handlers_to_call = []

        with self._listener_lock:
            for handler in self._listeners.get(event_type, []):
                handlers_to_call.append((handler["callback"], data))

            for handler in self._global_listeners:
                handlers_to_call.append((handler["callback"], (event_type, data)))

        # Call handlers outside of the lock so they may subscribe or emit
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def listener_count(self, event_type: Union[str, Enum]) -> int:
        """Number of handlers subscribed to one event type, ignoring on_any."""
        event_type = event_key(event_type)
        with self._listener_lock:
            return len(self._listeners.get(event_type, []))

    def remove_all_listeners(
        self, event_type: Union[str, Enum, None] = None
    ) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                event_type = event_key(event_type)
                self._listeners[event_type].clear()
