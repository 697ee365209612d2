"""
Event system for the partycards engine.

This package provides the notification channel games report on.
"""

from partycards.events.emitter import (
    EventEmitter,
    EventPriority,
    GameEventType,
    event_key,
)

__all__ = ["EventEmitter", "EventPriority", "GameEventType", "event_key"]
