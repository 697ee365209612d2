"""
Guarded state machine for the partycards engine.
"""

from partycards.state.machine import (
    StateMachine,
    StateHooks,
    TransformKind,
    combine_guard_results,
)

__all__ = [
    "StateMachine",
    "StateHooks",
    "TransformKind",
    "combine_guard_results",
]
