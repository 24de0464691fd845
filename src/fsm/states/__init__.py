"""
Exports públicos do módulo fsm/states.

Estados do pipeline de email.
"""

from fsm.states.pipeline import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    PipelineState,
    is_terminal,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "PipelineState",
    "is_terminal",
]
