"""
Exports públicos do módulo fsm/manager.

Máquina de estados do pipeline de email.
"""

from fsm.manager.machine import (
    PipelineStateMachine,
    create_pipeline_fsm,
)

__all__ = [
    "PipelineStateMachine",
    "create_pipeline_fsm",
]
