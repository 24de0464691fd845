"""
Máquina de estados de um email em processamento.

Uma instância por entrega do webhook; mantém o estado atual e o
histórico de transições para auditoria em log.
"""

from typing import Any

from fsm.states.pipeline import (
    DEFAULT_INITIAL_STATE,
    PipelineState,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class PipelineStateMachine:
    """
    FSM determinística do pipeline de email.

    Attributes:
        current_state: Estado atual da máquina
        history: Histórico de transições realizadas
    """

    __slots__ = ("_current_state", "_history", "_message_id")

    def __init__(
        self,
        initial_state: PipelineState | None = None,
        message_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._message_id = message_id

    @property
    def current_state(self) -> PipelineState:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def message_id(self) -> str:
        return self._message_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    def can_transition_to(self, target: PipelineState) -> bool:
        return is_transition_valid(self._current_state, target)

    def get_valid_targets(self) -> frozenset[PipelineState]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: PipelineState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do evento (ex: 'sender_resolved')
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual (seguro para logs)."""
        return {
            "message_id": self._message_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        return [t.to_log_dict() for t in self._history]

    def path(self) -> list[str]:
        """Sequência de estados visitados, do inicial ao atual."""
        if not self._history:
            return [self._current_state.name]
        return [self._history[0].from_state.name] + [
            t.to_state.name for t in self._history
        ]


def create_pipeline_fsm(message_id: str = "") -> PipelineStateMachine:
    """Factory da FSM para uma entrega."""
    return PipelineStateMachine(message_id=message_id)
