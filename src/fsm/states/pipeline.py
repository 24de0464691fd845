"""
Estados do pipeline de processamento de um email recebido.

Cada entrega do webhook percorre esta FSM uma única vez:
RECEIVED → RESOLVING → (REJECTED | CLASSIFIED) → (RESET_PATH | FORWARD_PATH)
→ DISPATCHING → (REPLYING | SUPPRESSING | APOLOGIZING) → DONE.
"""

from enum import StrEnum


class PipelineState(StrEnum):
    """
    Estados canônicos do pipeline de email.

    Estados não-terminais:
        - RECEIVED: Mensagem normalizada, ainda não processada
        - RESOLVING: Resolvendo remetente para identidade
        - CLASSIFIED: Identidade conhecida, comando classificado
        - RESET_PATH / FORWARD_PATH: Caminho escolhido pelo comando
        - DISPATCHING: Aguardando o runtime de agente
        - REPLYING: Enviando resposta do agente ou confirmação de reset
        - SUPPRESSING: Agente pediu para não responder
        - APOLOGIZING: Enviando pedido de desculpas após falha

    Estados terminais:
        - REJECTED: Remetente desconhecido, mensagem descartada
        - DONE: Processamento encerrado
    """

    RECEIVED = "RECEIVED"
    RESOLVING = "RESOLVING"
    CLASSIFIED = "CLASSIFIED"
    RESET_PATH = "RESET_PATH"
    FORWARD_PATH = "FORWARD_PATH"
    DISPATCHING = "DISPATCHING"
    REPLYING = "REPLYING"
    SUPPRESSING = "SUPPRESSING"
    APOLOGIZING = "APOLOGIZING"

    REJECTED = "REJECTED"
    DONE = "DONE"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[PipelineState] = frozenset({
    PipelineState.REJECTED,
    PipelineState.DONE,
})

DEFAULT_INITIAL_STATE: PipelineState = PipelineState.RECEIVED


def is_terminal(state: PipelineState) -> bool:
    """Verifica se o estado encerra o pipeline."""
    return state in TERMINAL_STATES
