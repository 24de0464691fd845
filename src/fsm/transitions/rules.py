"""
Regras de transição válidas entre estados do pipeline de email.

Grafo fixo: qualquer transição fora do mapa é rejeitada pela máquina.
"""

from fsm.states.pipeline import TERMINAL_STATES, PipelineState

TransitionMap = dict[PipelineState, frozenset[PipelineState]]

VALID_TRANSITIONS: TransitionMap = {
    PipelineState.RECEIVED: frozenset({PipelineState.RESOLVING}),
    PipelineState.RESOLVING: frozenset({
        PipelineState.REJECTED,
        PipelineState.CLASSIFIED,
    }),
    PipelineState.CLASSIFIED: frozenset({
        PipelineState.RESET_PATH,
        PipelineState.FORWARD_PATH,
    }),
    # Sessão ausente no reset encerra sem resposta; no forward vira desculpas
    PipelineState.RESET_PATH: frozenset({
        PipelineState.DISPATCHING,
        PipelineState.DONE,
    }),
    PipelineState.FORWARD_PATH: frozenset({
        PipelineState.DISPATCHING,
        PipelineState.APOLOGIZING,
    }),
    PipelineState.DISPATCHING: frozenset({
        PipelineState.REPLYING,
        PipelineState.SUPPRESSING,
        PipelineState.APOLOGIZING,
        PipelineState.DONE,
    }),
    PipelineState.REPLYING: frozenset({
        PipelineState.APOLOGIZING,
        PipelineState.DONE,
    }),
    PipelineState.SUPPRESSING: frozenset({PipelineState.DONE}),
    PipelineState.APOLOGIZING: frozenset({PipelineState.DONE}),

    PipelineState.REJECTED: frozenset(),
    PipelineState.DONE: frozenset(),
}


def get_valid_targets(state: PipelineState) -> frozenset[PipelineState]:
    """Retorna os estados de destino válidos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: PipelineState, to_state: PipelineState) -> bool:
    """
    Verifica se uma transição é permitida pelo grafo.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino

    Returns:
        True se a transição é permitida, False caso contrário
    """
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in PipelineState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    # Todo estado não-terminal precisa alcançar algum terminal
    for state in PipelineState:
        if state not in TERMINAL_STATES and not _reaches_terminal(state):
            errors.append(f"Estado {state.name} não alcança estado terminal")

    return errors


def _reaches_terminal(start: PipelineState) -> bool:
    seen: set[PipelineState] = set()
    pending = [start]
    while pending:
        state = pending.pop()
        if state in TERMINAL_STATES:
            return True
        if state in seen:
            continue
        seen.add(state)
        pending.extend(get_valid_targets(state))
    return False
