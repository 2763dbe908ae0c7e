"""
Pacote de rastreabilidade do orderflow.

Registra, por invocação do workflow, a sequência de estados percorrida
pelo pedido (`Received → Validating → ... → EventsEmitted`) em um trace
ordenado e serializável.

API pública exposta:
    - WorkflowState               → estados do workflow
    - TRANSITIONS / TERMINAL_STATES
    - InvalidStateTransitionError → transição fora do grafo
    - WorkflowTrace               → trace ordenado de uma execução
    - create_trace                → criação explícita do trace

Limites explícitos:
    - Não persiste traces
    - Não executa estágios
"""

from .trace import (
    TERMINAL_STATES,
    TRANSITIONS,
    InvalidStateTransitionError,
    WorkflowState,
    WorkflowTrace,
    create_trace,
)

__all__ = [
    "TERMINAL_STATES",
    "TRANSITIONS",
    "InvalidStateTransitionError",
    "WorkflowState",
    "WorkflowTrace",
    "create_trace",
]
