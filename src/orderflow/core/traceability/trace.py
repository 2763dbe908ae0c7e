# src/orderflow/core/traceability/trace.py
"""
Trace v1: sequência de estados de uma execução do workflow.

Grafo de transições:

    RECEIVED → VALIDATING → VALIDATED → PRICING → PRICED → EVENTS_EMITTED
                   ↓                       ↓
           VALIDATION_FAILED         PRICING_FAILED

    VALIDATING / PRICING → CANCELLED (invocação abandonada pelo chamador)

Princípios:
    - Nenhum estado é pulado; cada transição é registrada explicitamente
    - A ordem do event log reflete a ordem real de execução
    - Estados terminais não aceitam novas transições

Limites explícitos:
    - Não decide políticas de execução
    - Não carrega dados do pedido, apenas metadados da execução
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class WorkflowState(str, Enum):
    """Estados do workflow `place_order`."""

    RECEIVED = "received"
    VALIDATING = "validating"
    VALIDATION_FAILED = "validation_failed"
    VALIDATED = "validated"
    PRICING = "pricing"
    PRICING_FAILED = "pricing_failed"
    PRICED = "priced"
    EVENTS_EMITTED = "events_emitted"
    CANCELLED = "cancelled"


TRANSITIONS: Dict[WorkflowState, FrozenSet[WorkflowState]] = {
    WorkflowState.RECEIVED: frozenset({WorkflowState.VALIDATING}),
    WorkflowState.VALIDATING: frozenset({
        WorkflowState.VALIDATED,
        WorkflowState.VALIDATION_FAILED,
        WorkflowState.CANCELLED,
    }),
    WorkflowState.VALIDATED: frozenset({WorkflowState.PRICING}),
    WorkflowState.PRICING: frozenset({
        WorkflowState.PRICED,
        WorkflowState.PRICING_FAILED,
        WorkflowState.CANCELLED,
    }),
    WorkflowState.PRICED: frozenset({WorkflowState.EVENTS_EMITTED}),
    WorkflowState.VALIDATION_FAILED: frozenset(),
    WorkflowState.PRICING_FAILED: frozenset(),
    WorkflowState.EVENTS_EMITTED: frozenset(),
    WorkflowState.CANCELLED: frozenset(),
}

TERMINAL_STATES: FrozenSet[WorkflowState] = frozenset(
    state for state, targets in TRANSITIONS.items() if not targets
)


class InvalidStateTransitionError(ValueError):
    """Transição fora do grafo do workflow."""

    def __init__(self, from_state: WorkflowState, to_state: WorkflowState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Transição inválida: '{from_state.value}' → '{to_state.value}'"
        )


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


@dataclass
class WorkflowTrace:
    """
    Registro ordenado de uma execução do workflow.

    Campos:
        - run: metadados da execução (run_id, started_at, user_id, command_timestamp)
        - inputs: identidade da configuração usada (config_hash)
        - state: estado corrente
        - events: event log de transições, na ordem em que ocorreram
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    state: WorkflowState = WorkflowState.RECEIVED
    events: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def states(self) -> List[WorkflowState]:
        """Sequência completa de estados percorridos, começando em RECEIVED."""
        return [WorkflowState.RECEIVED] + [WorkflowState(e["to"]) for e in self.events]

    def advance(self, to_state: WorkflowState, *, ts: datetime, **payload: Any) -> None:
        """
        Registra a transição do estado corrente para `to_state`.

        Raises:
            InvalidStateTransitionError: Se a transição não pertencer ao grafo.
        """
        if to_state not in TRANSITIONS[self.state]:
            raise InvalidStateTransitionError(self.state, to_state)

        event: Dict[str, Any] = {
            "from": self.state.value,
            "to": to_state.value,
            "ts": _iso(ts),
        }
        if payload:
            event["payload"] = dict(payload)
        self.events.append(event)
        self.state = to_state

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "state": self.state.value,
            "events": [dict(e) for e in self.events],
        }


def create_trace(
    *,
    run_id: str,
    started_at: datetime,
    user_id: str,
    command_timestamp: datetime,
    config_hash: Optional[str] = None,
) -> WorkflowTrace:
    """
    Cria o trace inicial de uma execução, no estado RECEIVED.

    O event log inicia vazio; só é preenchido por chamadas a `advance`.
    """
    return WorkflowTrace(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "user_id": user_id,
            "command_timestamp": _iso(command_timestamp),
        },
        inputs={"config_hash": config_hash},
    )
