# src/orderflow/core/context.py
"""
Contexto de execução de uma invocação do workflow.

O `WorkflowContext` é criado pelo orquestrador a cada chamada de
`place_order` e descartado ao fim dela. Ele concentra os sinais de
observabilidade da execução:
    - log estruturado (`logs`)
    - trace de estados (`trace`)

Princípios:
    - Isolamento por invocação: nenhum estado é compartilhado entre execuções
    - Logs são eventos estruturados, não strings livres
    - Nenhum dado do contexto entra nos eventos de domínio emitidos

Limites explícitos:
    - Não executa estágios
    - Não carrega colaboradores
    - Não persiste logs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

from .traceability import WorkflowState, WorkflowTrace

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WorkflowContext:
    """
    Contexto de uma execução do workflow `place_order`.

    Invariantes:
        - Logs sempre incluem `run_id` e `stage`
        - Toda transição de estado passa por `transition`, que registra
          o trace e um log correspondente
    """

    run_id: str
    trace: WorkflowTrace
    clock: Clock = field(default=utc_now, repr=False)
    logs: List[Dict[str, Any]] = field(default_factory=list, init=False)

    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        entry = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": self.clock().isoformat(),
        }
        entry.update(extra)
        self.logs.append(entry)

    def transition(self, to_state: WorkflowState, **payload: Any) -> None:
        from_state = self.trace.state
        self.trace.advance(to_state, ts=self.clock(), **payload)
        self.log(
            stage=to_state.value,
            level="info",
            message=f"{from_state.value} -> {to_state.value}",
            **payload,
        )

    @property
    def state(self) -> WorkflowState:
        return self.trace.state
