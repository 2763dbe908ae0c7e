"""
orderflow: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do orderflow.

Objetivo:
- Sinalizar falhas de programação ou de montagem (wiring) do workflow
- Nunca representar falhas de domínio: pedido inválido, endereço inexistente
  ou preço ausente são valores `Err`, não exceções

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
- Mensagem curta e humana
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class OrderflowException(Exception):
    """Base class para exceções internas do orderflow."""

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class StageConstructionError(OrderflowException, TypeError):
    """Tentativa de criar um estado de pedido fora do estágio que o produz."""


@dataclass(frozen=True)
class CollaboratorContractError(OrderflowException):
    """Colaborador retornou um valor fora do contrato (ex.: não é `Result`)."""


@dataclass(frozen=True)
class WorkflowConfigurationError(OrderflowException):
    """Workflow montado com colaboradores ausentes ou inválidos."""
