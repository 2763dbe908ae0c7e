# src/orderflow/domain/commands.py
"""
Envelope de comando do workflow.

`timestamp` e `user_id` são metadados opacos: o core os repassa para o
trace da execução, mas não os valida nem os injeta nos eventos emitidos.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Mapping, TypeVar

from .orders import UnvalidatedOrder

T = TypeVar("T")


@dataclass(frozen=True)
class Command(Generic[T]):
    payload: T
    timestamp: datetime
    user_id: str


class PlaceOrderCommand(Command[UnvalidatedOrder]):
    """Comando de entrada de `place_order`."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, timestamp: datetime, user_id: str) -> "PlaceOrderCommand":
        return cls(payload=UnvalidatedOrder.from_dict(data), timestamp=timestamp, user_id=user_id)
