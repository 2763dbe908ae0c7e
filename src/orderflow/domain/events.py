# src/orderflow/domain/events.py
"""
Eventos emitidos pelo workflow `place_order`.

Ordem de emissão (contrato, não detalhe de implementação):
    1. OrderPlaced              → o pedido confirmado e precificado
    2. BillableOrderPlaced      → subconjunto de cobrança (apenas se total > 0)
    3. OrderAcknowledgmentSent  → marcador com destino e confirmação renderizada

Eventos são imutáveis e não carregam relógio de parede: dois pedidos
idênticos produzem eventos idênticos.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Union

from .orders import ConfirmedAddress, PricedOrder
from .simple_types import EmailAddress, OrderId


@dataclass(frozen=True)
class OrderPlaced:
    order: PricedOrder

    @property
    def order_id(self) -> OrderId:
        return self.order.order_id

    @property
    def amount_to_bill(self) -> Decimal:
        return self.order.amount_to_bill


@dataclass(frozen=True)
class BillableOrderPlaced:
    order_id: OrderId
    billing_address: ConfirmedAddress
    amount_to_bill: Decimal


@dataclass(frozen=True)
class OrderAcknowledgmentSent:
    """Marcador de confirmação; a entrega real do email é externa ao core."""

    order_id: OrderId
    email_address: EmailAddress
    sender: str
    subject: str
    letter: str


PlaceOrderEvent = Union[OrderPlaced, BillableOrderPlaced, OrderAcknowledgmentSent]


def _priced_order_to_dict(order: PricedOrder) -> Dict[str, Any]:
    customer = order.customer_info
    return {
        "order_id": str(order.order_id),
        "customer_info": {
            "first_name": str(customer.name.first_name),
            "last_name": str(customer.name.last_name),
            "email_address": str(customer.email_address),
        },
        "shipping_address": order.shipping_address.to_dict(),
        "billing_address": order.billing_address.to_dict(),
        "lines": [
            {
                "order_line_id": str(line.order_line_id),
                "product_code": str(line.product_code),
                "quantity": str(line.quantity),
                "unit_price": str(line.unit_price),
                "line_price": str(line.line_price),
            }
            for line in order.lines
        ],
        "amount_to_bill": str(order.amount_to_bill),
    }


def event_to_dict(event: PlaceOrderEvent) -> Dict[str, Any]:
    """
    Representação serializável de um evento, para transporte externo.

    Valores decimais são serializados como string para preservar a
    precisão exata.

    Raises:
        TypeError: Se `event` não for um `PlaceOrderEvent`.
    """
    if isinstance(event, OrderPlaced):
        return {"type": "OrderPlaced", "order": _priced_order_to_dict(event.order)}
    if isinstance(event, BillableOrderPlaced):
        return {
            "type": "BillableOrderPlaced",
            "order_id": str(event.order_id),
            "billing_address": event.billing_address.to_dict(),
            "amount_to_bill": str(event.amount_to_bill),
        }
    if isinstance(event, OrderAcknowledgmentSent):
        return {
            "type": "OrderAcknowledgmentSent",
            "order_id": str(event.order_id),
            "email_address": str(event.email_address),
            "sender": event.sender,
            "subject": event.subject,
            "letter": event.letter,
        }
    raise TypeError(f"not a place-order event: {type(event).__name__}")
