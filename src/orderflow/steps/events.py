# src/orderflow/steps/events.py
"""
Projeção de eventos: PricedOrder → eventos de saída.

Função pura e sem modo de falha: a entrada já é um pedido válido e
precificado. A ordem retornada é contrato:

    OrderPlaced → BillableOrderPlaced (apenas se total > 0) → OrderAcknowledgmentSent
"""

from __future__ import annotations

from typing import List, Tuple

from orderflow.core.config.settings import AcknowledgmentSettings
from orderflow.domain.events import (
    BillableOrderPlaced,
    OrderAcknowledgmentSent,
    OrderPlaced,
    PlaceOrderEvent,
)
from orderflow.domain.orders import PricedOrder

from .acknowledge import render_acknowledgment, render_subject

_DEFAULT_ACKNOWLEDGMENT = AcknowledgmentSettings()


def to_events(
    order: PricedOrder,
    *,
    acknowledgment: AcknowledgmentSettings = _DEFAULT_ACKNOWLEDGMENT,
) -> Tuple[PlaceOrderEvent, ...]:
    if not isinstance(order, PricedOrder):
        raise TypeError(f"to_events expects PricedOrder, got {type(order).__name__}")

    events: List[PlaceOrderEvent] = [OrderPlaced(order=order)]
    if order.amount_to_bill > 0:
        events.append(BillableOrderPlaced(
            order_id=order.order_id,
            billing_address=order.billing_address,
            amount_to_bill=order.amount_to_bill,
        ))
    events.append(OrderAcknowledgmentSent(
        order_id=order.order_id,
        email_address=order.customer_info.email_address,
        sender=acknowledgment.sender,
        subject=render_subject(order, acknowledgment),
        letter=render_acknowledgment(order, acknowledgment),
    ))
    return tuple(events)
