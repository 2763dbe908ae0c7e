"""
orderflow: workflow tipado de colocação de pedidos.

Pipeline em processo que leva um pedido não confiável por estágios
explícitos de validação e precificação e produz uma lista ordenada de
eventos de domínio ou um erro terminal (`PlaceOrderError`).

Uso típico:

    from orderflow import build_place_order, PlaceOrderCommand

    place_order = build_place_order(
        product_checker=..., address_checker=..., price_fetcher=...,
    )
    result = await place_order(PlaceOrderCommand.from_dict(payload, timestamp=ts, user_id="u1"))
"""

from orderflow.core.errors import (
    PlaceOrderError,
    PlaceOrderPricingError,
    PlaceOrderValidationError,
)
from orderflow.core.result import Err, NonEmptyList, Ok, Result
from orderflow.domain.commands import Command, PlaceOrderCommand
from orderflow.domain.events import (
    BillableOrderPlaced,
    OrderAcknowledgmentSent,
    OrderPlaced,
    PlaceOrderEvent,
    event_to_dict,
)
from orderflow.domain.orders import UnvalidatedOrder
from orderflow.workflow import (
    PlaceOrder,
    build_place_order,
    build_place_order_from_config,
)

__version__ = "0.1.0"

__all__ = [
    "BillableOrderPlaced",
    "Command",
    "Err",
    "NonEmptyList",
    "Ok",
    "OrderAcknowledgmentSent",
    "OrderPlaced",
    "PlaceOrder",
    "PlaceOrderCommand",
    "PlaceOrderError",
    "PlaceOrderEvent",
    "PlaceOrderPricingError",
    "PlaceOrderValidationError",
    "Result",
    "UnvalidatedOrder",
    "build_place_order",
    "build_place_order_from_config",
    "event_to_dict",
]
