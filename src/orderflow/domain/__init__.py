"""
Modelo de domínio do orderflow.

Contém os tipos do pedido por estágio, os tipos simples restritos, os
eventos emitidos, o envelope de comando e os contratos dos colaboradores.
Nenhum módulo deste pacote realiza I/O.
"""

from .collaborators import AddressChecker, ProductCodeChecker, ProductPriceFetcher
from .commands import Command, PlaceOrderCommand
from .events import (
    BillableOrderPlaced,
    OrderAcknowledgmentSent,
    OrderPlaced,
    PlaceOrderEvent,
    event_to_dict,
)
from .orders import (
    Address,
    ConfirmedAddress,
    CustomerInfo,
    OrderStage,
    PersonalName,
    PricedOrder,
    PricedOrderLine,
    UnvalidatedAddress,
    UnvalidatedCustomerInfo,
    UnvalidatedOrder,
    UnvalidatedOrderLine,
    ValidatedOrder,
    ValidatedOrderLine,
    stage_of,
)
from .simple_types import (
    EmailAddress,
    OrderId,
    OrderLineId,
    Price,
    ProductCode,
    Quantity,
    String50,
    ZipCode,
)

__all__ = [
    "Address",
    "AddressChecker",
    "BillableOrderPlaced",
    "Command",
    "ConfirmedAddress",
    "CustomerInfo",
    "EmailAddress",
    "OrderAcknowledgmentSent",
    "OrderId",
    "OrderLineId",
    "OrderPlaced",
    "OrderStage",
    "PersonalName",
    "PlaceOrderCommand",
    "PlaceOrderEvent",
    "Price",
    "PricedOrder",
    "PricedOrderLine",
    "ProductCode",
    "ProductCodeChecker",
    "ProductPriceFetcher",
    "Quantity",
    "String50",
    "UnvalidatedAddress",
    "UnvalidatedCustomerInfo",
    "UnvalidatedOrder",
    "UnvalidatedOrderLine",
    "ValidatedOrder",
    "ValidatedOrderLine",
    "ZipCode",
    "event_to_dict",
    "stage_of",
]
