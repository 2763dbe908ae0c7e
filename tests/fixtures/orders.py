# tests/fixtures/orders.py
"""Payloads e comandos de pedido determinísticos para testes."""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from orderflow.domain.commands import PlaceOrderCommand
from orderflow.domain.orders import UnvalidatedOrder

COMMAND_TS = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

BASE_PAYLOAD: Dict[str, Any] = {
    "order_id": "O1",
    "customer_info": {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email_address": "ada@example.com",
    },
    "shipping_address": {
        "address_line1": "1 Main Street",
        "city": "Springfield",
        "zip_code": "12345",
    },
    "lines": [
        {"product_code": "P1", "quantity": 2},
    ],
}


def order_payload(**overrides: Any) -> Dict[str, Any]:
    payload = copy.deepcopy(BASE_PAYLOAD)
    payload.update(copy.deepcopy(overrides))
    return payload


def unvalidated(**overrides: Any) -> UnvalidatedOrder:
    return UnvalidatedOrder.from_dict(order_payload(**overrides))


def command(payload: Optional[Dict[str, Any]] = None, *, user_id: str = "user-1") -> PlaceOrderCommand:
    return PlaceOrderCommand.from_dict(
        order_payload() if payload is None else payload,
        timestamp=COMMAND_TS,
        user_id=user_id,
    )
