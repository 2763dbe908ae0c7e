# src/orderflow/steps/acknowledge.py
"""Renderização pura da confirmação de pedido (sem envio)."""

from __future__ import annotations

from typing import List

from orderflow.core.config.settings import AcknowledgmentSettings
from orderflow.domain.orders import PricedOrder


def render_subject(order: PricedOrder, settings: AcknowledgmentSettings) -> str:
    return settings.subject.format(order_id=order.order_id)


def render_acknowledgment(order: PricedOrder, settings: AcknowledgmentSettings) -> str:
    """
    Renderiza o texto da confirmação.

    A saída depende apenas do pedido e dos settings: nenhuma data ou
    identificador de execução é incluído, para manter a emissão de eventos
    idempotente.
    """
    name = order.customer_info.name
    address = order.shipping_address.address
    out: List[str] = [
        f"Dear {name.first_name} {name.last_name},",
        "",
        f"We have received your order {order.order_id}.",
        "",
    ]
    for line in order.lines:
        out.append(
            f"  {line.order_line_id}  {line.product_code}  "
            f"{line.quantity} x {line.unit_price} = {line.line_price}"
        )
    out.append(f"Total: {order.amount_to_bill}")
    out.append("")
    out.append("Shipping to:")
    out.extend(f"  {text}" for text in address.lines())
    out.append(f"  {address.city} {address.zip_code}")
    out.append("")
    out.append(settings.sender)
    return "\n".join(out)
