# src/orderflow/steps/price.py
"""
Estágio de precificação: ValidatedOrder → PricedOrder.

Política: fail-fast. O preço é consultado uma vez por código distinto, na
ordem da primeira aparição; a primeira linha não precificável encerra o
estágio com um único `PricingError` e as linhas seguintes não são
consultadas.

Aritmética:
    line_price     = unit_price × quantity
    amount_to_bill = Σ line_price
Toda a conta é feita em `Decimal`, em `exact_context()`: o contexto decimal
do chamador não influencia o resultado.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Dict

from orderflow.core.errors import (
    PriceLookupError,
    PriceLookupReason,
    PricingError,
    invalid_price,
    pricing_from_lookup,
)
from orderflow.core.exceptions import CollaboratorContractError
from orderflow.core.result import Err, Ok, Result
from orderflow.domain.collaborators import GetProductPrice
from orderflow.domain.orders import _STAGE_SEAL, PricedOrder, PricedOrderLine, ValidatedOrder
from orderflow.domain.simple_types import Price, ProductCode, exact_sum


async def _fetch_price(get_product_price: GetProductPrice, code: ProductCode) -> Result:
    try:
        outcome = get_product_price(code)
        if inspect.isawaitable(outcome):
            outcome = await outcome
    except asyncio.TimeoutError as e:
        return Err(PriceLookupError(reason=PriceLookupReason.TIMEOUT, message=str(e)))
    except Exception as e:
        return Err(PriceLookupError(
            reason=PriceLookupReason.UNREACHABLE,
            message=f"{e.__class__.__name__}: {e}",
        ))

    if isinstance(outcome, Err) and isinstance(outcome.error, PriceLookupError):
        return outcome
    if isinstance(outcome, Ok):
        return outcome
    raise CollaboratorContractError(
        message="ProductPriceFetcher.price_of deve retornar Ok(Price) ou Err(PriceLookupError)",
        details={"product_code": str(code), "received": type(outcome).__name__},
    )


async def price_order(
    get_product_price: GetProductPrice,
    order: ValidatedOrder,
) -> Result[PricedOrder, PricingError]:
    """
    Resolve o preço de cada linha e calcula o total a cobrar.

    Raises:
        TypeError: Se `order` não for um `ValidatedOrder`.
        CollaboratorContractError: Se o serviço de preços violar o contrato de retorno.
    """
    if not isinstance(order, ValidatedOrder):
        raise TypeError(f"price_order expects ValidatedOrder, got {type(order).__name__}")

    prices: Dict[ProductCode, Price] = {}
    for index, line in enumerate(order.lines):
        if line.product_code in prices:
            continue

        outcome = await _fetch_price(get_product_price, line.product_code)
        if isinstance(outcome, Err):
            return Err(pricing_from_lookup(
                line_index=index,
                order_line_id=str(line.order_line_id),
                product_code=str(line.product_code),
                cause=outcome.error,
            ))

        raw = outcome.value
        try:
            prices[line.product_code] = raw if isinstance(raw, Price) else Price.of(raw)
        except ValueError:
            return Err(invalid_price(
                line_index=index,
                order_line_id=str(line.order_line_id),
                product_code=str(line.product_code),
                raw=raw,
            ))

    lines = tuple(
        PricedOrderLine(
            order_line_id=line.order_line_id,
            product_code=line.product_code,
            quantity=line.quantity,
            unit_price=prices[line.product_code],
            line_price=prices[line.product_code].multiply(line.quantity),
        )
        for line in order.lines
    )
    return Ok(PricedOrder(
        order_id=order.order_id,
        customer_info=order.customer_info,
        shipping_address=order.shipping_address,
        billing_address=order.billing_address,
        lines=lines,
        amount_to_bill=exact_sum(line.line_price for line in lines),
        _seal=_STAGE_SEAL,
    ))
