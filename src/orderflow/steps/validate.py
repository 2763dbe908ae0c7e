# src/orderflow/steps/validate.py
"""
Estágio de validação: UnvalidatedOrder → ValidatedOrder.

Política: acumulação. Todas as checagens independentes rodam até o fim e
cada violação vira exatamente um `ValidationError`; o chamador recebe todas
as violações em uma única passada.

Checagens:
    - estruturais (síncronas): order id, dados do cliente, campos de
      endereço, linhas (id, código, quantidade), pedido não vazio
    - catálogo: `check_product_exists` por linha com código bem-formado
    - endereço: `check_address_exists` para entrega e, quando informado,
      cobrança

As checagens de colaboradores não dependem umas das outras e, com
`concurrent=True`, rodam via `asyncio.gather`. A coleta dos erros é feita
depois, em ordem fixa de campos, então a concorrência altera apenas a
latência, nunca o conjunto ou a ordem dos erros.

Falhas de colaborador:
    - exceção do verificador de endereço → `AddressCheckError`
      (`TIMEOUT` para `asyncio.TimeoutError`, `UNREACHABLE` para as demais)
    - exceção do catálogo de produtos → `ValidationError` de tipo
      `PRODUCT_CHECK_FAILED` (falha de infraestrutura)
    - colaboradores síncronos são aceitos: resultados não aguardáveis são
      usados diretamente
    - retorno fora do contrato (não-`Result`, não-bool) →
      `CollaboratorContractError`
    - `asyncio.CancelledError` nunca é convertido

Limites explícitos:
    - Não consulta preços
    - Não faz retry (responsabilidade de `orderflow.adapters.resilience`)
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Coroutine, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from orderflow.core.errors import (
    AddressCheckError,
    AddressCheckReason,
    ValidationError,
    empty_order,
    from_address_check,
    product_check_failed,
    unknown_product_code,
)
from orderflow.core.exceptions import CollaboratorContractError
from orderflow.core.result import Err, NonEmptyList, Ok, Result
from orderflow.domain.collaborators import CheckAddressExists, CheckProductCodeExists
from orderflow.domain.orders import (
    _STAGE_SEAL,
    Address,
    ConfirmedAddress,
    CustomerInfo,
    PersonalName,
    UnvalidatedAddress,
    UnvalidatedCustomerInfo,
    UnvalidatedOrder,
    UnvalidatedOrderLine,
    ValidatedOrder,
    ValidatedOrderLine,
)
from orderflow.domain.simple_types import (
    EmailAddress,
    OrderId,
    OrderLineId,
    ProductCode,
    Quantity,
    String50,
    ZipCode,
)

_OPTIONAL_ADDRESS_LINES = ("address_line2", "address_line3", "address_line4")


class _LineDraft(NamedTuple):
    index: int
    line_id: Optional[Result]
    code: Result
    quantity: Result

    @property
    def code_field(self) -> str:
        return f"lines[{self.index}].product_code"


def _errors(*results: Optional[Result]) -> List[ValidationError]:
    return [r.error for r in results if isinstance(r, Err)]


# ---------------------------------------------------------------------------
# Checagens estruturais
# ---------------------------------------------------------------------------

def _parse_customer(raw: UnvalidatedCustomerInfo) -> Tuple[Result, Result, Result]:
    return (
        String50.create(raw.first_name, field="customer_info.first_name"),
        String50.create(raw.last_name, field="customer_info.last_name"),
        EmailAddress.create(raw.email_address, field="customer_info.email_address"),
    )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_address(raw: UnvalidatedAddress, prefix: str) -> Tuple[Optional[Address], List[ValidationError]]:
    results: Dict[str, Result] = {
        "address_line1": String50.create(raw.address_line1, field=f"{prefix}.address_line1"),
    }
    for name in _OPTIONAL_ADDRESS_LINES:
        value = getattr(raw, name)
        if not _is_blank(value):
            results[name] = String50.create(value, field=f"{prefix}.{name}")
    results["city"] = String50.create(raw.city, field=f"{prefix}.city")
    results["zip_code"] = ZipCode.create(raw.zip_code, field=f"{prefix}.zip_code")

    errors = _errors(*results.values())
    if errors:
        return None, errors
    return Address(**{name: r.value for name, r in results.items()}), []


def _parse_line(raw: UnvalidatedOrderLine, index: int, order_id: Result) -> _LineDraft:
    prefix = f"lines[{index}]"
    line_id: Optional[Result] = None
    if raw.order_line_id is not None:
        line_id = OrderLineId.create(raw.order_line_id, field=f"{prefix}.order_line_id")
    elif isinstance(order_id, Ok):
        line_id = OrderLineId.create(f"{order_id.value}-{index + 1}", field=f"{prefix}.order_line_id")

    return _LineDraft(
        index=index,
        line_id=line_id,
        code=ProductCode.create(raw.product_code, field=f"{prefix}.product_code"),
        quantity=Quantity.create(raw.quantity, field=f"{prefix}.quantity"),
    )


# ---------------------------------------------------------------------------
# Chamadas aos colaboradores
# ---------------------------------------------------------------------------

async def _product_exists(
    check: CheckProductCodeExists,
    code: ProductCode,
    field: str,
) -> Union[bool, ValidationError]:
    try:
        found = check(code)
        if inspect.isawaitable(found):
            found = await found
    except Exception as e:
        return product_check_failed(field=field, code=str(code), cause=e)
    if not isinstance(found, bool):
        raise CollaboratorContractError(
            message="ProductCodeChecker.exists deve retornar bool",
            details={"product_code": str(code), "received": type(found).__name__},
        )
    return found


async def _verify_address(
    check: CheckAddressExists,
    address: Address,
) -> Result[ConfirmedAddress, AddressCheckError]:
    try:
        outcome = check(address)
        if inspect.isawaitable(outcome):
            outcome = await outcome
    except asyncio.TimeoutError as e:
        return Err(AddressCheckError(reason=AddressCheckReason.TIMEOUT, message=str(e)))
    except Exception as e:
        return Err(AddressCheckError(
            reason=AddressCheckReason.UNREACHABLE,
            message=f"{e.__class__.__name__}: {e}",
        ))

    if isinstance(outcome, Err) and isinstance(outcome.error, AddressCheckError):
        return outcome
    if isinstance(outcome, Ok) and isinstance(outcome.value, ConfirmedAddress):
        return outcome
    raise CollaboratorContractError(
        message="AddressChecker.verify deve retornar Ok(ConfirmedAddress) ou Err(AddressCheckError)",
        details={"received": type(outcome).__name__},
    )


async def _run_checks(checks: Sequence[Coroutine[Any, Any, Any]], concurrent: bool) -> List[Any]:
    """
    Executa as checagens e devolve os resultados na ordem recebida.

    Se uma checagem levantar (ou a validação for cancelada), as demais são
    canceladas e aguardadas antes de a exceção seguir: nenhuma chamada a
    colaborador sobrevive ao retorno de `validate_order`.
    """
    if not concurrent:
        try:
            return [await check for check in checks]
        finally:
            for check in checks:
                check.close()

    tasks = [asyncio.ensure_future(check) for check in checks]
    try:
        return list(await asyncio.gather(*tasks))
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


def _confirmed(
    outcome: Optional[Result[ConfirmedAddress, AddressCheckError]],
    field: str,
    errors: List[ValidationError],
) -> Optional[ConfirmedAddress]:
    if isinstance(outcome, Err):
        errors.append(from_address_check(field=field, cause=outcome.error))
        return None
    return None if outcome is None else outcome.value


# ---------------------------------------------------------------------------
# Estágio
# ---------------------------------------------------------------------------

async def validate_order(
    check_product_exists: CheckProductCodeExists,
    check_address_exists: CheckAddressExists,
    order: UnvalidatedOrder,
    *,
    concurrent: bool = True,
) -> Result[ValidatedOrder, NonEmptyList[ValidationError]]:
    """
    Valida um pedido bruto, acumulando todas as violações.

    Ordem dos erros retornados:
        order_id → customer_info → shipping_address (campos, verificação)
        → billing_address (campos, verificação) → lines[i] (id, código,
        quantidade) → pedido vazio

    Endereços ou códigos malformados não são enviados aos colaboradores.

    Raises:
        TypeError: Se `order` não for um `UnvalidatedOrder`.
        CollaboratorContractError: Se um colaborador violar o contrato de retorno.
    """
    if not isinstance(order, UnvalidatedOrder):
        raise TypeError(f"validate_order expects UnvalidatedOrder, got {type(order).__name__}")

    order_id = OrderId.create(order.order_id, field="order_id")
    customer = _parse_customer(order.customer_info)
    shipping, shipping_errors = _parse_address(order.shipping_address, "shipping_address")
    billing: Optional[Address] = None
    billing_errors: List[ValidationError] = []
    if order.billing_address is not None:
        billing, billing_errors = _parse_address(order.billing_address, "billing_address")
    drafts = [_parse_line(raw, index, order_id) for index, raw in enumerate(order.lines)]

    pending: Dict[str, Coroutine[Any, Any, Any]] = {}
    if shipping is not None:
        pending["shipping_address"] = _verify_address(check_address_exists, shipping)
    if billing is not None:
        pending["billing_address"] = _verify_address(check_address_exists, billing)
    for draft in drafts:
        if isinstance(draft.code, Ok):
            pending[draft.code_field] = _product_exists(check_product_exists, draft.code.value, draft.code_field)
    outcomes = dict(zip(pending, await _run_checks(list(pending.values()), concurrent)))

    errors: List[ValidationError] = _errors(order_id, *customer)
    errors.extend(shipping_errors)
    shipping_confirmed = _confirmed(outcomes.get("shipping_address"), "shipping_address", errors)
    errors.extend(billing_errors)
    billing_confirmed = _confirmed(outcomes.get("billing_address"), "billing_address", errors)

    lines: List[ValidatedOrderLine] = []
    for draft in drafts:
        errors.extend(_errors(draft.line_id, draft.code))
        found = outcomes.get(draft.code_field)
        if isinstance(found, ValidationError):
            errors.append(found)
        elif found is False:
            errors.append(unknown_product_code(field=draft.code_field, code=str(draft.code.value)))
        errors.extend(_errors(draft.quantity))
        if not errors:
            lines.append(ValidatedOrderLine(
                order_line_id=draft.line_id.value,
                product_code=draft.code.value,
                quantity=draft.quantity.value,
            ))

    if not drafts:
        errors.append(empty_order())

    if errors:
        return Err(NonEmptyList(errors))

    first_name, last_name, email = (r.value for r in customer)
    return Ok(ValidatedOrder(
        order_id=order_id.value,
        customer_info=CustomerInfo(
            name=PersonalName(first_name=first_name, last_name=last_name),
            email_address=email,
        ),
        shipping_address=shipping_confirmed,
        billing_address=billing_confirmed if order.billing_address is not None else shipping_confirmed,
        lines=tuple(lines),
        _seal=_STAGE_SEAL,
    ))
