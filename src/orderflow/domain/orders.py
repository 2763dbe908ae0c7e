# src/orderflow/domain/orders.py
"""
Modelo de estados do pedido.

Cada estágio do ciclo de vida é um tipo distinto, não uma flag:

    UnvalidatedOrder → ValidatedOrder → PricedOrder → (eventos emitidos)

"Placed" não possui representação armazenada: é o sucesso terminal marcado
pela emissão de eventos.

Invariantes:
    - Todos os estados são imutáveis (frozen)
    - `ValidatedOrder` só é criado por `validate_order`
    - `PricedOrder` só é criado por `price_order`
    - Cada estado é derivado do anterior, nunca uma mutação dele

O construtor direto de `ValidatedOrder` / `PricedOrder` exige o selo de
estágio (`_STAGE_SEAL`), de uso restrito aos módulos de `orderflow.steps`;
qualquer outra construção (inclusive `dataclasses.replace`) levanta
`StageConstructionError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from orderflow.core.exceptions import StageConstructionError

from .simple_types import (
    EmailAddress,
    OrderId,
    OrderLineId,
    Price,
    ProductCode,
    Quantity,
    String50,
    ZipCode,
    exact_sum,
)

_STAGE_SEAL = object()


def _check_seal(instance: Any, seal: object, producer: str) -> None:
    if seal is not _STAGE_SEAL:
        raise StageConstructionError(
            message=f"{type(instance).__name__} só pode ser criado por {producer}",
            details={"type": type(instance).__name__, "producer": producer},
        )
    # selo de uso único: `dataclasses.replace` não pode reaproveitá-lo
    object.__setattr__(instance, "_seal", None)


def _get(data: Any, key: str) -> Any:
    return data.get(key) if isinstance(data, Mapping) else None


# ---------------------------------------------------------------------------
# Unvalidated: submissão externa bruta (sem invariantes)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnvalidatedCustomerInfo:
    first_name: Any = None
    last_name: Any = None
    email_address: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "UnvalidatedCustomerInfo":
        return cls(
            first_name=_get(data, "first_name"),
            last_name=_get(data, "last_name"),
            email_address=_get(data, "email_address"),
        )


@dataclass(frozen=True)
class UnvalidatedAddress:
    address_line1: Any = None
    address_line2: Any = None
    address_line3: Any = None
    address_line4: Any = None
    city: Any = None
    zip_code: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "UnvalidatedAddress":
        return cls(
            address_line1=_get(data, "address_line1"),
            address_line2=_get(data, "address_line2"),
            address_line3=_get(data, "address_line3"),
            address_line4=_get(data, "address_line4"),
            city=_get(data, "city"),
            zip_code=_get(data, "zip_code"),
        )


@dataclass(frozen=True)
class UnvalidatedOrderLine:
    product_code: Any = None
    quantity: Any = None
    order_line_id: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "UnvalidatedOrderLine":
        return cls(
            product_code=_get(data, "product_code"),
            quantity=_get(data, "quantity"),
            order_line_id=_get(data, "order_line_id"),
        )


@dataclass(frozen=True)
class UnvalidatedOrder:
    """
    Submissão externa bruta, como recebida no payload do comando.

    Nenhuma invariante é garantida: qualquer campo pode estar ausente ou
    malformado. `billing_address` ausente significa "mesmo endereço de entrega".
    """

    order_id: Any
    customer_info: UnvalidatedCustomerInfo
    shipping_address: UnvalidatedAddress
    lines: Tuple[UnvalidatedOrderLine, ...] = ()
    billing_address: Optional[UnvalidatedAddress] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnvalidatedOrder":
        """
        Desserializa o payload de um comando.

        Não valida valores: campos ausentes viram None e são reportados pela
        validação. Um `lines` que não seja lista é tratado como pedido vazio.

        Raises:
            TypeError: Se `data` não for um mapeamento.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"order payload must be a mapping, got {type(data).__name__}")

        raw_lines = data.get("lines")
        lines = tuple(
            UnvalidatedOrderLine.from_dict(line)
            for line in (raw_lines if isinstance(raw_lines, (list, tuple)) else [])
        )
        billing = data.get("billing_address")
        return cls(
            order_id=data.get("order_id"),
            customer_info=UnvalidatedCustomerInfo.from_dict(data.get("customer_info")),
            shipping_address=UnvalidatedAddress.from_dict(data.get("shipping_address")),
            lines=lines,
            billing_address=None if billing is None else UnvalidatedAddress.from_dict(billing),
        )


# ---------------------------------------------------------------------------
# Valores validados
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PersonalName:
    first_name: String50
    last_name: String50


@dataclass(frozen=True)
class CustomerInfo:
    name: PersonalName
    email_address: EmailAddress


@dataclass(frozen=True)
class Address:
    """Endereço estruturalmente válido, pronto para o verificador externo."""

    address_line1: String50
    city: String50
    zip_code: ZipCode
    address_line2: Optional[String50] = None
    address_line3: Optional[String50] = None
    address_line4: Optional[String50] = None

    def lines(self) -> Tuple[str, ...]:
        optional = (self.address_line2, self.address_line3, self.address_line4)
        return (str(self.address_line1),) + tuple(str(v) for v in optional if v is not None)

    def to_dict(self) -> dict:
        return {
            "address_line1": str(self.address_line1),
            "address_line2": None if self.address_line2 is None else str(self.address_line2),
            "address_line3": None if self.address_line3 is None else str(self.address_line3),
            "address_line4": None if self.address_line4 is None else str(self.address_line4),
            "city": str(self.city),
            "zip_code": str(self.zip_code),
        }


@dataclass(frozen=True)
class ConfirmedAddress:
    """
    Representação confirmada pelo verificador de endereços.

    Pode normalizar ou enriquecer o endereço enviado; o pedido validado
    sempre carrega esta representação, nunca o input bruto do chamador.
    """

    address: Address
    reference: Optional[str] = None

    def to_dict(self) -> dict:
        data = self.address.to_dict()
        data["reference"] = self.reference
        return data


@dataclass(frozen=True)
class ValidatedOrderLine:
    order_line_id: OrderLineId
    product_code: ProductCode
    quantity: Quantity


@dataclass(frozen=True)
class ValidatedOrder:
    """
    Pedido que passou por todas as checagens.

    Invariantes:
        - todo código de produto existe no catálogo
        - endereços confirmados pelo verificador
        - ao menos uma linha; toda quantidade > 0
    """

    order_id: OrderId
    customer_info: CustomerInfo
    shipping_address: ConfirmedAddress
    billing_address: ConfirmedAddress
    lines: Tuple[ValidatedOrderLine, ...]
    _seal: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_seal(self, self._seal, "validate_order")
        if not self.lines:
            raise ValueError("ValidatedOrder requires at least one line")


@dataclass(frozen=True)
class PricedOrderLine:
    order_line_id: OrderLineId
    product_code: ProductCode
    quantity: Quantity
    unit_price: Price
    line_price: Decimal

    def __post_init__(self) -> None:
        if self.line_price != self.unit_price.multiply(self.quantity):
            raise ValueError("line_price must equal unit_price * quantity")


@dataclass(frozen=True)
class PricedOrder:
    """
    Pedido com preços resolvidos.

    Invariantes:
        - amount_to_bill == soma de (preço unitário × quantidade) das linhas
        - amount_to_bill >= 0
    """

    order_id: OrderId
    customer_info: CustomerInfo
    shipping_address: ConfirmedAddress
    billing_address: ConfirmedAddress
    lines: Tuple[PricedOrderLine, ...]
    amount_to_bill: Decimal
    _seal: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_seal(self, self._seal, "price_order")
        if not self.lines:
            raise ValueError("PricedOrder requires at least one line")
        if self.amount_to_bill != exact_sum(line.line_price for line in self.lines):
            raise ValueError("amount_to_bill must equal the sum of line prices")
        if self.amount_to_bill < 0:
            raise ValueError("amount_to_bill must be >= 0")


# ---------------------------------------------------------------------------
# Classificação exaustiva
# ---------------------------------------------------------------------------

class OrderStage(str, Enum):
    UNVALIDATED = "unvalidated"
    VALIDATED = "validated"
    PRICED = "priced"


OrderState = Union[UnvalidatedOrder, ValidatedOrder, PricedOrder]


def stage_of(order: OrderState) -> OrderStage:
    """
    Classifica um valor de pedido no seu estágio.

    Raises:
        TypeError: Para qualquer tipo fora do conjunto fechado de estados.
    """
    if isinstance(order, UnvalidatedOrder):
        return OrderStage.UNVALIDATED
    if isinstance(order, ValidatedOrder):
        return OrderStage.VALIDATED
    if isinstance(order, PricedOrder):
        return OrderStage.PRICED
    raise TypeError(f"not an order state: {type(order).__name__}")
