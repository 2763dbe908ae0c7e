"""
orderflow: Canonical Error Structures (v1)

Este módulo define a taxonomia canônica de erros do workflow de pedidos.
Falhas de domínio são valores (retornados dentro de `Err`), nunca exceções,
e devem ser:

- explícitas
- serializáveis
- distinguíveis por código estável
- acionáveis pelo chamador

Hierarquia:
- ValidationError   → uma violação por regra; acumulada em NonEmptyList
- AddressCheckError → falha reportada pelo verificador de endereços
- PriceLookupError  → falha reportada pelo serviço de preços
- PricingError      → erro único do estágio de precificação (first-failure-wins)
- PlaceOrderError   → único erro que cruza a fronteira pública do workflow
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .result import NonEmptyList


# ---------------------------------------------------------------------------
# Catálogo canônico de códigos (v1)
# ---------------------------------------------------------------------------

# Fronteira pública
VALIDATION_FAILED = "VALIDATION_FAILED"
PRICING_FAILED = "PRICING_FAILED"


class ValidationErrorKind(str, Enum):
    """Tipos de violação detectados pelo estágio de validação."""

    PRODUCT_CODE_INVALID = "PRODUCT_CODE_INVALID"
    PRODUCT_CODE_UNKNOWN = "PRODUCT_CODE_UNKNOWN"
    ADDRESS_INVALID = "ADDRESS_INVALID"
    ADDRESS_CHECK_FAILED = "ADDRESS_CHECK_FAILED"
    PRODUCT_CHECK_FAILED = "PRODUCT_CHECK_FAILED"
    STRUCTURAL = "STRUCTURAL"


class AddressCheckReason(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    UNREACHABLE = "UNREACHABLE"
    TIMEOUT = "TIMEOUT"


class PriceLookupReason(str, Enum):
    UNKNOWN_PRODUCT = "UNKNOWN_PRODUCT"
    UNREACHABLE = "UNREACHABLE"
    TIMEOUT = "TIMEOUT"


class PricingErrorKind(str, Enum):
    UNKNOWN_PRODUCT_CODE = "UNKNOWN_PRODUCT_CODE"
    PRICE_LOOKUP_FAILED = "PRICE_LOOKUP_FAILED"
    INVALID_PRICE = "INVALID_PRICE"


_INFRASTRUCTURE_KINDS = frozenset({
    ValidationErrorKind.ADDRESS_CHECK_FAILED,
    ValidationErrorKind.PRODUCT_CHECK_FAILED,
})


# ---------------------------------------------------------------------------
# Erros reportados por colaboradores
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AddressCheckError:
    """
    Falha reportada pelo verificador de endereços.

    `NOT_FOUND` é uma resposta definitiva (endereço inválido). `UNREACHABLE`
    e `TIMEOUT` são falhas de infraestrutura e não dizem nada sobre a
    validade do endereço.
    """

    reason: AddressCheckReason
    message: str = ""

    @property
    def is_infrastructure_failure(self) -> bool:
        return self.reason is not AddressCheckReason.NOT_FOUND


@dataclass(frozen=True)
class PriceLookupError:
    """Falha reportada pelo serviço de preços para um código de produto."""

    reason: PriceLookupReason
    message: str = ""

    @property
    def is_infrastructure_failure(self) -> bool:
        return self.reason is not PriceLookupReason.UNKNOWN_PRODUCT


# ---------------------------------------------------------------------------
# Erros de estágio
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationError:
    """
    Uma violação de regra encontrada durante a validação.

    Campos:
    - kind: classificação estável da violação
    - field: caminho do campo violado (ex.: `lines[0].quantity`)
    - message: mensagem curta e humana
    """

    kind: ValidationErrorKind
    field: str
    message: str

    @property
    def is_infrastructure_failure(self) -> bool:
        return self.kind in _INFRASTRUCTURE_KINDS

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "field": self.field, "message": self.message}


@dataclass(frozen=True)
class PricingError:
    """
    Erro único do estágio de precificação.

    Referencia a primeira linha não precificável; linhas posteriores não
    são inspecionadas.
    """

    kind: PricingErrorKind
    line_index: int
    order_line_id: str
    product_code: str
    message: str
    cause: Optional[PriceLookupError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "line_index": self.line_index,
            "order_line_id": self.order_line_id,
            "product_code": self.product_code,
            "message": self.message,
            "cause": None if self.cause is None else {
                "reason": self.cause.reason.value,
                "message": self.cause.message,
            },
        }


# ---------------------------------------------------------------------------
# Fronteira pública
# ---------------------------------------------------------------------------

class PlaceOrderError(ABC):
    """
    Erro público do workflow `place_order`.

    Wrapper discriminado (`type`) sobre os erros de estágio, para que o
    chamador não precise conhecer a estrutura interna do pipeline.
    Variantes: `PlaceOrderValidationError`, `PlaceOrderPricingError`.
    """

    type: str
    message: str
    hint: Optional[str]

    @property
    @abstractmethod
    def details(self) -> Dict[str, Any]:
        ...

    @property
    @abstractmethod
    def is_infrastructure_failure(self) -> bool:
        ...


    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return {
            "type": self.type,
            "message": self.message,
            "details": self.details,
            "hint": self.hint,
        }


@dataclass(frozen=True)
class PlaceOrderValidationError(PlaceOrderError):
    errors: NonEmptyList[ValidationError]
    type: str = VALIDATION_FAILED
    message: str = "Pedido rejeitado na validação"
    hint: Optional[str] = "Corrija os campos listados e reenvie o pedido."

    @property
    def details(self) -> Dict[str, Any]:
        return {"errors": [e.to_dict() for e in self.errors]}

    @property
    def is_infrastructure_failure(self) -> bool:
        return any(e.is_infrastructure_failure for e in self.errors)


@dataclass(frozen=True)
class PlaceOrderPricingError(PlaceOrderError):
    error: PricingError
    type: str = PRICING_FAILED
    message: str = "Pedido não pôde ser precificado"
    hint: Optional[str] = None

    @property
    def details(self) -> Dict[str, Any]:
        return {"error": self.error.to_dict()}

    @property
    def is_infrastructure_failure(self) -> bool:
        cause = self.error.cause
        return cause is not None and cause.is_infrastructure_failure


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def structural(*, field: str, message: str) -> ValidationError:
    return ValidationError(kind=ValidationErrorKind.STRUCTURAL, field=field, message=message)


def empty_order() -> ValidationError:
    return structural(field="lines", message="order must contain at least one line")


def non_positive_quantity(*, field: str, raw: Any) -> ValidationError:
    return structural(field=field, message=f"quantity must be greater than zero, got {raw!r}")


def invalid_product_code(*, field: str, raw: Any) -> ValidationError:
    return ValidationError(
        kind=ValidationErrorKind.PRODUCT_CODE_INVALID,
        field=field,
        message=f"invalid product code {raw!r}",
    )


def unknown_product_code(*, field: str, code: str) -> ValidationError:
    return ValidationError(
        kind=ValidationErrorKind.PRODUCT_CODE_UNKNOWN,
        field=field,
        message=f"unknown product code {code}",
    )


def product_check_failed(*, field: str, code: str, cause: BaseException) -> ValidationError:
    """Falha do catálogo ao responder; não diz nada sobre a existência do código."""
    return ValidationError(
        kind=ValidationErrorKind.PRODUCT_CHECK_FAILED,
        field=field,
        message=f"product check failed for {code}: {cause.__class__.__name__}: {cause}",
    )


def address_not_found(*, field: str, cause: AddressCheckError) -> ValidationError:
    message = "address not found"
    if cause.message:
        message = f"{message}: {cause.message}"
    return ValidationError(kind=ValidationErrorKind.ADDRESS_INVALID, field=field, message=message)


def address_check_failed(*, field: str, cause: AddressCheckError) -> ValidationError:
    message = f"address check failed ({cause.reason.value.lower()})"
    if cause.message:
        message = f"{message}: {cause.message}"
    return ValidationError(kind=ValidationErrorKind.ADDRESS_CHECK_FAILED, field=field, message=message)


def from_address_check(*, field: str, cause: AddressCheckError) -> ValidationError:
    """Traduz a falha do verificador, preservando a distinção infraestrutura/input."""
    if cause.is_infrastructure_failure:
        return address_check_failed(field=field, cause=cause)
    return address_not_found(field=field, cause=cause)


def pricing_from_lookup(
    *,
    line_index: int,
    order_line_id: str,
    product_code: str,
    cause: PriceLookupError,
) -> PricingError:
    if cause.reason is PriceLookupReason.UNKNOWN_PRODUCT:
        kind = PricingErrorKind.UNKNOWN_PRODUCT_CODE
        message = f"no price for product code {product_code}"
    else:
        kind = PricingErrorKind.PRICE_LOOKUP_FAILED
        message = f"price lookup failed for product code {product_code} ({cause.reason.value.lower()})"
    return PricingError(
        kind=kind,
        line_index=line_index,
        order_line_id=order_line_id,
        product_code=product_code,
        message=message,
        cause=cause,
    )


def invalid_price(*, line_index: int, order_line_id: str, product_code: str, raw: Any) -> PricingError:
    return PricingError(
        kind=PricingErrorKind.INVALID_PRICE,
        line_index=line_index,
        order_line_id=order_line_id,
        product_code=product_code,
        message=f"invalid unit price {raw!r} for product code {product_code}",
    )

