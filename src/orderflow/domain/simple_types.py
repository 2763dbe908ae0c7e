# src/orderflow/domain/simple_types.py
"""
Tipos simples restritos do domínio de pedidos.

Cada tipo encapsula um único valor e garante sua restrição na construção:
    - `create(raw, field=...)` valida input não confiável e retorna
      `Ok(tipo)` ou `Err(ValidationError)`
    - o construtor direto levanta `ValueError` se a restrição for violada

Restrições (v1):
    - String50      → texto não vazio, no máximo 50 caracteres
    - OrderId       → String50
    - OrderLineId   → String50
    - ProductCode   → String50 (existência no catálogo é checada pela validação)
    - EmailAddress  → exatamente um '@', parte local e domínio não vazios
    - ZipCode       → 5 dígitos
    - Quantity      → decimal finito, 0 < q <= 1000
    - Price         → decimal finito, 0 <= p <= 1000

Toda aritmética monetária usa `decimal.Decimal`; floats são convertidos
via `str()` para não herdar erro de representação binária. Produtos e somas
rodam em `exact_context()`, independente do contexto decimal do chamador.
"""

from __future__ import annotations

import decimal
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Optional, Type, TypeVar

from orderflow.core import errors
from orderflow.core.errors import ValidationError
from orderflow.core.result import Err, Ok, Result

MAX_STRING_LENGTH = 50
MAX_QUANTITY = Decimal("1000")
MAX_UNIT_PRICE = Decimal("1000")

_ZIP_RE = re.compile(r"^\d{5}$")

S = TypeVar("S", bound="_Constrained")


def exact_context() -> decimal.Context:
    """
    Contexto decimal sem arredondamento.

    Precisão e expoentes no máximo suportado; `Inexact` é tratado como erro,
    então um resultado que precisaria ser arredondado levanta em vez de
    mudar silenciosamente.
    """
    return decimal.Context(
        prec=decimal.MAX_PREC,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        traps=[decimal.Inexact, decimal.InvalidOperation, decimal.Overflow],
    )


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    with decimal.localcontext(exact_context()):
        return sum(values, Decimal("0"))


def to_decimal(raw: Any) -> Optional[Decimal]:
    """Converte input bruto em Decimal finito; None se não for numérico."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float, str)):
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation:
            return None
    else:
        return None
    return value if value.is_finite() else None


def _string50_problem(raw: Any) -> Optional[str]:
    if not isinstance(raw, str) or not raw.strip():
        return "must not be blank"
    if len(raw.strip()) > MAX_STRING_LENGTH:
        return f"must be at most {MAX_STRING_LENGTH} characters"
    return None


class _Constrained:
    """Base dos tipos simples de texto: valida em `__post_init__`."""

    value: Any
    _label = "value"

    @classmethod
    def problem(cls, raw: Any) -> Optional[str]:
        return _string50_problem(raw)

    @classmethod
    def normalize(cls, raw: Any) -> Any:
        return raw.strip()

    @classmethod
    def error(cls, field: str, raw: Any, problem: str) -> ValidationError:
        return errors.structural(field=field, message=f"{cls._label} {problem}")

    @classmethod
    def create(cls: Type[S], raw: Any, *, field: str) -> Result[S, ValidationError]:
        problem = cls.problem(raw)
        if problem is not None:
            return Err(cls.error(field, raw, problem))
        return Ok(cls(cls.normalize(raw)))  # type: ignore[call-arg]

    def __post_init__(self) -> None:
        problem = self.problem(self.value)
        if problem is not None:
            raise ValueError(f"{self._label} {problem}: {self.value!r}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class String50(_Constrained):
    value: str
    _label = "text"


@dataclass(frozen=True)
class OrderId(_Constrained):
    value: str
    _label = "order id"


@dataclass(frozen=True)
class OrderLineId(_Constrained):
    value: str
    _label = "order line id"


@dataclass(frozen=True)
class ProductCode(_Constrained):
    value: str
    _label = "product code"

    @classmethod
    def error(cls, field: str, raw: Any, problem: str) -> ValidationError:
        return errors.invalid_product_code(field=field, raw=raw)


@dataclass(frozen=True)
class EmailAddress(_Constrained):
    value: str
    _label = "email address"

    @classmethod
    def problem(cls, raw: Any) -> Optional[str]:
        base = _string50_problem(raw)
        if base is not None:
            return base
        local, sep, domain = raw.strip().partition("@")
        if not sep or not local or not domain or "@" in domain:
            return "must look like name@domain"
        return None


@dataclass(frozen=True)
class ZipCode(_Constrained):
    value: str
    _label = "zip code"

    @classmethod
    def problem(cls, raw: Any) -> Optional[str]:
        if not isinstance(raw, str) or not _ZIP_RE.match(raw.strip()):
            return "must be 5 digits"
        return None


def _decimal_type(
    label: str,
    accept: Callable[[Decimal], bool],
    rule: str,
) -> Callable[[Any], Optional[str]]:
    def problem(raw: Any) -> Optional[str]:
        value = to_decimal(raw)
        if value is None:
            return f"{label} must be a number, got {raw!r}"
        if not accept(value):
            return f"{label} {rule}, got {raw!r}"
        return None

    return problem


_quantity_problem = _decimal_type(
    "quantity",
    lambda q: Decimal("0") < q <= MAX_QUANTITY,
    f"must be greater than zero and at most {MAX_QUANTITY}",
)

_price_problem = _decimal_type(
    "price",
    lambda p: Decimal("0") <= p <= MAX_UNIT_PRICE,
    f"must be between 0 and {MAX_UNIT_PRICE}",
)


@dataclass(frozen=True)
class Quantity:
    """Quantidade de uma linha do pedido (decimal, estritamente positiva)."""

    value: Decimal

    def __post_init__(self) -> None:
        problem = _quantity_problem(self.value)
        if problem is not None:
            raise ValueError(problem)

    @classmethod
    def create(cls, raw: Any, *, field: str) -> Result["Quantity", ValidationError]:
        value = to_decimal(raw)
        if value is not None and value <= 0:
            return Err(errors.non_positive_quantity(field=field, raw=raw))
        problem = _quantity_problem(raw)
        if problem is not None:
            return Err(errors.structural(field=field, message=problem))
        return Ok(cls(value))  # type: ignore[arg-type]

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Price:
    """Preço unitário retornado pelo serviço de preços."""

    value: Decimal

    def __post_init__(self) -> None:
        problem = _price_problem(self.value)
        if problem is not None:
            raise ValueError(problem)

    @classmethod
    def of(cls, raw: Any) -> "Price":
        """Converte input numérico bruto em Price; levanta ValueError se inválido."""
        problem = _price_problem(raw)
        if problem is not None:
            raise ValueError(problem)
        return cls(to_decimal(raw))  # type: ignore[arg-type]

    def multiply(self, quantity: Quantity) -> Decimal:
        with decimal.localcontext(exact_context()):
            return self.value * quantity.value

    def __str__(self) -> str:
        return str(self.value)
