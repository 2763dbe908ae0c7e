# tests/domain/test_simple_types.py
"""
Testes dos tipos simples restritos.

Os testes asseguram que:
- `create` nunca levanta exceção para input não confiável
- o construtor direto rejeita valores fora da restrição
- quantidades e preços usam Decimal sem erro de representação
"""

import decimal
from decimal import Decimal

import pytest

from orderflow.core.errors import ValidationErrorKind
from orderflow.core.result import Err, Ok
from orderflow.domain.simple_types import (
    EmailAddress,
    OrderId,
    Price,
    ProductCode,
    Quantity,
    String50,
    ZipCode,
    exact_sum,
    to_decimal,
)


def test_string50_strips_and_accepts():
    result = String50.create("  Ada  ", field="name")
    assert isinstance(result, Ok)
    assert str(result.value) == "Ada"


@pytest.mark.parametrize("raw", [None, "", "   ", 42, "x" * 51])
def test_string50_rejects(raw):
    result = String50.create(raw, field="customer_info.first_name")
    assert isinstance(result, Err)
    assert result.error.kind is ValidationErrorKind.STRUCTURAL
    assert result.error.field == "customer_info.first_name"


def test_direct_constructor_enforces_constraint():
    with pytest.raises(ValueError):
        OrderId("")
    with pytest.raises(ValueError):
        ZipCode("1234")


def test_product_code_error_kind():
    result = ProductCode.create("", field="lines[0].product_code")
    assert isinstance(result, Err)
    assert result.error.kind is ValidationErrorKind.PRODUCT_CODE_INVALID


@pytest.mark.parametrize("raw", ["ada@example.com", " ada@example.com "])
def test_email_accepts(raw):
    assert isinstance(EmailAddress.create(raw, field="email"), Ok)


@pytest.mark.parametrize("raw", ["ada", "@example.com", "ada@", "a@b@c"])
def test_email_rejects(raw):
    assert isinstance(EmailAddress.create(raw, field="email"), Err)


@pytest.mark.parametrize("raw", ["12345", " 12345 "])
def test_zip_accepts(raw):
    assert str(ZipCode.create(raw, field="zip").value) == "12345"


@pytest.mark.parametrize("raw", ["1234", "123456", "abcde", 12345, None])
def test_zip_rejects(raw):
    assert isinstance(ZipCode.create(raw, field="zip"), Err)


@pytest.mark.parametrize("raw,expected", [(2, Decimal("2")), ("1.5", Decimal("1.5")), (0.1, Decimal("0.1"))])
def test_quantity_accepts(raw, expected):
    result = Quantity.create(raw, field="q")
    assert isinstance(result, Ok)
    assert result.value.value == expected


@pytest.mark.parametrize("raw", [0, -1, "-0.5"])
def test_quantity_non_positive_is_structural(raw):
    result = Quantity.create(raw, field="lines[0].quantity")
    assert isinstance(result, Err)
    assert result.error.kind is ValidationErrorKind.STRUCTURAL
    assert "greater than zero" in result.error.message


@pytest.mark.parametrize("raw", ["abc", None, True, "NaN", "Infinity", 1001])
def test_quantity_rejects_non_numeric_or_too_large(raw):
    assert isinstance(Quantity.create(raw, field="q"), Err)


def test_to_decimal_uses_string_conversion_for_floats():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(True) is None
    assert to_decimal("nan") is None


def test_price_bounds_and_multiply():
    assert Price.of("10.00").multiply(Quantity(Decimal("2"))) == Decimal("20.00")
    assert Price.of(0).value == Decimal("0")
    with pytest.raises(ValueError):
        Price.of("-1")
    with pytest.raises(ValueError):
        Price.of("1000.01")


def test_multiply_and_sum_ignore_caller_precision():
    with decimal.localcontext() as ctx:
        ctx.prec = 2
        line = Price.of("19.99").multiply(Quantity(Decimal("3")))
        total = exact_sum([line, Decimal("0.01")])
    assert line == Decimal("59.97")
    assert total == Decimal("59.98")
