# tests/steps/test_price_order.py
"""
Testes do estágio de precificação (price_order).

Os testes asseguram que:
- o total é a soma exata de preço unitário × quantidade (Decimal, sem drift)
- o preço é consultado uma vez por código distinto
- a primeira linha não precificável encerra o estágio (fail-fast)
- linhas posteriores à falha não são consultadas
"""

import asyncio
import decimal
from decimal import Decimal
from fractions import Fraction

import pytest

from orderflow.core.errors import PriceLookupReason, PricingErrorKind
from orderflow.core.exceptions import CollaboratorContractError
from orderflow.core.result import Err, Ok
from orderflow.domain.orders import PricedOrder
from orderflow.steps import price_order, validate_order
from tests.fixtures.collaborators import FakeAddressChecker, FakePriceFetcher, FakeProductChecker
from tests.fixtures.orders import unvalidated


async def _validated(lines):
    checker = FakeProductChecker({line["product_code"] for line in lines})
    result = await validate_order(checker.exists, FakeAddressChecker().verify, unvalidated(lines=lines))
    assert isinstance(result, Ok), result
    return result.value


@pytest.mark.asyncio
async def test_total_is_exact_decimal_sum():
    """
    Verifica que o total não sofre erro de arredondamento.

    Com floats, 0.1 × 3 + 0.2 não resulta exatamente em 0.5; o estágio
    deve produzir o valor decimal exato.
    """
    order = await _validated([
        {"product_code": "A", "quantity": 3},
        {"product_code": "B", "quantity": "1"},
        {"product_code": "C", "quantity": "2.5"},
    ])
    fetcher = FakePriceFetcher({"A": "0.1", "B": "0.2", "C": "19.99"})
    result = await price_order(fetcher.price_of, order)

    assert isinstance(result, Ok)
    priced = result.value
    assert isinstance(priced, PricedOrder)
    expected = Decimal("0.1") * 3 + Decimal("0.2") + Decimal("19.99") * Decimal("2.5")
    assert priced.amount_to_bill == expected == Decimal("50.475")
    assert [line.line_price for line in priced.lines] == [Decimal("0.3"), Decimal("0.2"), Decimal("49.975")]


@pytest.mark.asyncio
async def test_total_ignores_caller_decimal_context():
    """
    Um contexto decimal de baixa precisão no chamador não arredonda o total.
    """
    order = await _validated([{"product_code": "P1", "quantity": 3}])
    fetcher = FakePriceFetcher({"P1": "19.99"})

    with decimal.localcontext() as ctx:
        ctx.prec = 3
        result = await price_order(fetcher.price_of, order)

    assert result.value.lines[0].line_price == Decimal("59.97")
    assert result.value.amount_to_bill == Decimal("59.97")


@pytest.mark.asyncio
async def test_total_keeps_every_digit_beyond_default_precision():
    """
    Entradas com mais dígitos do que os 28 do contexto padrão somam sem perda.

    O valor esperado é calculado com `Fraction`, fora da aritmética decimal.
    """
    unit_price = "999.123456789012345678901234"
    quantity = "999.9999999999"
    order = await _validated([
        {"product_code": "A", "quantity": quantity},
        {"product_code": "B", "quantity": 1},
    ])
    fetcher = FakePriceFetcher({"A": unit_price, "B": "1E-28"})

    result = await price_order(fetcher.price_of, order)

    expected = Fraction(unit_price) * Fraction(quantity) + Fraction("1E-28")
    assert isinstance(result, Ok)
    assert Fraction(result.value.amount_to_bill) == expected
    assert Fraction(result.value.lines[0].line_price) == Fraction(unit_price) * Fraction(quantity)


@pytest.mark.asyncio
async def test_price_is_fetched_once_per_distinct_code():
    order = await _validated([
        {"product_code": "A", "quantity": 1},
        {"product_code": "B", "quantity": 1},
        {"product_code": "A", "quantity": 2},
    ])
    fetcher = FakePriceFetcher({"A": "5", "B": "1"})
    result = await price_order(fetcher.price_of, order)

    assert fetcher.calls == ["A", "B"]
    assert result.value.amount_to_bill == Decimal("16")


@pytest.mark.asyncio
async def test_first_unpriceable_line_wins():
    """
    Verifica a política fail-fast.

    A linha k=1 não tem preço; o erro referencia essa linha e as linhas
    seguintes (também sem preço) não são consultadas.
    """
    order = await _validated([
        {"product_code": "A", "quantity": 1},
        {"product_code": "X", "quantity": 1},
        {"product_code": "Y", "quantity": 1},
    ])
    fetcher = FakePriceFetcher({"A": "1"})
    result = await price_order(fetcher.price_of, order)

    assert isinstance(result, Err)
    error = result.error
    assert error.kind is PricingErrorKind.UNKNOWN_PRODUCT_CODE
    assert error.line_index == 1
    assert error.product_code == "X"
    assert error.order_line_id == "O1-2"
    assert fetcher.calls == ["A", "X"]


@pytest.mark.asyncio
async def test_lookup_failure_is_price_lookup_failed():
    order = await _validated([{"product_code": "A", "quantity": 1}])
    fetcher = FakePriceFetcher({"A": "1"}, failures={"A": PriceLookupReason.UNREACHABLE})
    result = await price_order(fetcher.price_of, order)

    assert isinstance(result, Err)
    assert result.error.kind is PricingErrorKind.PRICE_LOOKUP_FAILED
    assert result.error.cause.reason is PriceLookupReason.UNREACHABLE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc,reason",
    [(OSError("down"), PriceLookupReason.UNREACHABLE), (asyncio.TimeoutError(), PriceLookupReason.TIMEOUT)],
)
async def test_fetcher_exceptions_become_lookup_failures(exc, reason):
    order = await _validated([{"product_code": "A", "quantity": 1}])

    async def price_of(code):
        raise exc

    result = await price_order(price_of, order)
    assert isinstance(result, Err)
    assert result.error.kind is PricingErrorKind.PRICE_LOOKUP_FAILED
    assert result.error.cause.reason is reason


@pytest.mark.asyncio
async def test_out_of_range_price_is_invalid_price():
    order = await _validated([{"product_code": "A", "quantity": 1}])

    async def price_of(code):
        return Ok("-4.00")

    result = await price_order(price_of, order)
    assert isinstance(result, Err)
    assert result.error.kind is PricingErrorKind.INVALID_PRICE


@pytest.mark.asyncio
async def test_zero_price_gives_zero_total():
    order = await _validated([{"product_code": "FREE", "quantity": 3}])
    result = await price_order(FakePriceFetcher({"FREE": "0"}).price_of, order)
    assert result.value.amount_to_bill == Decimal("0")


@pytest.mark.asyncio
async def test_contract_violation_raises():
    order = await _validated([{"product_code": "A", "quantity": 1}])

    async def price_of(code):
        return Decimal("1")

    with pytest.raises(CollaboratorContractError):
        await price_order(price_of, order)


@pytest.mark.asyncio
async def test_rejects_unvalidated_input():
    with pytest.raises(TypeError):
        await price_order(FakePriceFetcher().price_of, unvalidated())


@pytest.mark.asyncio
async def test_sync_price_fetcher_is_supported():
    order = await _validated([{"product_code": "P1", "quantity": 2}])

    def price_of(code):
        return Ok(Decimal("4.50"))

    result = await price_order(price_of, order)

    assert isinstance(result, Ok)
    assert result.value.amount_to_bill == Decimal("9.00")
