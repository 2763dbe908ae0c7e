# src/orderflow/adapters/resilience.py
"""
Wrappers de resiliência para colaboradores externos.

O core nunca faz retry: timeout e retry são preocupações dos colaboradores,
aplicadas pela camada de composição a partir de `CollaboratorSettings`.

    with_timeout(c, s)   → resposta ausente em `s` segundos vira erro TIMEOUT
    with_retry(c, p)     → reexecuta apenas falhas de infraestrutura
                           (UNREACHABLE / TIMEOUT), com backoff exponencial

Respostas definitivas (endereço não encontrado, produto sem preço) nunca
são repetidas. Exceções levantadas pelo colaborador embrulhado (exceto
cancelamento) são tratadas como UNREACHABLE.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

from orderflow.core.config.settings import CollaboratorSettings, RetryPolicy
from orderflow.core.errors import (
    AddressCheckError,
    AddressCheckReason,
    PriceLookupError,
    PriceLookupReason,
)
from orderflow.core.result import Err, Result
from orderflow.domain.collaborators import AddressChecker, ProductPriceFetcher
from orderflow.domain.orders import Address, ConfirmedAddress
from orderflow.domain.simple_types import Price, ProductCode

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]
Collaborator = Union[AddressChecker, ProductPriceFetcher]


async def _resolved(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _guarded(call: Callable[[], Any], make_error: Callable[[str, str], Err]) -> Result:
    try:
        return await _resolved(call())
    except asyncio.TimeoutError as e:
        return make_error("TIMEOUT", str(e))
    except Exception as e:
        return make_error("UNREACHABLE", f"{e.__class__.__name__}: {e}")


def _address_error(reason: str, message: str) -> Err:
    return Err(AddressCheckError(reason=AddressCheckReason(reason), message=message))


def _price_error(reason: str, message: str) -> Err:
    return Err(PriceLookupError(reason=PriceLookupReason(reason), message=message))


def _is_retryable(outcome: Result) -> bool:
    return isinstance(outcome, Err) and bool(getattr(outcome.error, "is_infrastructure_failure", False))


# ---------------------------------------------------------------------------
# Timeout
# ---------------------------------------------------------------------------

class TimeoutAddressChecker:
    def __init__(self, inner: AddressChecker, seconds: float):
        self.inner = inner
        self.seconds = seconds

    async def verify(self, address: Address) -> Result[ConfirmedAddress, AddressCheckError]:
        try:
            return await asyncio.wait_for(_resolved(self.inner.verify(address)), timeout=self.seconds)
        except asyncio.TimeoutError:
            return _address_error("TIMEOUT", f"no answer within {self.seconds}s")


class TimeoutPriceFetcher:
    def __init__(self, inner: ProductPriceFetcher, seconds: float):
        self.inner = inner
        self.seconds = seconds

    async def price_of(self, code: ProductCode) -> Result[Price, PriceLookupError]:
        try:
            return await asyncio.wait_for(_resolved(self.inner.price_of(code)), timeout=self.seconds)
        except asyncio.TimeoutError:
            return _price_error("TIMEOUT", f"no answer within {self.seconds}s")


# ---------------------------------------------------------------------------
# Retry
# ---------------------------------------------------------------------------

async def _retrying(
    name: str,
    attempt_call: Callable[[], Any],
    make_error: Callable[[str, str], Err],
    policy: RetryPolicy,
    sleep: Sleep,
) -> Result:
    outcome: Optional[Result] = None
    for attempt in range(1, policy.max_attempts + 1):
        outcome = await _guarded(attempt_call, make_error)
        if not _is_retryable(outcome):
            return outcome

        if attempt < policy.max_attempts:
            delay = policy.delay_for(attempt)
            logger.warning(
                "%s: %s. Attempt %d/%d, retrying in %.2f seconds",
                name,
                outcome.error.reason.value,
                attempt,
                policy.max_attempts,
                delay,
            )
            await sleep(delay)

    logger.error("%s: all %d attempts failed", name, policy.max_attempts)
    return outcome  # type: ignore[return-value]


class RetryingAddressChecker:
    def __init__(self, inner: AddressChecker, policy: RetryPolicy, *, sleep: Sleep = asyncio.sleep):
        self.inner = inner
        self.policy = policy
        self.sleep = sleep

    async def verify(self, address: Address) -> Result[ConfirmedAddress, AddressCheckError]:
        return await _retrying(
            "AddressChecker.verify",
            lambda: self.inner.verify(address),
            _address_error,
            self.policy,
            self.sleep,
        )


class RetryingPriceFetcher:
    def __init__(self, inner: ProductPriceFetcher, policy: RetryPolicy, *, sleep: Sleep = asyncio.sleep):
        self.inner = inner
        self.policy = policy
        self.sleep = sleep

    async def price_of(self, code: ProductCode) -> Result[Price, PriceLookupError]:
        return await _retrying(
            f"ProductPriceFetcher.price_of({code})",
            lambda: self.inner.price_of(code),
            _price_error,
            self.policy,
            self.sleep,
        )


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

def with_timeout(collaborator: Collaborator, seconds: float) -> Collaborator:
    """
    Aplica timeout a um verificador de endereço ou serviço de preços.

    Raises:
        ValueError: Se `seconds` não for positivo.
        TypeError: Se o colaborador não for de um tipo suportado.
    """
    if seconds <= 0:
        raise ValueError("timeout seconds must be > 0")
    if isinstance(collaborator, AddressChecker):
        return TimeoutAddressChecker(collaborator, seconds)
    if isinstance(collaborator, ProductPriceFetcher):
        return TimeoutPriceFetcher(collaborator, seconds)
    raise TypeError(f"unsupported collaborator: {type(collaborator).__name__}")


def with_retry(collaborator: Collaborator, policy: RetryPolicy, *, sleep: Sleep = asyncio.sleep) -> Collaborator:
    """
    Aplica retry com backoff exponencial a um colaborador.

    Raises:
        TypeError: Se o colaborador não for de um tipo suportado.
    """
    if isinstance(collaborator, AddressChecker):
        return RetryingAddressChecker(collaborator, policy, sleep=sleep)
    if isinstance(collaborator, ProductPriceFetcher):
        return RetryingPriceFetcher(collaborator, policy, sleep=sleep)
    raise TypeError(f"unsupported collaborator: {type(collaborator).__name__}")


def apply_collaborator_settings(
    address_checker: AddressChecker,
    price_fetcher: ProductPriceFetcher,
    settings: CollaboratorSettings,
    *,
    sleep: Sleep = asyncio.sleep,
) -> Tuple[AddressChecker, ProductPriceFetcher]:
    """Timeout por tentativa, retry por fora: retry(timeout(colaborador))."""
    wrapped = []
    for collaborator in (address_checker, price_fetcher):
        if settings.timeout_seconds is not None:
            collaborator = with_timeout(collaborator, settings.timeout_seconds)
        if settings.retry.enabled:
            collaborator = with_retry(collaborator, settings.retry, sleep=sleep)
        wrapped.append(collaborator)
    return wrapped[0], wrapped[1]
