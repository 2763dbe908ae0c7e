# src/orderflow/domain/collaborators.py
"""
Contratos dos colaboradores externos consumidos pelo core.

O core não implementa catálogo, verificação de endereço nem serviço de
preços: apenas declara as capacidades de que precisa.

Duas formas equivalentes de cada capacidade:
    - Protocol (objeto de serviço, usado pela composição)
    - Callable (função, recebida explicitamente pelos estágios)

A composição (`orderflow.workflow.builder`) recebe os objetos e repassa
seus métodos ligados aos estágios. Estágios nunca buscam colaboradores em
estado global.

Invariantes:
    - `exists` é um predicado; pode ser síncrono ou retornar awaitable
    - `verify` e `price_of` reportam falhas como valores `Err`; costumam ser
      async, mas implementações síncronas também são aceitas pelos estágios
      e pelos wrappers de resiliência
"""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol, Union, runtime_checkable

from orderflow.core.errors import AddressCheckError, PriceLookupError
from orderflow.core.result import Result

from .orders import Address, ConfirmedAddress
from .simple_types import Price, ProductCode

CheckProductCodeExists = Callable[[ProductCode], Union[bool, Awaitable[bool]]]
AddressCheckResult = Result[ConfirmedAddress, AddressCheckError]
PriceLookupResult = Result[Price, PriceLookupError]

CheckAddressExists = Callable[[Address], Union[AddressCheckResult, Awaitable[AddressCheckResult]]]
GetProductPrice = Callable[[ProductCode], Union[PriceLookupResult, Awaitable[PriceLookupResult]]]


@runtime_checkable
class ProductCodeChecker(Protocol):
    """Predicado de existência de um código no catálogo de produtos."""

    def exists(self, code: ProductCode) -> bool:
        ...


@runtime_checkable
class AddressChecker(Protocol):
    """
    Verificador de endereços.

    Retorna a representação confirmada (possivelmente normalizada) ou um
    `AddressCheckError`, que distingue "não encontrado" de falha de
    infraestrutura (`UNREACHABLE`, `TIMEOUT`).
    """

    async def verify(self, address: Address) -> Result[ConfirmedAddress, AddressCheckError]:
        ...


@runtime_checkable
class ProductPriceFetcher(Protocol):
    """Serviço de preços por código de produto."""

    async def price_of(self, code: ProductCode) -> Result[Price, PriceLookupError]:
        ...
