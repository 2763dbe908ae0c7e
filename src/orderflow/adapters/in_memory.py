# src/orderflow/adapters/in_memory.py
"""
Colaboradores em memória, para execuções locais e testes.

Nenhum deles faz I/O; implementam os protocolos de
`orderflow.domain.collaborators` sobre dados estáticos.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping

from orderflow.core.errors import (
    AddressCheckError,
    AddressCheckReason,
    PriceLookupError,
    PriceLookupReason,
)
from orderflow.core.result import Err, Ok, Result
from orderflow.domain.orders import Address, ConfirmedAddress
from orderflow.domain.simple_types import Price, ProductCode, String50


class StaticProductCatalog:
    """Catálogo fixo de códigos de produto."""

    def __init__(self, codes: Iterable[str]):
        self.codes = frozenset(str(c) for c in codes)

    def exists(self, code: ProductCode) -> bool:
        return str(code) in self.codes


class StaticAddressBook:
    """
    Verificador de endereços baseado em CEP → cidade.

    Confirma endereços cujo CEP é conhecido, normalizando a cidade para a
    grafia do catálogo. CEP desconhecido é resposta definitiva (NOT_FOUND).
    """

    def __init__(self, cities_by_zip: Mapping[str, str]):
        self.cities_by_zip = {str(z): String50(c) for z, c in cities_by_zip.items()}

    async def verify(self, address: Address) -> Result[ConfirmedAddress, AddressCheckError]:
        city = self.cities_by_zip.get(str(address.zip_code))
        if city is None:
            return Err(AddressCheckError(
                reason=AddressCheckReason.NOT_FOUND,
                message=f"unknown zip code {address.zip_code}",
            ))
        return Ok(ConfirmedAddress(
            address=replace(address, city=city),
            reference=f"zip:{address.zip_code}",
        ))


class StaticPriceList:
    """Tabela fixa de preços unitários por código de produto."""

    def __init__(self, prices: Mapping[str, Any]):
        self.prices = {str(code): Price.of(value) for code, value in prices.items()}

    async def price_of(self, code: ProductCode) -> Result[Price, PriceLookupError]:
        price = self.prices.get(str(code))
        if price is None:
            return Err(PriceLookupError(
                reason=PriceLookupReason.UNKNOWN_PRODUCT,
                message=f"no price for {code}",
            ))
        return Ok(price)
