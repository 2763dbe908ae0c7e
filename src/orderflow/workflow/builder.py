# src/orderflow/workflow/builder.py
"""
Ponto de composição do workflow.

A infraestrutura externa ao core constrói os colaboradores uma vez, no
início do processo, e os entrega aqui. O resultado é a única função
pública `place_order(command)`, sem parâmetros de dependência: os
colaboradores ficam fechados na closure.

    place_order = build_place_order(
        product_checker=catalog,
        address_checker=address_service,
        price_fetcher=pricing_service,
    )
    result = await place_order(command)

`build_place_order_from_config` aplica ainda os settings de `workflow.*`
(timeout e retry dos colaboradores, checagens concorrentes, confirmação).
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional

from orderflow.adapters.resilience import apply_collaborator_settings
from orderflow.core.config.settings import WorkflowSettings
from orderflow.core.exceptions import WorkflowConfigurationError
from orderflow.domain.collaborators import AddressChecker, ProductCodeChecker, ProductPriceFetcher
from orderflow.domain.commands import PlaceOrderCommand

from .engine import PlaceOrderResult, PlaceOrderWorkflow

PlaceOrder = Callable[[PlaceOrderCommand], Awaitable[PlaceOrderResult]]


def _require(name: str, collaborator: Any, protocol: type) -> None:
    if collaborator is None or not isinstance(collaborator, protocol):
        raise WorkflowConfigurationError(
            message=f"colaborador '{name}' ausente ou inválido",
            details={"collaborator": name, "expected": protocol.__name__, "received": type(collaborator).__name__},
            hint=f"Forneça um objeto que implemente {protocol.__name__}",
        )


def build_workflow(
    *,
    product_checker: ProductCodeChecker,
    address_checker: AddressChecker,
    price_fetcher: ProductPriceFetcher,
    settings: Optional[WorkflowSettings] = None,
) -> PlaceOrderWorkflow:
    """
    Monta o orquestrador a partir dos colaboradores.

    Raises:
        WorkflowConfigurationError: Se algum colaborador estiver ausente ou
            não implementar o protocolo esperado.
    """
    _require("product_checker", product_checker, ProductCodeChecker)
    _require("address_checker", address_checker, AddressChecker)
    _require("price_fetcher", price_fetcher, ProductPriceFetcher)

    return PlaceOrderWorkflow(
        check_product_exists=product_checker.exists,
        check_address_exists=address_checker.verify,
        get_product_price=price_fetcher.price_of,
        settings=settings,
    )


def build_place_order(
    *,
    product_checker: ProductCodeChecker,
    address_checker: AddressChecker,
    price_fetcher: ProductPriceFetcher,
    settings: Optional[WorkflowSettings] = None,
) -> PlaceOrder:
    workflow = build_workflow(
        product_checker=product_checker,
        address_checker=address_checker,
        price_fetcher=price_fetcher,
        settings=settings,
    )

    async def place_order(command: PlaceOrderCommand) -> PlaceOrderResult:
        return await workflow.place_order(command)

    return place_order


def build_place_order_from_config(
    config: Dict[str, Any],
    *,
    product_checker: ProductCodeChecker,
    address_checker: AddressChecker,
    price_fetcher: ProductPriceFetcher,
) -> PlaceOrder:
    """
    Monta `place_order` aplicando os settings da configuração resolvida.

    Raises:
        InvalidSettingsError: Se a seção `workflow` for inválida.
        WorkflowConfigurationError: Se algum colaborador estiver ausente.
    """
    settings = WorkflowSettings.from_config(config)
    _require("address_checker", address_checker, AddressChecker)
    _require("price_fetcher", price_fetcher, ProductPriceFetcher)
    address_checker, price_fetcher = apply_collaborator_settings(
        address_checker, price_fetcher, settings.collaborators,
    )
    return build_place_order(
        product_checker=product_checker,
        address_checker=address_checker,
        price_fetcher=price_fetcher,
        settings=settings,
    )
