# tests/workflow/test_builder.py
"""
Testes da composição do workflow (builder).

Os testes asseguram que:
- colaboradores ausentes ou inválidos são rejeitados na montagem
- settings da configuração são aplicados (timeout, retry, confirmação)
- o hash da configuração chega ao trace de cada execução
"""

from pathlib import Path

import pytest

from orderflow import build_place_order_from_config
from orderflow.adapters import StaticAddressBook, StaticPriceList, StaticProductCatalog
from orderflow.core.config import InvalidSettingsError, compute_config_hash, load_config
from orderflow.core.config.settings import WorkflowSettings
from orderflow.core.errors import AddressCheckReason, ValidationErrorKind
from orderflow.core.exceptions import WorkflowConfigurationError
from orderflow.core.result import Err, Ok
from orderflow.workflow import build_place_order, build_workflow
from tests.fixtures.collaborators import FakeAddressChecker, FakePriceFetcher, FakeProductChecker
from tests.fixtures.orders import command

FAST_RETRY = {"max_attempts": 3, "base_delay": 0.0, "max_delay": 0.0}


def _config(**collaborators):
    return {"workflow": {"collaborators": collaborators}}


@pytest.mark.parametrize("missing", ["product_checker", "address_checker", "price_fetcher"])
def test_missing_collaborator_is_rejected(missing):
    kwargs = {
        "product_checker": FakeProductChecker(),
        "address_checker": FakeAddressChecker(),
        "price_fetcher": FakePriceFetcher(),
    }
    kwargs[missing] = None
    with pytest.raises(WorkflowConfigurationError) as exc:
        build_place_order(**kwargs)
    assert exc.value.details["collaborator"] == missing


def test_collaborator_without_protocol_method_is_rejected():
    with pytest.raises(WorkflowConfigurationError):
        build_workflow(
            product_checker=FakeProductChecker(),
            address_checker=FakePriceFetcher(),
            price_fetcher=FakePriceFetcher(),
        )


@pytest.mark.asyncio
async def test_in_memory_adapters_place_an_order():
    place_order = build_place_order(
        product_checker=StaticProductCatalog(["P1"]),
        address_checker=StaticAddressBook({"12345": "Springfield"}),
        price_fetcher=StaticPriceList({"P1": "10.00"}),
    )
    result = await place_order(command())
    assert isinstance(result, Ok)
    assert len(result.value) == 3


@pytest.mark.asyncio
async def test_timeout_from_config_becomes_address_check_failure():
    place_order = build_place_order_from_config(
        _config(timeout_seconds=0.01),
        product_checker=FakeProductChecker(),
        address_checker=FakeAddressChecker(delay=1.0),
        price_fetcher=FakePriceFetcher(),
    )

    result = await place_order(command())

    assert isinstance(result, Err)
    error = result.error.errors.head
    assert error.kind is ValidationErrorKind.ADDRESS_CHECK_FAILED
    assert "timeout" in error.message
    assert result.error.is_infrastructure_failure is True


@pytest.mark.asyncio
async def test_retry_from_config_recovers_from_transient_failure():
    address_checker = FakeAddressChecker(failure=AddressCheckReason.UNREACHABLE, fail_times=2)
    place_order = build_place_order_from_config(
        _config(retry=FAST_RETRY),
        product_checker=FakeProductChecker(),
        address_checker=address_checker,
        price_fetcher=FakePriceFetcher(),
    )

    result = await place_order(command())

    assert isinstance(result, Ok)
    assert len(address_checker.calls) == 3


@pytest.mark.asyncio
async def test_without_retry_transient_failure_is_reported():
    address_checker = FakeAddressChecker(failure=AddressCheckReason.UNREACHABLE, fail_times=1)
    place_order = build_place_order_from_config(
        {},
        product_checker=FakeProductChecker(),
        address_checker=address_checker,
        price_fetcher=FakePriceFetcher(),
    )

    result = await place_order(command())

    assert isinstance(result, Err)
    assert len(address_checker.calls) == 1


@pytest.mark.asyncio
async def test_acknowledgment_settings_reach_events():
    config = {"workflow": {"acknowledgment": {"sender": "shop@example.org", "subject": "Pedido {order_id}"}}}
    place_order = build_place_order_from_config(
        config,
        product_checker=FakeProductChecker(),
        address_checker=FakeAddressChecker(),
        price_fetcher=FakePriceFetcher(),
    )

    result = await place_order(command())

    ack = result.value[-1]
    assert ack.sender == "shop@example.org"
    assert ack.subject == "Pedido O1"


@pytest.mark.asyncio
async def test_config_hash_is_recorded_in_trace(tmp_path: Path, workflow_defaults_yaml):
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(workflow_defaults_yaml, encoding="utf-8")
    config = load_config(defaults_path=defaults)

    workflow = build_workflow(
        product_checker=FakeProductChecker(),
        address_checker=FakeAddressChecker(),
        price_fetcher=FakePriceFetcher(),
        settings=WorkflowSettings.from_config(config),
    )
    run = await workflow.execute(command())

    assert run.trace.inputs["config_hash"] == compute_config_hash(config)


def test_invalid_config_is_rejected_at_build_time():
    with pytest.raises(InvalidSettingsError):
        build_place_order_from_config(
            _config(timeout_seconds=-1),
            product_checker=FakeProductChecker(),
            address_checker=FakeAddressChecker(),
            price_fetcher=FakePriceFetcher(),
        )
