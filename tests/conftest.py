# tests/conftest.py
"""
Fixtures compartilhados para testes do orderflow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas do workflow
- colaboradores falsos com contadores de chamadas
- relógio fixo para traces e logs reproduzíveis

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Colaboradores são fakes em memória, nunca serviços reais
    - Nenhuma fixture é assíncrona (compatível com pytest-asyncio em modo strict)

Invariantes:
    - Nenhuma fixture executa o workflow
    - Nenhuma fixture realiza I/O de rede
    - Todas as fixtures são isoladas por teste
"""

from datetime import datetime, timezone

import pytest

from tests.fixtures.collaborators import FakeAddressChecker, FakePriceFetcher, FakeProductChecker


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def workflow_defaults_yaml() -> str:
    """YAML de defaults semelhante a `config/defaults.yaml`."""
    return """
workflow:
  validation:
    concurrent_checks: true
  collaborators:
    timeout_seconds: 5.0
    retry:
      max_attempts: 3
      base_delay: 0.1
      max_delay: 2.0
      exponential_base: 2.0
  acknowledgment:
    sender: orders@example.com
    subject: "Order {order_id} received"
""".lstrip()


@pytest.fixture
def workflow_local_yaml() -> str:
    """Overrides locais: desliga retry e concorrência, troca remetente."""
    return """
workflow:
  validation:
    concurrent_checks: false
  collaborators:
    retry:
      max_attempts: 1
  acknowledgment:
    sender: shop@example.org
""".lstrip()


# =====================================================
# Collaborator fixtures
# =====================================================

@pytest.fixture
def product_checker() -> FakeProductChecker:
    return FakeProductChecker(known=("P1", "P2", "P3"))


@pytest.fixture
def address_checker() -> FakeAddressChecker:
    return FakeAddressChecker()


@pytest.fixture
def price_fetcher() -> FakePriceFetcher:
    return FakePriceFetcher({"P1": "10.00", "P2": "0.10", "P3": "0"})


@pytest.fixture
def fixed_clock():
    ts = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: ts
