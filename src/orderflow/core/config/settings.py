# src/orderflow/core/config/settings.py
"""
Settings tipados do workflow.

Este módulo materializa a seção `workflow` da configuração resolvida em
estruturas imutáveis, validando tipos e faixas de forma explícita.

Config esperada (exemplo):
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

Chaves ausentes assumem os defaults das dataclasses. Valores inválidos
levantam `InvalidSettingsError`; nenhum valor é corrigido silenciosamente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import InvalidSettingsError
from .hashing import compute_config_hash


def _section(cfg: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
    value = cfg.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidSettingsError(f"{path}.{key} must be a mapping")
    return value


def _number(cfg: Dict[str, Any], key: str, path: str, default: float, *, minimum: float) -> float:
    value = cfg.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSettingsError(f"{path}.{key} must be a number")
    if value < minimum:
        raise InvalidSettingsError(f"{path}.{key} must be >= {minimum}")
    return float(value)


@dataclass(frozen=True)
class RetryPolicy:
    """Política de retry com backoff exponencial para colaboradores."""

    max_attempts: int = 1
    base_delay: float = 0.1
    max_delay: float = 2.0
    exponential_base: float = 2.0

    @property
    def enabled(self) -> bool:
        return self.max_attempts > 1

    def delay_for(self, attempt: int) -> float:
        """Atraso antes da próxima tentativa, após a tentativa `attempt` (1-based)."""
        return min(self.base_delay * (self.exponential_base ** (attempt - 1)), self.max_delay)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any], path: str = "workflow.collaborators.retry") -> "RetryPolicy":
        max_attempts = cfg.get("max_attempts", cls.max_attempts)
        if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
            raise InvalidSettingsError(f"{path}.max_attempts must be an integer >= 1")
        base_delay = _number(cfg, "base_delay", path, cls.base_delay, minimum=0.0)
        max_delay = _number(cfg, "max_delay", path, cls.max_delay, minimum=0.0)
        if max_delay < base_delay:
            raise InvalidSettingsError(f"{path}.max_delay must be >= base_delay")
        return cls(
            max_attempts=max_attempts,
            base_delay=base_delay,
            max_delay=max_delay,
            exponential_base=_number(cfg, "exponential_base", path, cls.exponential_base, minimum=1.0),
        )


@dataclass(frozen=True)
class CollaboratorSettings:
    """Timeout e retry aplicados aos colaboradores pela camada de composição."""

    timeout_seconds: Optional[float] = None
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any], path: str = "workflow.collaborators") -> "CollaboratorSettings":
        timeout: Optional[float] = None
        if cfg.get("timeout_seconds") is not None:
            timeout = _number(cfg, "timeout_seconds", path, 0.0, minimum=0.0)
            if timeout == 0.0:
                raise InvalidSettingsError(f"{path}.timeout_seconds must be > 0 or null")
        return cls(
            timeout_seconds=timeout,
            retry=RetryPolicy.from_dict(_section(cfg, "retry", path), f"{path}.retry"),
        )


@dataclass(frozen=True)
class AcknowledgmentSettings:
    """Remetente e assunto usados na confirmação renderizada do pedido."""

    sender: str = "orders@example.com"
    subject: str = "Order {order_id} received"

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any], path: str = "workflow.acknowledgment") -> "AcknowledgmentSettings":
        sender = cfg.get("sender", cls.sender)
        subject = cfg.get("subject", cls.subject)
        for key, value in (("sender", sender), ("subject", subject)):
            if not isinstance(value, str) or not value.strip():
                raise InvalidSettingsError(f"{path}.{key} must be a non-empty string")
        try:
            subject.format(order_id="")
        except (KeyError, IndexError, ValueError) as e:
            raise InvalidSettingsError(
                f"{path}.subject only supports the {{order_id}} placeholder"
            ) from e
        return cls(sender=sender.strip(), subject=subject)


@dataclass(frozen=True)
class WorkflowSettings:
    """
    Settings efetivos do workflow `place_order`.

    Campos:
        - concurrent_checks: executa as checagens independentes da validação
          concorrentemente (apenas latência muda, nunca o conjunto de erros)
        - collaborators: timeout/retry aplicados pela composição
        - acknowledgment: parâmetros da confirmação renderizada
        - config_hash: hash da configuração de origem (None quando criado em código)
    """

    concurrent_checks: bool = True
    collaborators: CollaboratorSettings = field(default_factory=CollaboratorSettings)
    acknowledgment: AcknowledgmentSettings = field(default_factory=AcknowledgmentSettings)
    config_hash: Optional[str] = None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "WorkflowSettings":
        """
        Materializa os settings a partir da configuração resolvida.

        Raises:
            InvalidSettingsError: Se algum valor tiver tipo ou faixa inválidos.
        """
        if not isinstance(config, dict):
            raise InvalidSettingsError(f"config must be a dict, got {type(config).__name__}")

        workflow = _section(config, "workflow", "config")
        validation = _section(workflow, "validation", "workflow")

        concurrent = validation.get("concurrent_checks", True)
        if not isinstance(concurrent, bool):
            raise InvalidSettingsError("workflow.validation.concurrent_checks must be a bool")

        return cls(
            concurrent_checks=concurrent,
            collaborators=CollaboratorSettings.from_dict(_section(workflow, "collaborators", "workflow")),
            acknowledgment=AcknowledgmentSettings.from_dict(_section(workflow, "acknowledgment", "workflow")),
            config_hash=compute_config_hash(config),
        )
