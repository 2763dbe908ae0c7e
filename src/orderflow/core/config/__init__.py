# src/orderflow/core/config/__init__.py
"""
Camada de configuração do orderflow.

Responsabilidades do pacote:
    - Carregar arquivos de configuração (defaults + override local)
    - Resolver a configuração final via deep-merge determinístico
    - Gerar hash canônico da configuração efetiva
    - Materializar `WorkflowSettings` tipado a partir do dict resolvido

Princípios:
    - Configuração é declarativa e não contém lógica de domínio
    - Overrides são sempre explícitos
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não monta o workflow (responsabilidade de `orderflow.workflow.builder`)
    - Não instancia colaboradores
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import (
    AcknowledgmentSettings,
    CollaboratorSettings,
    RetryPolicy,
    WorkflowSettings,
)

__all__ = [
    "AcknowledgmentSettings",
    "CollaboratorSettings",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingsError",
    "RetryPolicy",
    "UnsupportedConfigFormatError",
    "WorkflowSettings",
    "compute_config_hash",
    "deep_merge",
    "load_config",
]
