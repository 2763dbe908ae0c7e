# src/orderflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do orderflow.

Todas herdam de `ConfigError`, permitindo captura genérica de falhas de
configuração sem confundi-las com falhas de domínio do workflow (que são
valores `Err`, nunca exceções).
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do orderflow."""


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O arquivo de defaults é obrigatório; o loader não tenta inferir
    nem criar defaults automaticamente.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"workflow": {"validation": {"concurrent_checks": true}}}
        - override: {"workflow": {"validation": "off"}}
    """


class InvalidSettingsError(ConfigError):
    """Valor de configuração com tipo ou faixa inválidos para `WorkflowSettings`."""
