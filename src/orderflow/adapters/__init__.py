"""
Adaptadores de colaboradores externos.

    - in_memory   → implementações estáticas dos protocolos de colaborador
    - resilience  → wrappers de timeout e retry aplicados pela composição
"""

from .in_memory import StaticAddressBook, StaticPriceList, StaticProductCatalog
from .resilience import apply_collaborator_settings, with_retry, with_timeout

__all__ = [
    "StaticAddressBook",
    "StaticPriceList",
    "StaticProductCatalog",
    "apply_collaborator_settings",
    "with_retry",
    "with_timeout",
]
