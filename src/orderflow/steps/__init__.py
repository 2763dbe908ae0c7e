"""
Estágios do workflow `place_order`.

Cada estágio é uma função que recebe seus colaboradores como parâmetros
explícitos e converte o estado tipado anterior no seguinte:

    - validate_order  → acumula `ValidationError`s
    - price_order     → fail-fast com um único `PricingError`
    - to_events       → projeção pura, sem modo de falha
"""

from .acknowledge import render_acknowledgment, render_subject
from .events import to_events
from .price import price_order
from .validate import validate_order

__all__ = [
    "price_order",
    "render_acknowledgment",
    "render_subject",
    "to_events",
    "validate_order",
]
