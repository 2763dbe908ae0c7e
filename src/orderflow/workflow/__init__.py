"""
Orquestração do workflow `place_order`.

    - engine   → PlaceOrderWorkflow (sequência de estados, tradução de erros)
    - builder  → composição: colaboradores fechados em `place_order(command)`
"""

from .builder import PlaceOrder, build_place_order, build_place_order_from_config, build_workflow
from .engine import PlaceOrderResult, PlaceOrderWorkflow, WorkflowRun

__all__ = [
    "PlaceOrder",
    "PlaceOrderResult",
    "PlaceOrderWorkflow",
    "WorkflowRun",
    "build_place_order",
    "build_place_order_from_config",
    "build_workflow",
]
