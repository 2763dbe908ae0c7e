# src/orderflow/workflow/engine.py
"""
Orquestrador do workflow `place_order`.

Sequência de estados (uma invocação):

    Received → Validating → (ValidationFailed | Validated)
             → Pricing → (PricingFailed | Priced) → EventsEmitted

Decisões arquiteturais:
    - O orquestrador só encadeia valores tipados: passa a saída de um
      estágio como entrada do seguinte, sem inspecionar nem pular campos
    - É o único ponto de tradução de erros de estágio para `PlaceOrderError`
    - Não faz retry de estágio algum
    - Cada invocação cria seu próprio `WorkflowContext`; nenhuma estrutura
      mutável é compartilhada entre invocações concorrentes

Cancelamento:
    `asyncio.CancelledError` observado em um estágio registra o estado
    CANCELLED no trace e é relançado. Eventos só são construídos depois
    que a precificação termina, então uma invocação cancelada nunca emite
    eventos parciais.

Limites explícitos:
    - Não instancia colaboradores (responsabilidade de `builder`)
    - Não entrega eventos nem confirmações
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from orderflow.core.config.settings import WorkflowSettings
from orderflow.core.context import Clock, WorkflowContext, utc_now
from orderflow.core.errors import (
    PlaceOrderError,
    PlaceOrderPricingError,
    PlaceOrderValidationError,
)
from orderflow.core.result import Err, Ok, Result
from orderflow.core.traceability import TRANSITIONS, WorkflowState, WorkflowTrace, create_trace
from orderflow.domain.collaborators import (
    CheckAddressExists,
    CheckProductCodeExists,
    GetProductPrice,
)
from orderflow.domain.commands import Command
from orderflow.domain.events import PlaceOrderEvent
from orderflow.domain.orders import UnvalidatedOrder
from orderflow.steps import price_order, to_events, validate_order

PlaceOrderResult = Result[Tuple[PlaceOrderEvent, ...], PlaceOrderError]


def _new_run_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class WorkflowRun:
    """Resultado de uma invocação com os sinais de observabilidade dela."""

    result: PlaceOrderResult
    trace: WorkflowTrace
    logs: List[Dict[str, Any]]

    @property
    def state(self) -> WorkflowState:
        return self.trace.state


class PlaceOrderWorkflow:
    """Composição dos três estágios atrás de um contrato entrada → saída."""

    def __init__(
        self,
        *,
        check_product_exists: CheckProductCodeExists,
        check_address_exists: CheckAddressExists,
        get_product_price: GetProductPrice,
        settings: Optional[WorkflowSettings] = None,
        clock: Clock = utc_now,
        run_id_factory: Callable[[], str] = _new_run_id,
    ):
        self._check_product_exists = check_product_exists
        self._check_address_exists = check_address_exists
        self._get_product_price = get_product_price
        self.settings = settings or WorkflowSettings()
        self._clock = clock
        self._run_id_factory = run_id_factory

    def _new_context(self, command: Command[UnvalidatedOrder]) -> WorkflowContext:
        run_id = self._run_id_factory()
        trace = create_trace(
            run_id=run_id,
            started_at=self._clock(),
            user_id=command.user_id,
            command_timestamp=command.timestamp,
            config_hash=self.settings.config_hash,
        )
        return WorkflowContext(run_id=run_id, trace=trace, clock=self._clock)

    async def execute(self, command: Command[UnvalidatedOrder]) -> WorkflowRun:
        """
        Executa uma invocação completa e devolve resultado, trace e logs.

        Raises:
            TypeError: Se o comando não carregar um `UnvalidatedOrder`.
            CollaboratorContractError: Se um colaborador violar seu contrato.
            asyncio.CancelledError: Se a invocação for cancelada pelo chamador.
        """
        if not isinstance(command, Command) or not isinstance(command.payload, UnvalidatedOrder):
            raise TypeError("place_order expects Command[UnvalidatedOrder]")

        ctx = self._new_context(command)
        ctx.log(stage="received", level="info", message="command received", user_id=command.user_id)

        try:
            ctx.transition(WorkflowState.VALIDATING)
            validated = await validate_order(
                self._check_product_exists,
                self._check_address_exists,
                command.payload,
                concurrent=self.settings.concurrent_checks,
            )
            if isinstance(validated, Err):
                error = PlaceOrderValidationError(errors=validated.error)
                ctx.transition(WorkflowState.VALIDATION_FAILED, error_count=len(validated.error))
                return self._finish(ctx, Err(error))
            ctx.transition(WorkflowState.VALIDATED)

            ctx.transition(WorkflowState.PRICING)
            priced = await price_order(self._get_product_price, validated.value)
            if isinstance(priced, Err):
                ctx.transition(WorkflowState.PRICING_FAILED, error_kind=priced.error.kind.value)
                return self._finish(ctx, Err(PlaceOrderPricingError(error=priced.error)))
            ctx.transition(WorkflowState.PRICED, amount_to_bill=str(priced.value.amount_to_bill))

        except asyncio.CancelledError:
            if WorkflowState.CANCELLED in TRANSITIONS[ctx.state]:
                ctx.transition(WorkflowState.CANCELLED)
            ctx.log(stage=ctx.state.value, level="warning", message="invocation cancelled; no events emitted")
            raise

        events = to_events(priced.value, acknowledgment=self.settings.acknowledgment)
        ctx.transition(
            WorkflowState.EVENTS_EMITTED,
            events=[type(event).__name__ for event in events],
        )
        return self._finish(ctx, Ok(events))

    def _finish(self, ctx: WorkflowContext, result: PlaceOrderResult) -> WorkflowRun:
        if isinstance(result, Err):
            ctx.log(
                stage=ctx.state.value,
                level="error",
                message=result.error.message,
                error=result.error.to_dict(),
            )
        return WorkflowRun(result=result, trace=ctx.trace, logs=ctx.logs)

    async def place_order(self, command: Command[UnvalidatedOrder]) -> PlaceOrderResult:
        return (await self.execute(command)).result
