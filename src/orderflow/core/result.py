# src/orderflow/core/result.py
"""
Formas canônicas de resultado do orderflow.

Este módulo define as duas formas de retorno usadas pelos estágios do
workflow, mantendo explícita a diferença entre acumulação e fail-fast:

    - Ok / Err          → resultado de valor único (sucesso ou um erro)
    - NonEmptyList      → coleção ordenada de erros que nunca é vazia

Uso no pipeline:
    - validação retorna `Result[ValidatedOrder, NonEmptyList[ValidationError]]`
    - precificação retorna `Result[PricedOrder, PricingError]`

Invariantes:
    - Ok e Err são imutáveis
    - NonEmptyList sempre possui ao menos um elemento
    - A ordem dos elementos de NonEmptyList é a ordem de inserção

Limites explícitos:
    - Não implementa mônadas genéricas nem encadeamento automático
    - Não converte exceções em resultados
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Resultado de sucesso carregando o valor produzido pelo estágio."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Resultado de falha carregando o erro (ou a lista de erros) do estágio."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


class NonEmptyList(tuple, Generic[T]):
    """
    Tupla imutável que garante ao menos um elemento.

    Usada para os erros acumulados da validação: uma falha de validação
    sem nenhum erro não é representável.
    """

    def __new__(cls, items: Iterable[T]) -> "NonEmptyList[T]":
        values = tuple(items)
        if not values:
            raise ValueError("NonEmptyList requires at least one element")
        return super().__new__(cls, values)

    @property
    def head(self) -> T:
        return self[0]

    def __repr__(self) -> str:
        return f"NonEmptyList({list(self)!r})"
