"""Derived views that recompute only when their declared inputs change."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Derivation(Generic[T]):
    """A cached computation over a declared set of inputs.

    ``select`` picks the inputs out of whatever context is passed to
    ``get``; ``compute`` is only called again when the selected inputs
    compare unequal to the previous ones.
    """

    def __init__(
        self,
        name: str,
        select: Callable[[Any], tuple[Any, ...]],
        compute: Callable[..., T],
    ) -> None:
        self.name = name
        self._select = select
        self._compute = compute
        self._inputs: Any = _UNSET
        self._value: T | None = None
        self.recomputations = 0

    def get(self, context: Any) -> T:
        inputs = self._select(context)
        if self._inputs is _UNSET or inputs != self._inputs:
            self._value = self._compute(*inputs)
            self._inputs = inputs
            self.recomputations += 1
        return self._value  # type: ignore[return-value]
