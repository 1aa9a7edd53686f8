"""Expression-evaluation contexts used as an alternative value source."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, MutableMapping, Optional, Protocol, Sequence

from .errors import ExpressionError

_MISSING = object()


class ExpressionContext(Protocol):
    """An evaluator bound to its data.

    ``variables`` may be None when the context does not support injected
    variables.
    """

    variables: Optional[MutableMapping[str, Any]]

    def evaluate(self, expression: str) -> Any: ...


@contextmanager
def injected_variable(context: ExpressionContext, name: str, value: Any) -> Iterator[None]:
    """Expose ``name`` to the evaluator for the duration of the block.

    A value previously bound to ``name`` is put back afterwards; otherwise
    the name is removed. Restoration happens even if evaluation fails.
    """

    variables = getattr(context, "variables", None)
    if variables is None:
        yield
        return
    previous = variables.get(name, _MISSING)
    variables[name] = value
    try:
        yield
    finally:
        if previous is _MISSING:
            variables.pop(name, None)
        else:
            variables[name] = previous


class PathContext:
    """Resolve dotted paths such as ``$account.mrn`` against nested data.

    Variables shadow top-level keys of ``data``. Sequence items are addressed
    by their integer index.
    """

    def __init__(self, data: Mapping[str, Any], variables: Optional[MutableMapping[str, Any]] = None) -> None:
        self.data = data
        self.variables: MutableMapping[str, Any] = {} if variables is None else variables

    def evaluate(self, expression: str) -> Any:
        path = expression.strip()
        if path.startswith("$"):
            path = path[1:]
        if not path:
            raise ExpressionError("empty expression")
        head, *rest = path.split(".")
        if head in self.variables:
            current = self.variables[head]
        elif head in self.data:
            current = self.data[head]
        else:
            raise ExpressionError(f"unknown name {head!r} in {expression!r}")
        for part in rest:
            current = self._step(current, part, expression)
        return "" if current is None else current

    @staticmethod
    def _step(current: Any, part: str, expression: str) -> Any:
        if isinstance(current, Mapping):
            if part in current:
                return current[part]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                return current[int(part)]
            except (ValueError, IndexError):
                pass
        raise ExpressionError(f"cannot resolve {part!r} in {expression!r}")


__all__ = ["ExpressionContext", "PathContext", "injected_variable"]
