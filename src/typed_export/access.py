"""Walking compiled paths over concrete records."""

from __future__ import annotations

from typing import Any

from typed_export.path import CallStep, CompiledPath, Step
from typed_export.types import Kind


class Absent(Exception):
    """Raised inside ``access`` when a step yields no value."""

    def __init__(self, step: Step, reason: str) -> None:
        super().__init__(f"{reason} on {step.name}")
        self.step = step


def access(value: Any, steps: tuple[Step, ...] | list[Step]) -> Any:
    """Drill down into ``value`` following ``steps``.

    Raises Absent at the first None reference or failed accessor; later
    steps are not attempted. Exceptions raised by accessors propagate.
    """
    for step in steps:
        if isinstance(step, CallStep):
            if step.synthetic:
                value = str(value)
            elif step.is_property:
                value = getattr(value, step.name)
            else:
                value = getattr(value, step.name)()
            if step.fails:
                value, failure = value
                if failure is not None:
                    raise Absent(step, "accessor failed")
        else:
            value = getattr(value, step.name)

        if step.indirection and value is None:
            raise Absent(step, "None reference")

    return value


def convert(value: Any, path: CompiledPath) -> Any:
    """Convert a leaf value to the Python type of its path's Kind."""
    kind = path.kind
    if kind is Kind.BOOL:
        return bool(value)
    if kind is Kind.INT:
        value = int(value)
        if path.unsigned and value < 0:
            # Reinterpret two's-complement storage as the unsigned magnitude
            value &= (1 << path.bits) - 1
        return value
    if kind is Kind.FLOAT:
        return float(value)
    if kind is Kind.COMPLEX:
        return complex(value)
    if kind is Kind.STRING:
        return str(value)
    # TIME and DURATION values are passed through as datetime/timedelta
    return value


def retrieve(record: Any, path: CompiledPath, indirection: int = 0) -> Any:
    """Return the value ``path`` selects in ``record``, or None if absent.

    ``indirection`` is the number of optional layers on the records
    themselves, e.g. 1 for a list of ``Record | None``.
    """
    if indirection and record is None:
        return None
    try:
        leaf = access(record, path.steps)
    except Absent:
        return None
    return convert(leaf, path)
