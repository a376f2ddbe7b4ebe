"""Compilation of column specifications into access paths."""

from __future__ import annotations

import functools
import inspect
import logging
import threading
import typing
from dataclasses import dataclass
from typing import Any

from typed_export.errors import ColumnSpecError
from typed_export.parsing import SpecParser
from typed_export.types import (
    Kind,
    bare_type,
    classify,
    has_string_conversion,
    integer_width,
    type_name,
    unwrap_optional,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldStep:
    """Read the attribute ``name``, then follow ``indirection`` optional layers."""

    name: str
    indirection: int = 0

    @property
    def may_fail(self) -> bool:
        return self.indirection > 0


@dataclass(frozen=True)
class CallStep:
    """Invoke the zero-argument accessor ``name``.

    ``fails`` marks accessors returning a ``(value, failure)`` pair.
    ``synthetic`` marks the ``__str__`` call appended for types that are
    only usable through their string form.
    """

    name: str
    indirection: int = 0
    fails: bool = False
    is_property: bool = False
    synthetic: bool = False

    @property
    def may_fail(self) -> bool:
        return self.fails or self.indirection > 0


Step = FieldStep | CallStep


@dataclass(frozen=True)
class CompiledPath:
    """An immutable recipe for reaching a leaf value from a record."""

    steps: tuple[Step, ...]
    kind: Kind
    unsigned: bool = False
    bits: int = 0

    @property
    def name(self) -> str:
        """Dot-joined names of the user-visible steps."""
        return ".".join(s.name for s in self.steps if not (isinstance(s, CallStep) and s.synthetic))

    @property
    def may_fail(self) -> bool:
        return any(s.may_fail for s in self.steps)


# ply parsers keep lexer state between tokens, so each thread gets its own
_local = threading.local()


def parse_spec(spec: str) -> list[str]:
    """Split a column specification into its segments."""
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = _local.parser = SpecParser()
    return parser.parse(spec)


def _field_types(tp: Any) -> dict[str, Any]:
    """Return the annotated attributes of a record type."""
    cls = bare_type(tp)
    if not isinstance(cls, type):
        return {}
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise ColumnSpecError(f"Cannot resolve annotations of {type_name(cls)}: {e}") from e


def _is_failure_slot(tp: Any) -> bool:
    """Check whether an annotation is an optional exception, e.g. ``Exception | None``."""
    inner, indirection = unwrap_optional(tp)
    inner = bare_type(inner)
    return indirection > 0 and isinstance(inner, type) and issubclass(inner, BaseException)


def _resolve_accessor(tp: Any, segment: str, spec: str) -> tuple[CallStep, Any] | None:
    """Resolve ``segment`` as a zero-argument accessor on ``tp``.

    Returns the call step together with the type the accessor yields, or None
    if the type has no member of that name.
    """
    cls = bare_type(tp)
    if not isinstance(cls, type):
        return None
    try:
        member = inspect.getattr_static(cls, segment)
    except AttributeError:
        return None

    is_property = False
    if isinstance(member, property):
        func = member.fget
        is_property = True
    elif isinstance(member, functools.cached_property):
        func = member.func
        is_property = True
    elif inspect.isfunction(member):
        func = member
    else:
        raise ColumnSpecError(
            f"Cannot use member {segment} of {type_name(cls)}: not a method or property",
            spec=spec,
            segment=segment,
        )
    if func is None:
        raise ColumnSpecError(
            f"Cannot use property {segment} of {type_name(cls)}: no getter",
            spec=spec,
            segment=segment,
        )

    params = list(inspect.signature(func).parameters.values())
    if len(params) != 1 or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        raise ColumnSpecError(
            f"Cannot use method {segment} of {type_name(cls)}: accessors take no arguments",
            spec=spec,
            segment=segment,
        )

    try:
        hints = typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as e:
        raise ColumnSpecError(
            f"Cannot resolve return type of {segment} on {type_name(cls)}: {e}",
            spec=spec,
            segment=segment,
        ) from e
    if "return" not in hints:
        raise ColumnSpecError(
            f"Cannot use method {segment} of {type_name(cls)}: missing return annotation",
            spec=spec,
            segment=segment,
        )

    result = hints["return"]
    fails = False
    if bare_type(result) is tuple:
        args = typing.get_args(result)
        if len(args) != 2 or args[1] is Ellipsis or not _is_failure_slot(args[1]):
            raise ColumnSpecError(
                f"Cannot use method {segment} of {type_name(cls)}: ambiguous multiple-return "
                f"type {type_name(result)}, expected (value, Exception | None)",
                spec=spec,
                segment=segment,
            )
        result = args[0]
        fails = True

    result, indirection = unwrap_optional(result)
    step = CallStep(name=segment, indirection=indirection, fails=fails, is_property=is_property)
    return step, result


def build_steps(record_type: Any, spec: str) -> tuple[list[Step], Any]:
    """Construct the steps to access ``spec`` in ``record_type``.

    Returns the steps and the type of the value the last step yields.
    Fields shadow accessors of the same name.
    """
    segments = parse_spec(spec)
    steps: list[Step] = []
    tp = record_type

    for segment in segments:
        fields = _field_types(tp)
        if segment in fields:
            tp, indirection = unwrap_optional(fields[segment])
            steps.append(FieldStep(name=segment, indirection=indirection))
            continue

        resolved = _resolve_accessor(tp, segment, spec)
        if resolved is None:
            raise ColumnSpecError(
                f"No field or accessor {segment} in {type_name(tp)}",
                spec=spec,
                segment=segment,
            )
        step, tp = resolved
        steps.append(step)

    return steps, tp


def compile_path(record_type: Any, spec: str) -> CompiledPath:
    """Compile a column specification against a record type.

    The terminal type must classify to a Kind other than NA. Types without a
    kind that define their own ``__str__`` are read through it as strings.
    """
    steps, tp = build_steps(record_type, spec)

    kind = classify(tp)
    if kind is Kind.NA:
        if not has_string_conversion(tp):
            raise ColumnSpecError(
                f"Cannot use {type_name(tp)} as final element of '{spec}': unsupported terminal type",
                spec=spec,
                segment=steps[-1].name,
            )
        steps.append(CallStep(name="__str__", synthetic=True))
        kind = Kind.STRING

    unsigned, bits = False, 0
    if kind is Kind.INT:
        unsigned, bits = integer_width(tp)

    path = CompiledPath(steps=tuple(steps), kind=kind, unsigned=unsigned, bits=bits)
    logger.debug(
        "compiled column %r on %s: kind=%s steps=%d may_fail=%s",
        spec,
        type_name(record_type),
        kind,
        len(path.steps),
        path.may_fail,
    )
    return path
