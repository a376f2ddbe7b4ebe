"""Value kinds and the type classifier for the typed_export library."""

from __future__ import annotations

import datetime
import numbers
import types
import typing
from enum import Enum
from typing import Annotated, Any, Union


class PrimitiveType(Enum):
    """Fixed-width primitive types that can annotate record fields."""

    BIT = "bit"
    CHARACTER = "character"
    UINT8 = "uint8"
    INT8 = "int8"
    UINT16 = "uint16"
    INT16 = "int16"
    UINT32 = "uint32"
    INT32 = "int32"
    UINT64 = "uint64"
    INT64 = "int64"
    UINT128 = "uint128"
    INT128 = "int128"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def bits(self) -> int:
        """Return the width in bits of values annotated with this type."""
        widths = {
            PrimitiveType.BIT: 1,
            PrimitiveType.CHARACTER: 32,  # one Unicode code point
            PrimitiveType.UINT8: 8,
            PrimitiveType.INT8: 8,
            PrimitiveType.UINT16: 16,
            PrimitiveType.INT16: 16,
            PrimitiveType.UINT32: 32,
            PrimitiveType.INT32: 32,
            PrimitiveType.UINT64: 64,
            PrimitiveType.INT64: 64,
            PrimitiveType.UINT128: 128,
            PrimitiveType.INT128: 128,
            PrimitiveType.FLOAT32: 32,
            PrimitiveType.FLOAT64: 64,
        }
        return widths[self]

    @property
    def is_integer(self) -> bool:
        return self.value.startswith(("int", "uint"))

    @property
    def is_unsigned(self) -> bool:
        return self.value.startswith("uint")

    @property
    def is_float(self) -> bool:
        return self.value.startswith("float")


# Annotation aliases for fixed-width record fields, e.g. ``count: uint64``
bit = Annotated[bool, PrimitiveType.BIT]
character = Annotated[str, PrimitiveType.CHARACTER]
uint8 = Annotated[int, PrimitiveType.UINT8]
int8 = Annotated[int, PrimitiveType.INT8]
uint16 = Annotated[int, PrimitiveType.UINT16]
int16 = Annotated[int, PrimitiveType.INT16]
uint32 = Annotated[int, PrimitiveType.UINT32]
int32 = Annotated[int, PrimitiveType.INT32]
uint64 = Annotated[int, PrimitiveType.UINT64]
int64 = Annotated[int, PrimitiveType.INT64]
uint128 = Annotated[int, PrimitiveType.UINT128]
int128 = Annotated[int, PrimitiveType.INT128]
float32 = Annotated[float, PrimitiveType.FLOAT32]
float64 = Annotated[float, PrimitiveType.FLOAT64]

# Width assumed for plain ``int`` annotations
DEFAULT_INTEGER = PrimitiveType.INT64


class Kind(Enum):
    """The semantic kind of a column's values."""

    NA = "NA"
    BOOL = "Bool"
    INT = "Int"
    FLOAT = "Float"
    COMPLEX = "Complex"
    STRING = "String"
    TIME = "Time"
    DURATION = "Duration"

    def __str__(self) -> str:
        return self.value


# Builtins that define __str__ but have no canonical text form for a cell
_NO_TEXT_FORM = (bytes, bytearray, memoryview, list, tuple, dict, set, frozenset)


def unwrap_optional(tp: Any) -> tuple[Any, int]:
    """Strip ``Optional`` layers from an annotation.

    Returns the bare annotation and the number of optional layers removed.
    ``X | None`` and ``Optional[X]`` both count as one layer; unions with more
    than one non-None member are returned unchanged.
    """
    indirection = 0
    while True:
        origin = typing.get_origin(tp)
        if origin is Annotated:
            inner, layers = unwrap_optional(typing.get_args(tp)[0])
            if layers == 0:
                return tp, indirection
            # Keep the metadata on the stripped type
            tp = Annotated[(inner, *tp.__metadata__)]
            indirection += layers
            continue
        if origin is Union or origin is types.UnionType:
            members = [a for a in typing.get_args(tp) if a is not type(None)]
            if len(members) == 1 and len(members) != len(typing.get_args(tp)):
                tp = members[0]
                indirection += 1
                continue
        return tp, indirection


def primitive_of(tp: Any) -> PrimitiveType | None:
    """Return the PrimitiveType carried by an ``Annotated`` annotation, if any."""
    if typing.get_origin(tp) is Annotated:
        for meta in tp.__metadata__:
            if isinstance(meta, PrimitiveType):
                return meta
    return None


def bare_type(tp: Any) -> Any:
    """Drop ``Annotated`` metadata and generic parameters from an annotation."""
    if typing.get_origin(tp) is Annotated:
        tp = typing.get_args(tp)[0]
    origin = typing.get_origin(tp)
    if isinstance(origin, type) and origin is not types.UnionType:
        return origin
    return tp


def classify(tp: Any) -> Kind:
    """Map an annotation to the Kind of value it holds.

    Durations are checked before integers and booleans before everything
    else, so ``timedelta`` and ``bool`` never fall into the numeric kinds.
    Record types (other than ``datetime``) classify as NA.
    """
    prim = primitive_of(tp)
    if prim is not None:
        if prim is PrimitiveType.BIT:
            return Kind.BOOL
        if prim is PrimitiveType.CHARACTER:
            return Kind.STRING
        if prim.is_integer:
            return Kind.INT
        return Kind.FLOAT

    t = bare_type(tp)
    if not isinstance(t, type):
        return Kind.NA
    if issubclass(t, bool):
        return Kind.BOOL
    if issubclass(t, datetime.timedelta):
        return Kind.DURATION
    if issubclass(t, numbers.Integral):
        return Kind.INT
    if issubclass(t, numbers.Real):
        return Kind.FLOAT
    if issubclass(t, numbers.Complex):
        return Kind.COMPLEX
    if issubclass(t, str):
        return Kind.STRING
    if issubclass(t, datetime.datetime):
        return Kind.TIME
    return Kind.NA


def integer_width(tp: Any) -> tuple[bool, int]:
    """Return ``(unsigned, bits)`` for an integer annotation."""
    prim = primitive_of(tp) or DEFAULT_INTEGER
    return prim.is_unsigned, prim.bits


def has_string_conversion(tp: Any) -> bool:
    """Check whether a type defines its own ``__str__``."""
    t = bare_type(tp)
    if not isinstance(t, type) or issubclass(t, _NO_TEXT_FORM):
        return False
    return t.__str__ is not object.__str__


def type_name(tp: Any) -> str:
    """Return a readable name for an annotation, used in error messages."""
    if isinstance(tp, type) and typing.get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
