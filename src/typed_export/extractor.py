"""Columns and the Extractor binding them to a sequence of records."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from typed_export.access import retrieve
from typed_export.errors import ColumnSpecError
from typed_export.path import CompiledPath, compile_path
from typed_export.types import Kind, bare_type, type_name, unwrap_optional

if TYPE_CHECKING:
    from typed_export.format import Format

logger = logging.getLogger(__name__)


@dataclass
class Binding:
    """A compiled path attached to one concrete sequence of records."""

    data: Sequence[Any]
    path: CompiledPath
    indirection: int = 0

    def value_at(self, row: int) -> Any:
        if row < 0:
            raise IndexError(f"Row {row} out of range")
        return retrieve(self.data[row], self.path, self.indirection)


@dataclass
class Column:
    """One column of an export.

    ``name`` defaults to the dotted column spec and may be changed freely.
    ``kind`` is fixed by the compiled path.
    """

    name: str
    path: CompiledPath
    binding: Binding | None = field(default=None, repr=False)

    @property
    def kind(self) -> Kind:
        return self.path.kind

    def value_at(self, row: int) -> Any:
        """Return the value of this column in ``row``, or None if unavailable."""
        if self.binding is None:
            raise RuntimeError(f"Column {self.name} is not bound to any data")
        return self.binding.value_at(row)

    def print(self, fmt: Format, row: int) -> str:
        """Format the value in ``row`` according to ``fmt``."""
        value = self.value_at(row)
        if value is None:
            return fmt.format_na()
        if self.kind is Kind.BOOL:
            return fmt.format_bool(value)
        if self.kind is Kind.INT:
            return fmt.format_int(value)
        if self.kind is Kind.FLOAT:
            return fmt.format_float(value)
        if self.kind is Kind.COMPLEX:
            return fmt.format_complex(value)
        if self.kind is Kind.STRING:
            return fmt.format_string(value)
        if self.kind is Kind.TIME:
            return fmt.format_time(value)
        if self.kind is Kind.DURATION:
            return fmt.format_duration(value)
        raise ValueError(f"Column {self.name} has unusable kind {self.kind}")


class Extractor:
    """Access to fields and accessors of a sequence of records.

    Every column spec is compiled once against the record type; the
    extractor can afterwards be rebound to other sequences of the same
    record type without recompiling.
    """

    def __init__(self, data: Sequence[Any], *column_specs: str, record_type: Any = None) -> None:
        if not isinstance(data, Sequence) or isinstance(data, (str, bytes, bytearray)):
            raise ColumnSpecError(f"Cannot build extractor for {type(data).__name__}: not a sequence")

        if record_type is None:
            record_type, indirection = self._infer_record_type(data)
        else:
            record_type, indirection = unwrap_optional(record_type)
        if not isinstance(bare_type(record_type), type):
            raise ColumnSpecError(f"Cannot build extractor for records of type {type_name(record_type)}")

        self.record_type: type = bare_type(record_type)
        self.indirection = indirection
        self.n = 0
        self.columns: list[Column] = []

        for spec in column_specs:
            path = compile_path(self.record_type, spec)
            self.columns.append(Column(name=path.name, path=path))

        self.bind(data)

    @staticmethod
    def _infer_record_type(data: Sequence[Any]) -> tuple[Any, int]:
        """Derive the record type and primary indirection from the data itself."""
        has_none = any(item is None for item in data)
        for item in data:
            if item is not None:
                return type(item), int(has_none)
        raise ColumnSpecError("Cannot infer record type from data without records; pass record_type")

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.columns]

    def bind(self, data: Sequence[Any]) -> None:
        """(Re)bind to ``data``, which must hold the record type this extractor was built for.

        Raises TypeError on mismatching records.
        """
        if not isinstance(data, Sequence) or isinstance(data, (str, bytes, bytearray)):
            raise TypeError(f"Cannot bind extractor for {type_name(self.record_type)} to {type(data).__name__}")
        for i, item in enumerate(data):
            if item is None:
                if not self.indirection:
                    raise TypeError(
                        f"Cannot bind extractor for {type_name(self.record_type)}: record {i} is None"
                    )
            elif type(item) is not self.record_type:
                raise TypeError(
                    f"Cannot bind extractor for {type_name(self.record_type)} "
                    f"to record {i} of type {type(item).__qualname__}"
                )

        self.n = len(data)
        for column in self.columns:
            column.binding = Binding(data=data, path=column.path, indirection=self.indirection)
        logger.debug("bound %d columns to %d %s records", len(self.columns), self.n, type_name(self.record_type))

    def rows(self) -> list[list[Any]]:
        """Return all values, row by row, with None for unavailable cells."""
        return [[c.value_at(r) for c in self.columns] for r in range(self.n)]

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"Extractor({type_name(self.record_type)}, n={self.n}, columns={self.names})"
