"""Typed Export - Dump sequences of typed records as tables."""

from typed_export.access import retrieve
from typed_export.dump import CSVDumper, Dumper, RVecDumper, TabDumper
from typed_export.errors import ColumnSpecError
from typed_export.extractor import Column, Extractor
from typed_export.format import DEFAULT_FORMAT, PRECISE_FORMAT, R_FORMAT, Format
from typed_export.path import CallStep, CompiledPath, FieldStep, compile_path
from typed_export.types import (
    Kind,
    PrimitiveType,
    bit,
    character,
    classify,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    int128,
    uint8,
    uint16,
    uint32,
    uint64,
    uint128,
)

__all__ = [
    # Main API
    "Extractor",
    "Column",
    "ColumnSpecError",
    # Paths
    "CompiledPath",
    "FieldStep",
    "CallStep",
    "compile_path",
    "retrieve",
    # Types
    "Kind",
    "PrimitiveType",
    "classify",
    "bit",
    "character",
    "uint8",
    "int8",
    "uint16",
    "int16",
    "uint32",
    "int32",
    "uint64",
    "int64",
    "uint128",
    "int128",
    "float32",
    "float64",
    # Output
    "Format",
    "DEFAULT_FORMAT",
    "PRECISE_FORMAT",
    "R_FORMAT",
    "Dumper",
    "CSVDumper",
    "TabDumper",
    "RVecDumper",
]

__version__ = "0.1.0"
