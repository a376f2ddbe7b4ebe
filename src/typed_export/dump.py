"""Dumpers writing the contents of an Extractor as text."""

from __future__ import annotations

import csv
from typing import TextIO

from typed_export.extractor import Extractor
from typed_export.format import Format


class Dumper:
    """Base class for all dumpers."""

    def dump(self, extractor: Extractor, fmt: Format) -> None:
        """Dump the data defined in ``extractor`` using ``fmt``."""
        raise NotImplementedError


class CSVDumper(Dumper):
    """Dumps values as comma separated values."""

    def __init__(self, stream: TextIO, omit_header: bool = False, dialect: str = "excel") -> None:
        self.stream = stream
        self.omit_header = omit_header
        self.dialect = dialect

    def dump(self, extractor: Extractor, fmt: Format) -> None:
        writer = csv.writer(self.stream, dialect=self.dialect)
        if not self.omit_header:
            writer.writerow(extractor.names)
        for r in range(extractor.n):
            writer.writerow([column.print(fmt, r) for column in extractor.columns])


class TabDumper(Dumper):
    """Dumps values as left-aligned text columns.

    Each column is as wide as its widest cell plus ``padding`` blanks;
    trailing blanks are stripped from every line.
    """

    def __init__(self, stream: TextIO, omit_header: bool = False, padding: int = 1) -> None:
        self.stream = stream
        self.omit_header = omit_header
        self.padding = padding

    def dump(self, extractor: Extractor, fmt: Format) -> None:
        lines: list[list[str]] = []
        if not self.omit_header:
            lines.append(extractor.names)
        for r in range(extractor.n):
            lines.append([column.print(fmt, r) for column in extractor.columns])
        if not lines:
            return

        widths = [max(len(line[i]) for line in lines) + self.padding for i in range(len(extractor.columns))]
        for line in lines:
            cells = [cell.ljust(width) for cell, width in zip(line, widths)]
            self.stream.write("".join(cells).rstrip() + "\n")


class RVecDumper(Dumper):
    """Dumps each column as an R vector.

    If ``data_frame`` is nonempty a data frame of that name combining all
    column vectors is constructed too.
    """

    PER_LINE = 10

    def __init__(self, stream: TextIO, data_frame: str = "") -> None:
        self.stream = stream
        self.data_frame = data_frame

    def dump(self, extractor: Extractor, fmt: Format) -> None:
        for column in extractor.columns:
            self.stream.write(f"{column.name} <- c(")
            for r in range(extractor.n):
                s = column.print(fmt, r)
                if r < extractor.n - 1:
                    s += ",\n" if r % self.PER_LINE == self.PER_LINE - 1 else ", "
                self.stream.write(s)
            self.stream.write(")\n")

        if self.data_frame:
            self.stream.write(f"{self.data_frame} <- data.frame({', '.join(extractor.names)})\n")
