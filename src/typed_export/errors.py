"""Exceptions raised while building extractors."""

from __future__ import annotations


class ColumnSpecError(ValueError):
    """A column specification could not be compiled against a record type.

    ``spec`` is the full column specification and ``segment`` the dotted
    element that failed, when the failure can be pinned to one.
    """

    def __init__(self, message: str, spec: str | None = None, segment: str | None = None) -> None:
        super().__init__(message)
        self.spec = spec
        self.segment = segment
