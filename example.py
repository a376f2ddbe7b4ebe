"""Example usage of the typed_export library."""

import datetime
import sys
from dataclasses import dataclass
from typing import Optional

from typed_export import DEFAULT_FORMAT, R_FORMAT, Extractor, RVecDumper, TabDumper


@dataclass
class Other:
    Start: datetime.datetime

    def Unix(self) -> int:
        return int(self.Start.timestamp())


@dataclass
class Some:
    Flt: float
    Str: str
    IntP: Optional[int]
    Other: Other
    OtherP: Optional[Other]

    def Method1(self) -> int:
        return int(self.Flt + 0.5)

    def Method2(self) -> tuple[bool, Optional[Exception]]:
        if self.Str == "":
            return False, ValueError("empty")
        return len(self.Str) > 5, None


utc = datetime.timezone.utc
t0 = datetime.datetime(2009, 12, 28, 8, 45, 0, tzinfo=utc)
t1 = datetime.datetime(2014, 12, 12, 23, 59, 59, tzinfo=utc)
t2 = datetime.datetime(2099, 1, 1, 0, 1, 0, tzinfo=utc)

data = [
    Some(3.14, "Hello", 8, Other(t0), Other(t1)),
    Some(2.72, "Go", None, Other(t1), Other(t2)),
    Some(1.41, "", 9, Other(t2), None),
]

# Fields, optional fields, methods and nested elements
extractor = Extractor(
    data,
    "Flt", "Str", "IntP",
    "Method1", "Method2",
    "Other.Start", "OtherP.Unix",
)

print("Aligned text:")
TabDumper(sys.stdout).dump(extractor, DEFAULT_FORMAT)

# Shorter names for R
extractor.columns[5].name = "Start"
extractor.columns[6].name = "Unix"

print("\nR vectors:")
RVecDumper(sys.stdout, data_frame="some").dump(extractor, R_FORMAT)
