"""Formatting options for rendering column values as text."""

from __future__ import annotations

import cmath
import json
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo


@dataclass(frozen=True)
class Format:
    """How values of each kind are turned into strings.

    Numeric and string options are ``str.format`` templates, ``time_fmt`` is a
    ``strftime`` pattern (None selects ISO 8601). ``duration_fmt`` receives
    the timedelta as its positional argument plus the ``seconds`` and
    ``nanoseconds`` keywords.

    If ``time_zone`` is set, times are converted to it before formatting
    (naive datetimes are taken as local time); otherwise they are shown
    as stored.
    """

    true_rep: str = "true"
    false_rep: str = "false"
    int_fmt: str = "{:d}"
    float_fmt: str = "{:.4g}"  # also used for both parts of complex values
    string_fmt: str = "{}"
    quote_strings: bool = False
    time_fmt: str | None = "%Y-%m-%dT%H:%M:%S"
    time_zone: tzinfo | None = None
    duration_fmt: str = "{}"

    na_rep: str = ""  # nil references and failed accessors
    nan_rep: str = ""
    pinf_rep: str = "+∞"  # complex values use this for any infinity
    minf_rep: str = "-∞"

    def format_bool(self, value: bool) -> str:
        return self.true_rep if value else self.false_rep

    def format_int(self, value: int) -> str:
        return self.int_fmt.format(value)

    def format_float(self, value: float) -> str:
        if math.isnan(value):
            return self.nan_rep
        if math.isinf(value):
            return self.pinf_rep if value > 0 else self.minf_rep
        return self.float_fmt.format(value)

    def format_complex(self, value: complex) -> str:
        if cmath.isnan(value):
            return self.nan_rep
        if cmath.isinf(value):
            return self.pinf_rep
        real = self.float_fmt.format(value.real)
        imag = self.float_fmt.format(value.imag)
        if not imag.startswith(("-", "+")):
            imag = "+" + imag
        return f"({real}{imag}i)"

    def format_string(self, value: str) -> str:
        if self.quote_strings:
            value = json.dumps(value, ensure_ascii=False)
        return self.string_fmt.format(value)

    def format_time(self, value: datetime) -> str:
        if self.time_zone is not None:
            value = value.astimezone(self.time_zone)
        if self.time_fmt is None:
            return value.isoformat()
        return value.strftime(self.time_fmt)

    def format_duration(self, value: timedelta) -> str:
        nanoseconds = (value // timedelta(microseconds=1)) * 1000
        return self.duration_fmt.format(value, seconds=value.total_seconds(), nanoseconds=nanoseconds)

    def format_na(self) -> str:
        return self.na_rep


# Pleasant human readable output
DEFAULT_FORMAT = Format()

# Output which preserves the original data as well as possible
PRECISE_FORMAT = Format(
    float_fmt="{!r}",
    quote_strings=True,
    time_fmt=None,
    nan_rep="NaN",
)

# Output suitable for reading into R
R_FORMAT = Format(
    true_rep="TRUE",
    false_rep="FALSE",
    float_fmt="{:.9g}",
    quote_strings=True,
    time_fmt='as.POSIXct("%Y-%m-%d %H:%M:%S")',
    duration_fmt="{nanoseconds}",
    na_rep="NA",
    nan_rep="NA",
    pinf_rep="Inf",
    minf_rep="-Inf",
)
