"""Tests for Extractor construction, columns and binding."""

import datetime
from dataclasses import dataclass
from typing import NamedTuple, Optional

import pytest

from typed_export import ColumnSpecError, Extractor, Kind
from typed_export.path import CompiledPath


some_error = ValueError("some error")


@dataclass
class S:
    B: bool
    I: int
    F: float
    S: str
    T: datetime.datetime
    E: Optional[Exception] = None

    def BM(self) -> bool:
        return self.B

    def IM(self) -> int:
        return self.I

    def FM(self) -> float:
        return self.F

    def SM(self) -> str:
        return self.S

    def TM(self) -> datetime.datetime:
        return self.T

    def BME(self) -> tuple[bool, Optional[Exception]]:
        if self.B:
            return True, None
        return False, some_error

    def IME(self) -> tuple[int, Optional[Exception]]:
        if self.I > 10:
            return self.I, None
        return 0, some_error

    def FME(self) -> tuple[float, Optional[Exception]]:
        if self.F > 10:
            return self.F, None
        return 0.0, some_error

    def SME(self) -> tuple[str, Optional[Exception]]:
        if len(self.S) > 10:
            return self.S, None
        return "", some_error

    def TME(self) -> tuple[datetime.datetime, Optional[Exception]]:
        if self.T.hour > 10:
            return self.T, None
        return datetime.datetime.min, some_error

    def ExtraArg(self, x: int) -> int:
        return 12

    def WrongReturn(self) -> tuple[int, int]:
        return 13, 14


time1 = datetime.datetime(2000, 1, 2, 15, 20, 30)
time2 = datetime.datetime(2000, 1, 2, 3, 20, 30)

ss = [
    S(True, 23, 45.67, "Hello World!", time1),
    S(False, 9, 8.76, "Short", time2),
]


@dataclass
class Simple:
    A: float
    B: str
    P: Optional[int]


@dataclass
class Obs:
    Age: int
    Origin: str

    def Group(self) -> tuple[bool, Optional[Exception]]:
        if self.Origin == "":
            return False, ValueError("no origin")
        return self.Age > 30, None


@dataclass
class Leaf:
    Field: int


@dataclass
class Middle:
    Inner: Optional[Leaf]


@dataclass
class Top:
    Outer: Middle


class Point(NamedTuple):
    x: int
    y: int


class TestExtractor:
    """Tests for building an Extractor."""

    field_names = ["B", "I", "F", "S", "T", "BM", "IM", "FM", "SM", "TM", "BME", "IME", "FME", "SME", "TME"]

    def test_columns_in_order_with_kinds(self):
        """Test that columns keep the spec order and get proper kinds."""
        extractor = Extractor(ss, *self.field_names)

        assert extractor.names == self.field_names
        for column, name in zip(extractor.columns, self.field_names):
            assert str(column.kind)[0] == name[0]

    def test_na_handling(self):
        """Test that failing accessors yield None only where they fail."""
        extractor = Extractor(ss, *self.field_names)

        for column in extractor.columns[10:]:
            assert column.value_at(0) is not None
            assert column.value_at(1) is None

    def test_values(self):
        """Test field, method and failing method values agree."""
        extractor = Extractor(ss, *self.field_names)

        for i, s in enumerate(ss):
            expected = [s.B, s.I, s.F, s.S, s.T]
            assert [c.value_at(i) for c in extractor.columns[0:5]] == expected
            assert [c.value_at(i) for c in extractor.columns[5:10]] == expected
            if i == 0:
                assert [c.value_at(i) for c in extractor.columns[10:15]] == expected

    def test_value_types(self):
        """Test that values are converted to the kind's Python type."""
        extractor = Extractor(ss, "B", "I", "F", "S", "T")
        values = [c.value_at(0) for c in extractor.columns]

        assert [type(v) for v in values] == [bool, int, float, str, datetime.datetime]

    def test_simple_scenario(self):
        """Test plain fields and an optional field."""
        data = [Simple(3.14, "Hello", 8), Simple(2.72, "Go", None)]
        extractor = Extractor(data, "A", "B", "P")

        assert extractor.rows() == [[3.14, "Hello", 8], [2.72, "Go", None]]

    def test_failing_accessor_scenario(self):
        data = [Obs(40, "de"), Obs(20, "")]
        extractor = Extractor(data, "Group")

        assert extractor.columns[0].kind is Kind.BOOL
        assert extractor.rows() == [[True], [None]]

    def test_nested_none_scenario(self):
        """Test that a None in the middle of a path only affects its row."""
        data = [
            Top(Middle(Leaf(1))),
            Top(Middle(None)),
            Top(Middle(Leaf(3))),
        ]
        extractor = Extractor(data, "Outer.Inner.Field")

        assert extractor.names == ["Outer.Inner.Field"]
        assert extractor.rows() == [[1], [None], [3]]

    def test_named_tuples(self):
        extractor = Extractor([Point(1, 2), Point(3, 4)], "y", "x")
        assert extractor.rows() == [[2, 1], [4, 3]]

    def test_error_accessor_as_text(self):
        """Test that exception fields are read through their string form."""
        data = [S(True, 1, 1.0, "", time1, ValueError("bad")), S(True, 1, 1.0, "", time1)]
        extractor = Extractor(data, "E")

        assert extractor.columns[0].kind is Kind.STRING
        assert extractor.rows() == [["bad"], [None]]

    @pytest.mark.parametrize("name", ["Unexisting", "ExtraArg", "WrongReturn", "B.X", "", "A-B"])
    def test_bad_column(self, name):
        with pytest.raises(ColumnSpecError):
            Extractor(ss, name)

    def test_bad_column_aborts_construction(self):
        """Test that one bad spec fails the whole extractor."""
        with pytest.raises(ColumnSpecError, match="Unexisting"):
            Extractor(ss, "B", "Unexisting", "I")

    def test_not_a_sequence(self):
        with pytest.raises(ColumnSpecError, match="not a sequence"):
            Extractor(ss[0], "B")
        with pytest.raises(ColumnSpecError, match="not a sequence"):
            Extractor("text", "B")

    def test_empty_data(self):
        """Test that empty data needs an explicit record type."""
        with pytest.raises(ColumnSpecError, match="record_type"):
            Extractor([], "B")

        extractor = Extractor([], "B", record_type=S)
        assert extractor.n == 0
        assert extractor.rows() == []

    def test_record_type_must_be_a_class(self):
        with pytest.raises(ColumnSpecError):
            Extractor([], "B", record_type=int | str)


class TestColumns:
    """Tests for mutating the columns of an Extractor."""

    def test_rename(self):
        """Test that renaming a column leaves its path alone."""
        extractor = Extractor(ss, "I")
        column = extractor.columns[0]
        path = column.path

        column.name = "Integer"

        assert extractor.names == ["Integer"]
        assert column.path is path
        assert column.value_at(0) == 23

    def test_reorder_and_drop(self):
        extractor = Extractor(ss, "B", "I", "F")
        extractor.columns = [extractor.columns[2], extractor.columns[0]]

        assert extractor.rows() == [[45.67, True], [8.76, False]]

    def test_kind_is_read_only(self):
        extractor = Extractor(ss, "I")
        with pytest.raises(AttributeError):
            extractor.columns[0].kind = Kind.FLOAT  # type: ignore[misc]


class TestBind:
    """Tests for (re)binding an Extractor."""

    def test_rebind_shorter(self):
        data = [Obs(a, "de") for a in range(20)]
        extractor = Extractor(data, "Age", "Origin")

        extractor.bind(data[0:5])
        assert extractor.n == 5
        assert len(extractor) == 5

    def test_rebind_independence(self):
        """Test that a rebind shows only the new data."""
        first = [Obs(1, "a"), Obs(2, "b"), Obs(3, "c")]
        second = [Obs(10, "x")]
        extractor = Extractor(first, "Age", "Origin")
        paths = [c.path for c in extractor.columns]

        extractor.bind(second)
        assert extractor.n == 1
        assert extractor.rows() == [[10, "x"]]

        extractor.bind(first)
        assert extractor.n == 3
        assert extractor.rows() == [[1, "a"], [2, "b"], [3, "c"]]

        assert [c.path for c in extractor.columns] == paths
        assert all(isinstance(p, CompiledPath) for p in paths)

    def test_bind_wrong_type(self):
        """Test that binding records of another type is a programming error."""
        extractor = Extractor(ss, "I")
        with pytest.raises(TypeError, match="record 0 of type Obs"):
            extractor.bind([Obs(1, "a")])

    def test_bind_none_without_indirection(self):
        extractor = Extractor(ss, "I")
        with pytest.raises(TypeError, match="record 1 is None"):
            extractor.bind([ss[0], None])

    def test_bind_not_a_sequence(self):
        extractor = Extractor(ss, "I")
        with pytest.raises(TypeError):
            extractor.bind(iter(ss))

    def test_negative_row(self):
        """Test that negative rows are out of range rather than counted from the end."""
        extractor = Extractor(ss, "I")
        column = extractor.columns[0]
        with pytest.raises(IndexError, match="Row -1 out of range"):
            column.value_at(-1)

    def test_non_ascii_field(self):
        @dataclass
        class Messung:
            Größe: float

        extractor = Extractor([Messung(1.5)], "Größe")
        assert extractor.names == ["Größe"]
        assert extractor.rows() == [[1.5]]

    def test_unbound_column(self):
        extractor = Extractor(ss, "I")
        column = extractor.columns[0]
        column.binding = None
        with pytest.raises(RuntimeError, match="not bound"):
            column.value_at(0)


class TestSequenceOfOptionals:
    """Tests for sequences holding None instead of records."""

    def test_inferred_indirection(self):
        data = [ss[0], ss[1], None]
        extractor = Extractor(data, "B", "I", "S")

        assert extractor.indirection == 1
        assert extractor.record_type is S
        assert extractor.rows() == [
            [True, 23, "Hello World!"],
            [False, 9, "Short"],
            [None, None, None],
        ]

    def test_explicit_optional_record_type(self):
        """Test that an Optional record type allows None records later on."""
        extractor = Extractor(ss, "I", record_type=Optional[S])

        assert extractor.indirection == 1
        extractor.bind([None, ss[0]])
        assert extractor.rows() == [[None], [23]]
