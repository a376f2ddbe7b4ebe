"""Parser for column specifications."""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from typed_export.errors import ColumnSpecError
from typed_export.parsing.spec_lexer import SpecLexer


class SpecParser:
    """Parser turning a column specification into its dotted segments.

    The grammar is a non-empty, dot-separated list of identifiers::

        path : IDENTIFIER
             | path DOT IDENTIFIER
    """

    tokens = SpecLexer.tokens

    def __init__(self) -> None:
        self.lexer = SpecLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore
        self._spec = ""

    def p_path_single(self, p: yacc.YaccProduction) -> None:
        """path : IDENTIFIER"""
        p[0] = [p[1]]

    def p_path_multiple(self, p: yacc.YaccProduction) -> None:
        """path : path DOT IDENTIFIER"""
        p[0] = p[1] + [p[3]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise ColumnSpecError(
                f"Syntax error at '{p.value}' (position {p.lexpos}) in column spec '{self._spec}'",
                spec=self._spec,
            )
        raise ColumnSpecError(
            f"Syntax error at end of column spec '{self._spec}'", spec=self._spec
        )

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> list[str]:
        """Parse a column specification and return its segments."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self._spec = data
        if not data.strip():
            raise ColumnSpecError("Empty column spec", spec=data)

        self.lexer.input(data)
        segments = self.parser.parse(lexer=self.lexer.lexer)
        if segments is None:
            raise ColumnSpecError(f"Cannot parse column spec '{data}'", spec=data)
        return segments
