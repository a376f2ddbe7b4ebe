"""Lexer for column specifications."""

import ply.lex as lex

from typed_export.errors import ColumnSpecError


class SpecLexer:
    """Lexer for tokenizing dotted column specifications like ``Outer.Inner.Field``."""

    # Token list
    tokens = [
        "IDENTIFIER",
        "DOT",
    ]

    # Simple tokens
    t_DOT = r"\."

    # Ignored characters (spaces and tabs)
    t_ignore = " \t"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore
        self.data = ""

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\W\d]\w*"
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise ColumnSpecError(
            f"Illegal character '{t.value[0]}' at position {t.lexpos} in column spec '{self.data}'",
            spec=self.data,
        )

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.data = data
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
