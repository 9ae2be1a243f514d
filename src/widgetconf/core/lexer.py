"""
Lexer/Tokenizer for the widgetconf S-expression language.

Converts raw configuration text into a stream of tokens with source location
tracking. Comments start with ``;`` and run to the end of the line.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import make_parse_error
from .location import Span


class TokenType(Enum):
    """Token types in the configuration language."""

    # Literals
    SYMBOL = "SYMBOL"
    KEYWORD = "KEYWORD"
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOL = "BOOL"

    # Delimiters
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"

    # Special
    EOF = "EOF"


# Characters that end a symbol, keyword or number
DELIMITERS = frozenset("()[]\"'`;")

QUOTES = ('"', "'", "`")


@dataclass
class Token:
    """
    A single token in the configuration text.

    Attributes:
        type: Type of token
        value: String value of the token (keywords without the leading colon,
            strings without quotes and with escapes resolved)
        span: Source range of the token
    """

    type: TokenType
    value: str
    span: Span

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.span.line}:{self.span.column})"


class Lexer:
    """
    Lexer for the configuration language.

    Converts source text into a flat stream of tokens.
    """

    def __init__(self, text: str, file: str = "<string>"):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file name (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        while (ch := self.current_char()) is not None and ch.isspace():
            self.advance()

    def skip_comment(self) -> None:
        """Skip comment (from ; to end of line)."""
        while self.current_char() is not None and self.current_char() != "\n":
            self.advance()

    def span_from(self, start: int, line: int, column: int) -> Span:
        return Span(file=self.file, start=start, end=self.pos, line=line, column=column)

    def read_string(self) -> str:
        """Read a quoted string."""
        start, start_line, start_col = self.pos, self.line, self.column
        quote = self.current_char()
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == quote:
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char is not None:
                    chars.append(escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != quote:
            raise make_parse_error(
                "Unterminated string literal",
                self.span_from(start, start_line, start_col),
            )

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_atom(self) -> str:
        """Read a symbol, keyword or number up to the next delimiter."""
        chars = []
        while (ch := self.current_char()) is not None and not ch.isspace() and ch not in DELIMITERS:
            chars.append(ch)
            self.advance()
        return "".join(chars)

    @staticmethod
    def classify_atom(atom: str) -> TokenType:
        if atom in ("true", "false"):
            return TokenType.BOOL
        try:
            float(atom)
        except ValueError:
            return TokenType.SYMBOL
        if atom.lower().lstrip("+-") in ("inf", "infinity", "nan"):
            return TokenType.SYMBOL
        return TokenType.NUMBER

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: If an unterminated string or an empty keyword is found
        """
        while True:
            self.skip_whitespace()
            ch = self.current_char()
            if ch is None:
                break

            start, token_line, token_col = self.pos, self.line, self.column

            if ch == ";":
                self.skip_comment()
                continue

            if ch in "()[]":
                self.advance()
                self.tokens.append(
                    Token(TokenType(ch), ch, self.span_from(start, token_line, token_col))
                )

            elif ch in QUOTES:
                value = self.read_string()
                self.tokens.append(
                    Token(TokenType.STRING, value, self.span_from(start, token_line, token_col))
                )

            elif ch == ":":
                self.advance()
                name = self.read_atom()
                span = self.span_from(start, token_line, token_col)
                if not name:
                    raise make_parse_error("Expected a keyword name after ':'", span)
                self.tokens.append(Token(TokenType.KEYWORD, name, span))

            else:
                atom = self.read_atom()
                self.tokens.append(
                    Token(
                        self.classify_atom(atom),
                        atom,
                        self.span_from(start, token_line, token_col),
                    )
                )

        self.tokens.append(
            Token(TokenType.EOF, "", self.span_from(self.pos, self.line, self.column))
        )
        return self.tokens


def tokenize(text: str, file: str = "<string>") -> list[Token]:
    """Convenience wrapper: tokenize text in one call."""
    return Lexer(text, file).tokenize()
