"""
Recursive descent parser turning a token stream into syntax tree nodes.

Provides token navigation (current/advance/expect) in the same shape used by
every element parser, and produces the top-level forms of a file.
"""

from .ast import ArrayNode, Ast, KeywordNode, ListNode, LiteralNode, SymbolNode
from .dynval import DynVal
from .errors import make_parse_error
from .lexer import Token, TokenType, tokenize

_CLOSERS = {TokenType.LPAREN: TokenType.RPAREN, TokenType.LBRACKET: TokenType.RBRACKET}

# Maximum depth of nested forms and arrays
MAX_NESTING_DEPTH = 200


class AstParser:
    """
    Parser building ``Ast`` nodes from tokens.

    The parser never recovers: the first unbalanced delimiter aborts parsing.
    """

    def __init__(self, tokens: list[Token]):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer, terminated by EOF
        """
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def parse_all(self) -> list[Ast]:
        """Parse every top-level form until EOF."""
        forms = []
        while not self.match(TokenType.EOF):
            forms.append(self.parse_node())
        return forms

    def parse_node(self) -> Ast:
        token = self.current_token()

        if token.type in _CLOSERS:
            return self._parse_sequence()

        if token.type in (TokenType.RPAREN, TokenType.RBRACKET):
            raise make_parse_error(f"Unexpected '{token.value}'", token.span)

        if token.type == TokenType.EOF:
            raise make_parse_error("Unexpected end of input", token.span)

        self.advance()
        if token.type == TokenType.KEYWORD:
            return KeywordNode(span=token.span, name=token.value)
        if token.type == TokenType.SYMBOL:
            return SymbolNode(span=token.span, name=token.value)
        return LiteralNode(span=token.span, value=DynVal(token.value, token.span))

    def _parse_sequence(self) -> Ast:
        opener = self.advance()
        if self.depth >= MAX_NESTING_DEPTH:
            raise make_parse_error(
                f"Nesting too deep (more than {MAX_NESTING_DEPTH} levels)", opener.span
            )
        self.depth += 1
        try:
            return self._parse_children(opener)
        finally:
            self.depth -= 1

    def _parse_children(self, opener: Token) -> Ast:
        closer = _CLOSERS[opener.type]
        children = []

        while not self.match(closer):
            if self.match(TokenType.EOF):
                raise make_parse_error(
                    f"Unclosed '{opener.value}'",
                    opener.span,
                    hint=f"add a matching '{closer.value}'",
                )
            if self.match(TokenType.RPAREN, TokenType.RBRACKET):
                stray = self.current_token()
                raise make_parse_error(
                    f"Mismatched '{stray.value}', expected '{closer.value}'",
                    stray.span,
                )
            children.append(self.parse_node())

        end = self.advance()
        span = opener.span.to(end.span)
        if opener.type == TokenType.LPAREN:
            return ListNode(span=span, children=tuple(children))
        return ArrayNode(span=span, children=tuple(children))


def parse_forms(text: str, file: str = "<string>") -> list[Ast]:
    """Tokenize and parse configuration text into its top-level forms."""
    return AstParser(tokenize(text, file)).parse_all()
