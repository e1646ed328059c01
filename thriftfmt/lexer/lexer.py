"""Lexer."""

from thriftfmt.diagnostics import Diagnostic, DiagnosticSpec
from thriftfmt.diagnostics.codes import (
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
)
from thriftfmt.lexer.stream import TokenStream
from thriftfmt.lexer.tokens import KEYWORDS, Token, TokenChannel, TokenFlags, TokenKind, channel_of
from thriftfmt.text import LineIndex, TextRange, TextSize, slice_text_range

_PUNCTUATION: dict[str, TokenKind] = {
    "=": TokenKind.EQUAL,
    "<": TokenKind.LESS_THAN,
    ">": TokenKind.GREATER_THAN,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    "*": TokenKind.STAR,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Lexer:
    """Lossless lexer that emits code, whitespace and comment tokens."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._lines = LineIndex(source)
        self._position = 0
        self._after_newline = False
        self._current_start = TextSize.from_int(0)
        self._current_flags = TokenFlags.NONE
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def current_range(self) -> TextRange:
        return TextRange.new(self._current_start, TextSize.from_int(self._position))

    def next_token(self, index: int) -> Token:
        self._current_start = TextSize.from_int(self._position)
        self._current_flags = TokenFlags.NONE
        line = self._lines.line_number(self._current_start)

        if self.is_eof:
            return Token(TokenKind.EOF, TextRange.empty(self._current_start), "", line, index)

        kind = self._lex_token()
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK
        if channel_of(kind) == TokenChannel.DEFAULT:
            self._after_newline = False

        text = slice_text_range(self._source, self.current_range)
        return Token(kind, self.current_range, text, line, index, self._current_flags)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token(len(tokens))
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in "\r\n\t ":
            return self._consume_newline_or_whitespaces()

        if ch == "#":
            return self._lex_line_comment()
        if ch == "/" and self._peek_char() == "/":
            return self._lex_line_comment()
        if ch == "/" and self._peek_char() == "*":
            return self._lex_block_comment()

        if ch == '"' or ch == "'":
            return self._lex_literal(ch)

        if ch.isdigit():
            return self._lex_number()
        if ch in "+-" and (self._peek_char().isdigit() or self._peek_char() == "."):
            self._advance(1)
            return self._lex_number()
        if ch == "." and self._peek_char().isdigit():
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        kind = _PUNCTUATION.get(ch)
        if kind is not None:
            self._advance(1)
            return kind

        # Fallback: preserve bytes as SKIPPED for recovery.
        self._advance(1)
        self._report(LEXER_UNEXPECTED_CHARACTER, f"Unexpected character {ch!r}")
        return TokenKind.SKIPPED

    def _lex_line_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)
        return TokenKind.LINE_COMMENT

    def _lex_block_comment(self) -> TokenKind:
        self._advance(2)
        while not self.is_eof:
            if self._current_char() == "*" and self._peek_char() == "/":
                self._advance(2)
                return TokenKind.BLOCK_COMMENT
            self._advance(1)

        self._current_flags |= TokenFlags.UNTERMINATED
        self._report(LEXER_UNTERMINATED_COMMENT)
        return TokenKind.BLOCK_COMMENT

    def _lex_literal(self, quote: str) -> TokenKind:
        # Consume opening quote
        self._advance(1)
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == quote:
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(1)
                if not self.is_eof:
                    self._advance(1)
                continue
            self._advance(1)

        if not closed:
            self._current_flags |= TokenFlags.UNTERMINATED
            self._report(LEXER_UNTERMINATED_STRING)

        return TokenKind.LITERAL

    def _lex_number(self) -> TokenKind:
        if self._current_char() == "0" and self._peek_char() in ("x", "X") and _is_hex(self._peek_char(2)):
            self._advance(2)
            while _is_hex(self._current_char()):
                self._advance(1)
            return TokenKind.HEX_INTEGER

        is_double = False
        self._consume_digits()
        if self._current_char() == "." and self._peek_char().isdigit():
            is_double = True
            self._advance(1)
            self._consume_digits()

        if self._current_char() in ("e", "E"):
            ahead = 1
            if self._peek_char() in ("+", "-"):
                ahead = 2
            if self._peek_char(ahead).isdigit():
                is_double = True
                self._advance(ahead)
                self._consume_digits()

        return TokenKind.DOUBLE if is_double else TokenKind.INTEGER

    def _lex_identifier(self) -> TokenKind:
        start = self._position
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_" or ch == ".":
                self._advance(1)
                continue
            break
        return KEYWORDS.get(self._source[start : self._position], TokenKind.IDENTIFIER)

    def _consume_digits(self) -> None:
        while self._current_char().isdigit():
            self._advance(1)

    def _consume_newline_or_whitespaces(self) -> TokenKind:
        if self._consume_newline():
            self._after_newline = True
            return TokenKind.NEWLINE
        self._consume_whitespaces()
        return TokenKind.WHITESPACE

    def _consume_whitespaces(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch == " " or ch == "\t":
                self._advance(1)
                continue
            break

    def _consume_newline(self) -> bool:
        if self._current_char() == "\n":
            self._advance(1)
            return True
        if self._current_char() == "\r":
            if self._peek_char() == "\n":
                self._advance(2)
            else:
                self._advance(1)
            return True
        return False

    def _report(self, spec: DiagnosticSpec, message: str | None = None) -> None:
        self._diagnostics.append(
            Diagnostic(
                code=spec.code,
                message=message if message is not None else spec.message,
                range=self.current_range,
                severity=spec.severity,
                hint=spec.hint,
                category=spec.category,
            )
        )

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def _is_hex(ch: str) -> bool:
    return ch != "\0" and ch in "0123456789abcdefABCDEF"


def tokenize(text: str) -> tuple[TokenStream, list[Diagnostic]]:
    """Lex `text` into an indexed token stream plus lexer diagnostics."""
    lexer = Lexer(text)
    tokens = lexer.lex()
    return TokenStream(tokens), lexer.diagnostics


def dump_tokens(tokens: TokenStream | list[Token], diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with kind, line, channel and text for debugging."""
    for tok in tokens:
        print(
            f"{tok.index:03d} {tok.kind.name:<18} line={tok.line:<4} "
            f"channel={tok.channel.name:<7} flags={tok.flags} text={tok.text!r}"
        )

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d.severity.upper()} {d.code} range={d.range.as_tuple()} message={d.message}")
