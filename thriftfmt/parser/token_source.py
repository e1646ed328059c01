"""Token source that hides whitespace and comments from the parser."""

from thriftfmt.lexer import Token, TokenChannel, TokenKind, TokenStream
from thriftfmt.text import TextRange, TextSize


class TokenSource:
    """Cursor over the DEFAULT-channel tokens of a token stream.

    Hidden and comment tokens stay in the stream; the formatter reads them back
    by index, so the source only needs to skip them.
    """

    def __init__(self, stream: TokenStream) -> None:
        self._stream = stream
        self._code = stream.code_tokens()
        self._cursor = 0

    @property
    def stream(self) -> TokenStream:
        return self._stream

    @property
    def current_token(self) -> Token:
        return self._code[self._cursor]

    @property
    def current(self) -> TokenKind:
        return self.current_token.kind

    @property
    def current_range(self) -> TextRange:
        return self.current_token.range

    @property
    def position(self) -> TextSize:
        return self.current_range.start

    @property
    def has_preceding_line_break(self) -> bool:
        return self.current_token.has_preceding_line_break()

    def nth(self, n: int) -> TokenKind:
        return self.nth_token(n).kind

    def nth_token(self, n: int) -> Token:
        index = min(self._cursor + n, len(self._code) - 1)
        return self._code[index]

    def bump(self) -> Token:
        token = self.current_token
        if token.kind != TokenKind.EOF:
            self._cursor += 1
        return token

    def finish(self) -> Token:
        """The EOF token, last element of the stream."""
        eof = self._code[-1]
        if eof.kind != TokenKind.EOF or eof.channel != TokenChannel.DEFAULT:
            raise RuntimeError("Token stream does not end with EOF")
        return eof
