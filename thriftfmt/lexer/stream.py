"""Read-only queries over the flat token stream."""

from collections.abc import Iterator, Sequence

from thriftfmt.lexer.tokens import Token, TokenChannel


class TokenStream:
    """Every lexed token of a file, in source order, addressed by `Token.index`."""

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tuple(tokens)
        for position, token in enumerate(self._tokens):
            if token.index != position:
                raise ValueError(f"Token index {token.index} does not match stream position {position}")

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def code_tokens(self) -> list[Token]:
        return [token for token in self._tokens if token.channel == TokenChannel.DEFAULT]

    def tokens_between(self, last_index: int, before_index: int, channel: TokenChannel) -> list[Token]:
        """Tokens on `channel` whose index lies strictly between the two indexes."""
        start = max(last_index + 1, 0)
        end = min(before_index, len(self._tokens))
        return [token for token in self._tokens[start:end] if token.channel == channel]

    def tokens_on_same_line(self, last_index: int, channel: TokenChannel) -> list[Token]:
        """Tokens on `channel` directly following `last_index` on its line.

        The scan stops at a line change or at the next code token.
        """
        if not 0 <= last_index < len(self._tokens):
            return []
        line = self._tokens[last_index].end_line
        found: list[Token] = []
        for token in self._tokens[last_index + 1 :]:
            if token.line != line or token.channel == TokenChannel.DEFAULT:
                break
            if token.channel == channel:
                found.append(token)
        return found
