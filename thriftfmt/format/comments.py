"""Comment lookup against the token stream.

Comments never enter the CST. The formatter tracks the index of the last
stream token it emitted and asks these helpers which comments fall between
that token and the next one.
"""

from thriftfmt.lexer import Token, TokenChannel, TokenKind, TokenStream


def leading_comments(tokens: TokenStream, last_index: int, before_index: int) -> list[Token]:
    """Comments strictly between the last emitted token and `before_index`."""
    return tokens.tokens_between(last_index, before_index, TokenChannel.COMMENT)


def trailing_comment(tokens: TokenStream, last_index: int) -> Token | None:
    """The first comment on the same line as the last emitted token, if any."""
    comments = tokens.tokens_on_same_line(last_index, TokenChannel.COMMENT)
    return comments[0] if comments else None


def is_tight(comment: Token, next_token: Token) -> bool:
    """Whether `comment` stays directly above `next_token` without a blank line."""
    if comment.kind == TokenKind.LINE_COMMENT or next_token.kind == TokenKind.EOF:
        return True
    return 0 < next_token.line - comment.end_line <= 1


def comment_text(comment: Token) -> str:
    return comment.text.strip()
