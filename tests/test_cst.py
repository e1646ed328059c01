import pytest

from thriftfmt.cst import SyntaxNode, SyntaxToken, TreeBuilder, dump_tree
from thriftfmt.lexer import tokenize
from thriftfmt.syntax import ThriftSyntaxKind as K


def make_field() -> tuple[SyntaxNode, SyntaxToken, SyntaxToken]:
    type_token = SyntaxToken.synthetic(K.I32_KW, "i32")
    name = SyntaxToken.synthetic(K.IDENTIFIER, "x")
    field = SyntaxNode(kind=K.FIELD, children=[type_token, name])
    return field, type_token, name


def test_children_get_parent_references() -> None:
    field, type_token, name = make_field()

    assert type_token.parent is field
    assert name.parent is field
    assert type_token.next_sibling() is name
    assert name.prev_sibling() is type_token
    assert name.next_sibling() is None


def test_insert_child_splices_before_position() -> None:
    field, type_token, _ = make_field()
    requiredness = SyntaxNode(kind=K.FIELD_REQ, children=[SyntaxToken.synthetic(K.REQUIRED_KW, "required")])

    field.insert_child(field.index_of(type_token), requiredness)

    assert [child.kind for child in field] == [K.FIELD_REQ, K.I32_KW, K.IDENTIFIER]
    assert requiredness.parent is field
    assert field.text == "requiredi32x"


def test_remove_and_pop_clear_parent() -> None:
    field, type_token, name = make_field()

    field.remove_child(type_token)
    assert type_token.parent is None
    assert field.children == (name,)

    assert field.pop_last() is name
    assert name.parent is None
    assert len(field) == 0


def test_index_of_uses_identity() -> None:
    field, _, _ = make_field()
    lookalike = SyntaxToken.synthetic(K.IDENTIFIER, "x")

    with pytest.raises(ValueError):
        field.index_of(lookalike)


def test_tokens_from_stream_keep_source_position() -> None:
    stream, _ = tokenize("\nx")
    token = SyntaxToken.from_token(stream[1])

    assert not token.is_synthetic
    assert token.index == 1
    assert token.line == 2
    assert token.kind == K.IDENTIFIER


def test_synthetic_tokens_have_no_position() -> None:
    token = SyntaxToken.synthetic(K.COMMA, ",")

    assert token.is_synthetic
    assert token.index is None
    assert token.line is None


def test_builder_wraps_loose_elements_in_document() -> None:
    stream, _ = tokenize("a")
    builder = TreeBuilder()

    builder.start_node(K.CONST_VALUE)
    builder.token(stream[0])
    builder.finish_node()
    builder.token(stream[1])
    root = builder.finish()

    assert root.kind == K.DOCUMENT
    assert [child.kind for child in root] == [K.CONST_VALUE, K.EOF]


def test_builder_rejects_token_kind_nodes() -> None:
    with pytest.raises(RuntimeError):
        TreeBuilder().start_node(K.IDENTIFIER)


def test_builder_rejects_unclosed_nodes() -> None:
    builder = TreeBuilder()
    builder.start_node(K.DOCUMENT)

    with pytest.raises(RuntimeError):
        builder.finish()


def test_dump_tree_marks_synthetic_tokens() -> None:
    field, _, _ = make_field()

    assert dump_tree(field) == "FIELD\n  I32_KW 'i32' (synthetic)\n  IDENTIFIER 'x' (synthetic)"


def test_syntax_kind_token_mapping() -> None:
    assert K.IDENTIFIER.is_token
    assert K.FIELD.is_node
    assert K.LINE_COMMENT.is_comment
    with pytest.raises(ValueError):
        K.FIELD.to_token_kind()
