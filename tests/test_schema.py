"""Tests for astpos.schema module."""

import pytest

from astpos.nodes import Pos
from astpos.schema import (
    FieldKind,
    FieldSchema,
    all_schemas,
    classify,
    node_schema,
    position_fields,
)
from astpos.syntax import (
    CommentGroup,
    Expr,
    Field,
    File,
    FuncDecl,
    Ident,
    KeyValueExpr,
    Stmt,
)
from astpos.tokens import Token


class TestClassify:
    """Test classification of field annotations."""

    @pytest.mark.parametrize(
        ("py_type", "kind"),
        [
            (Pos, FieldKind.POSITION),
            (Ident, FieldKind.CHILD),
            (Expr | None, FieldKind.CHILD),
            (list[Stmt], FieldKind.CHILDREN),
            (list[Ident], FieldKind.CHILDREN),
            (CommentGroup | None, FieldKind.COMMENT),
            (list[CommentGroup], FieldKind.COMMENT),
            (str, FieldKind.VALUE),
            (bool, FieldKind.VALUE),
            (Token | None, FieldKind.VALUE),
            (list[str], FieldKind.VALUE),
        ],
    )
    def test_classify(self, py_type: object, kind: FieldKind) -> None:
        """Test each annotation shape used by syntax nodes."""
        assert classify(py_type) is kind

    def test_plain_int_is_not_a_position(self) -> None:
        """Test that only the Pos alias marks position fields."""
        assert classify(int) is FieldKind.VALUE


class TestNodeSchema:
    """Test schema extraction from node classes."""

    def test_ident_schema(self) -> None:
        """Test a leaf node."""
        schema = node_schema(Ident)

        assert schema.tag == "Ident"
        assert schema.fields == (
            FieldSchema(name="name", kind=FieldKind.VALUE),
            FieldSchema(name="name_pos", kind=FieldKind.POSITION),
        )
        assert schema.children == ()

    def test_children_in_source_order(self) -> None:
        """Test that child fields keep declaration order."""
        schema = node_schema(KeyValueExpr)

        assert [f.name for f in schema.children] == ["key", "value"]
        assert schema.positions == ("colon",)

    def test_func_decl_schema(self) -> None:
        """Test that the doc comment is split out from the children."""
        schema = node_schema(FuncDecl)

        assert [f.name for f in schema.children] == ["recv", "name", "type", "body"]
        assert schema.comments == ("doc",)
        assert schema.positions == ()

    def test_file_schema(self) -> None:
        """Test the root node's positions, children and comments."""
        schema = node_schema(File)

        assert schema.positions == ("package_pos", "file_start", "file_end")
        assert [(f.name, f.kind) for f in schema.children] == [
            ("name", FieldKind.CHILD),
            ("decls", FieldKind.CHILDREN),
        ]
        assert schema.comments == ("doc", "comments")

    def test_schema_is_cached(self) -> None:
        """Test that repeated lookups return the same schema."""
        assert node_schema(Field) is node_schema(Field)

    def test_position_fields(self) -> None:
        """Test the position field shortcut."""
        assert position_fields(Ident) == ("name_pos",)
        assert position_fields(Field) == ()


class TestAllSchemas:
    """Test the registry-wide schema listing."""

    def test_contains_syntax_kinds(self) -> None:
        """Test that every syntax node kind is listed under its tag."""
        schemas = all_schemas()

        assert schemas["Ident"] == node_schema(Ident)
        assert schemas["File"] == node_schema(File)
        assert "Expr" not in schemas
