"""Shared fixtures: a sample file exercising most layout rules."""

from collections.abc import Callable

import pytest

from astpos.syntax import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    CallExpr,
    CaseClause,
    Comment,
    CommentGroup,
    CompositeLit,
    DeclStmt,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncType,
    GenDecl,
    Ident,
    IfStmt,
    IncDecStmt,
    KeyValueExpr,
    MapType,
    ParenExpr,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SliceExpr,
    StarExpr,
    StructType,
    SwitchStmt,
    TypeSpec,
    ValueSpec,
)
from astpos.tokens import LitKind, Token


def _id(name: str) -> Ident:
    return Ident(name=name)


def _int(value: str) -> BasicLit:
    return BasicLit(kind=LitKind.INT, value=value)


def _str(text: str) -> BasicLit:
    return BasicLit(kind=LitKind.STRING, value=f'"{text}"')


def _doc(*lines: str) -> CommentGroup:
    return CommentGroup(comments=[Comment(text=line) for line in lines])


def _println(*args) -> ExprStmt:
    fun = SelectorExpr(x=_id("fmt"), sel=_id("Println"))
    return ExprStmt(x=CallExpr(fun=fun, args=list(args)))


def _field(x: str, name: str) -> SelectorExpr:
    return SelectorExpr(x=_id(x), sel=_id(name))


def _kv(key: str, value) -> KeyValueExpr:
    return KeyValueExpr(key=_id(key), value=value)


def build_sample_file() -> tuple[File, list[CommentGroup]]:
    """Build a file with structs, var groups, methods and nested literals.

    Returns the file and its doc comment groups in source order.
    """
    struct_doc = _doc("// comment 0")
    field0_doc = _doc("// field comment 0")
    field1_doc = _doc("// field comment 1")
    vars_doc = _doc("// comment 1", "// comment 2")
    method_doc = _doc("// comment 3", "// comment 4")
    local_doc = _doc("// comment 6", "// comment 7", "//", "// comment 8")
    hello_doc = _doc("// comment 9")

    my_struct = GenDecl(
        doc=struct_doc,
        tok=Token.TYPE,
        specs=[
            TypeSpec(
                name=_id("MyStruct"),
                type=StructType(
                    fields=FieldList(
                        fields=[
                            Field(
                                doc=field0_doc,
                                names=[_id("name"), _id("address")],
                                type=_id("string"),
                            ),
                            Field(doc=field1_doc, names=[_id("age")], type=_id("int")),
                            Field(names=[_id("level")], type=_id("int")),
                        ],
                    ),
                ),
            ),
        ],
    )

    var_group = GenDecl(
        doc=vars_doc,
        tok=Token.VAR,
        parenthesized=True,
        specs=[
            ValueSpec(names=[_id("a")], type=_id("int"), values=[_int("2")]),
            ValueSpec(names=[_id("b")], type=_id("int"), values=[_int("12")]),
        ],
    )

    people = CompositeLit(
        type=ArrayType(elt=StarExpr(x=_id("MyStruct"))),
        elts=[
            CompositeLit(elts=[_kv("name", _str("bob"))]),
            CompositeLit(elts=[_kv("name", _str("carl"))]),
            CompositeLit(
                elts=[
                    _kv("name", _str("mary")),
                    _kv("address", _str("my house")),
                    _kv("age", _int("20")),
                ],
            ),
        ],
    )

    method = FuncDecl(
        doc=method_doc,
        recv=FieldList(fields=[Field(names=[_id("s")], type=StarExpr(x=_id("MyStruct")))]),
        name=_id("PrintSome"),
        type=FuncType(),
        body=BlockStmt(
            stmts=[
                _println(_field("s", "name")),
                _println(_field("s", "address")),
                IfStmt(
                    cond=BinaryExpr(
                        x=CallExpr(fun=_id("len"), args=[_field("s", "name")]),
                        op=Token.EQL,
                        y=_int("0"),
                    ),
                    body=BlockStmt(stmts=[_println(_str("I am nameless!"))]),
                ),
                AssignStmt(
                    lhs=[_id("a"), _id("b"), _id("c"), _id("d"), _id("efg")],
                    tok=Token.DEFINE,
                    rhs=[_int("1"), _int("2"), _int("3"), _int("4"), _int("9000")],
                ),
                AssignStmt(
                    lhs=[_id("_")],
                    rhs=[
                        BinaryExpr(
                            x=BinaryExpr(x=_id("a"), op=Token.ADD, y=_id("b")),
                            op=Token.SUB,
                            y=BinaryExpr(
                                x=ParenExpr(
                                    x=BinaryExpr(x=_id("c"), op=Token.MUL, y=_id("d")),
                                ),
                                op=Token.QUO,
                                y=_id("efg"),
                            ),
                        ),
                    ],
                ),
                RangeStmt(
                    key=_id("_"),
                    tok=Token.ASSIGN,
                    x=_id("a"),
                    body=BlockStmt(stmts=[AssignStmt(lhs=[_id("_")], rhs=[_str("hi!")])]),
                ),
                ForStmt(
                    init=AssignStmt(lhs=[_id("i")], tok=Token.DEFINE, rhs=[_int("0")]),
                    cond=BinaryExpr(x=_id("i"), op=Token.LSS, y=_id("b")),
                    post=IncDecStmt(x=_id("i"), tok=Token.INC),
                    body=BlockStmt(
                        stmts=[
                            AssignStmt(
                                lhs=[_id("_")],
                                rhs=[CompositeLit(type=_id("MyStruct"))],
                            ),
                        ],
                    ),
                ),
                SwitchStmt(
                    subject=_id("a"),
                    body=BlockStmt(
                        stmts=[
                            CaseClause(exprs=[_int("0")], body=[_println(_id("a"))]),
                            CaseClause(
                                body=[
                                    IncDecStmt(x=_id("a"), tok=Token.INC),
                                    AssignStmt(
                                        lhs=[_id("a")],
                                        tok=Token.MUL_ASSIGN,
                                        rhs=[_int("10")],
                                    ),
                                ],
                            ),
                        ],
                    ),
                ),
                AssignStmt(lhs=[_id("l")], tok=Token.DEFINE, rhs=[people]),
                AssignStmt(lhs=[_id("_")], rhs=[_id("l")]),
                DeclStmt(
                    decl=GenDecl(
                        doc=local_doc,
                        tok=Token.VAR,
                        specs=[ValueSpec(names=[_id("o")], values=[_int("42")])],
                    ),
                ),
            ],
        ),
    )

    hello = FuncDecl(
        doc=hello_doc,
        name=_id("hello"),
        type=FuncType(
            results=FieldList(delimited=False, fields=[Field(type=_id("int"))]),
        ),
        body=BlockStmt(
            stmts=[
                _println(SliceExpr(x=_str("hello?"), high=_int("3"))),
                ReturnStmt(results=[_int("777")]),
            ],
        ),
    )

    nested_map = GenDecl(
        tok=Token.VAR,
        specs=[
            ValueSpec(
                names=[_id("_")],
                values=[
                    CompositeLit(
                        type=MapType(
                            key=_id("string"),
                            value=MapType(key=_id("string"), value=_id("int")),
                        ),
                        elts=[
                            KeyValueExpr(
                                key=_str("one"),
                                value=CompositeLit(
                                    elts=[KeyValueExpr(key=_str("eleven"), value=_int("11"))],
                                ),
                            ),
                            KeyValueExpr(
                                key=_str("two"),
                                value=CompositeLit(
                                    elts=[
                                        KeyValueExpr(key=_str("twentytwo"), value=_int("22")),
                                        KeyValueExpr(
                                            key=_str("twentythree"),
                                            value=_int("23"),
                                        ),
                                    ],
                                ),
                            ),
                        ],
                    ),
                ],
            ),
        ],
    )

    file = File(
        name=_id("astpos"),
        decls=[my_struct, var_group, method, hello, nested_map],
    )
    groups = [
        struct_doc,
        field0_doc,
        field1_doc,
        vars_doc,
        method_doc,
        local_doc,
        hello_doc,
    ]
    return file, groups


@pytest.fixture
def build_sample() -> Callable[[], tuple[File, list[CommentGroup]]]:
    """Factory for fresh, unpositioned copies of the sample file."""
    return build_sample_file
