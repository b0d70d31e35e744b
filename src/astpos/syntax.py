"""Node variants of the supported Go-style grammar.

Fields are declared in source order: the generic walker visits child fields
in declaration order, so that order has to match the order the tokens appear
in rendered source. Fields annotated with ``Pos`` are the position fields
filled in by synthesis.

``pos()`` and ``end()`` follow go/ast: a node spans from its first token to
just past its last one. Documentation comments precede their owner and are
not part of its span.
"""

from __future__ import annotations

from dataclasses import field

from astpos.nodes import NO_POS, Node, Pos
from astpos.tokens import ChanDir, LitKind, Token

# =============================================================================
# Categories
# =============================================================================


class Expr(Node, abstract=True):
    """Expression or type expression."""


class Stmt(Node, abstract=True):
    """Statement."""


class Decl(Node, abstract=True):
    """Top-level declaration."""


class Spec(Node, abstract=True):
    """Single specification inside a declaration group."""


# =============================================================================
# Comments
# =============================================================================


class Comment(Node):
    """A single ``//`` comment line; ``text`` includes the slashes."""

    text: str
    slash: Pos = NO_POS

    def pos(self) -> Pos:
        return self.slash

    def end(self) -> Pos:
        return self.slash + len(self.text)


class CommentGroup(Node):
    """Consecutive comment lines documenting one declaration or field."""

    comments: list[Comment] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.comments[0].pos() if self.comments else NO_POS

    def end(self) -> Pos:
        return self.comments[-1].end() if self.comments else NO_POS


# =============================================================================
# Fields
# =============================================================================


class Field(Node):
    """Struct field, interface method, parameter or result."""

    doc: CommentGroup | None = None
    names: list[Ident] = field(default_factory=list)
    type: Expr | None = None
    field_tag: BasicLit | None = None

    def pos(self) -> Pos:
        if self.names:
            return self.names[0].pos()
        if self.type is not None:
            return self.type.pos()
        return NO_POS

    def end(self) -> Pos:
        if self.field_tag is not None:
            return self.field_tag.end()
        if self.type is not None:
            return self.type.end()
        if self.names:
            return self.names[-1].end()
        return NO_POS


class FieldList(Node):
    """Fields enclosed in parentheses, brackets or braces.

    ``delimited`` is False for an unparenthesized single result type.
    """

    opening: Pos = NO_POS
    fields: list[Field] = field(default_factory=list)
    closing: Pos = NO_POS
    delimited: bool = True

    def expects(self, name: str) -> bool:
        if name in ("opening", "closing"):
            return self.delimited
        return True

    def pos(self) -> Pos:
        if self.delimited:
            return self.opening
        return self.fields[0].pos() if self.fields else NO_POS

    def end(self) -> Pos:
        if self.delimited:
            return self.closing + 1
        return self.fields[-1].end() if self.fields else NO_POS


# =============================================================================
# Expressions
# =============================================================================


class Ident(Expr):
    name: str
    name_pos: Pos = NO_POS

    def pos(self) -> Pos:
        return self.name_pos

    def end(self) -> Pos:
        return self.name_pos + len(self.name)


class BasicLit(Expr):
    """Literal of basic type; ``value`` is the literal source text."""

    kind: LitKind
    value: str
    value_pos: Pos = NO_POS

    def pos(self) -> Pos:
        return self.value_pos

    def end(self) -> Pos:
        return self.value_pos + len(self.value)


class Ellipsis(Expr):
    """``...T`` in a parameter list or ``[...]T`` in an array type."""

    ellipsis: Pos = NO_POS
    elt: Expr | None = None

    def pos(self) -> Pos:
        return self.ellipsis

    def end(self) -> Pos:
        if self.elt is not None:
            return self.elt.end()
        return self.ellipsis + len(Token.ELLIPSIS)


class FuncLit(Expr):
    type: FuncType
    body: BlockStmt

    def pos(self) -> Pos:
        return self.type.pos()

    def end(self) -> Pos:
        return self.body.end()


class CompositeLit(Expr):
    type: Expr | None = None
    lbrace: Pos = NO_POS
    elts: list[Expr] = field(default_factory=list)
    rbrace: Pos = NO_POS

    def pos(self) -> Pos:
        if self.type is not None:
            return self.type.pos()
        return self.lbrace

    def end(self) -> Pos:
        return self.rbrace + 1


class ParenExpr(Expr):
    lparen: Pos = NO_POS
    x: Expr
    rparen: Pos = NO_POS

    def pos(self) -> Pos:
        return self.lparen

    def end(self) -> Pos:
        return self.rparen + 1


class SelectorExpr(Expr):
    x: Expr
    sel: Ident

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.sel.end()


class IndexExpr(Expr):
    x: Expr
    lbrack: Pos = NO_POS
    index: Expr
    rbrack: Pos = NO_POS

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.rbrack + 1


class IndexListExpr(Expr):
    """Instantiation with several type arguments, ``x[A, B]``."""

    x: Expr
    lbrack: Pos = NO_POS
    indices: list[Expr] = field(default_factory=list)
    rbrack: Pos = NO_POS

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.rbrack + 1


class SliceExpr(Expr):
    x: Expr
    lbrack: Pos = NO_POS
    low: Expr | None = None
    high: Expr | None = None
    max: Expr | None = None
    slice3: bool = False
    rbrack: Pos = NO_POS

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.rbrack + 1


class TypeAssertExpr(Expr):
    """``x.(T)``; a missing type means ``x.(type)`` in a type switch."""

    x: Expr
    lparen: Pos = NO_POS
    type: Expr | None = None
    rparen: Pos = NO_POS

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.rparen + 1


class CallExpr(Expr):
    fun: Expr
    lparen: Pos = NO_POS
    args: list[Expr] = field(default_factory=list)
    has_ellipsis: bool = False
    ellipsis: Pos = NO_POS
    rparen: Pos = NO_POS

    def expects(self, name: str) -> bool:
        if name == "ellipsis":
            return self.has_ellipsis
        return True

    def pos(self) -> Pos:
        return self.fun.pos()

    def end(self) -> Pos:
        return self.rparen + 1


class StarExpr(Expr):
    """Pointer type or dereference."""

    star: Pos = NO_POS
    x: Expr

    def pos(self) -> Pos:
        return self.star

    def end(self) -> Pos:
        return self.x.end()


class UnaryExpr(Expr):
    op_pos: Pos = NO_POS
    op: Token
    x: Expr

    def pos(self) -> Pos:
        return self.op_pos

    def end(self) -> Pos:
        return self.x.end()


class BinaryExpr(Expr):
    x: Expr
    op_pos: Pos = NO_POS
    op: Token
    y: Expr

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.y.end()


class KeyValueExpr(Expr):
    key: Expr
    colon: Pos = NO_POS
    value: Expr

    def pos(self) -> Pos:
        return self.key.pos()

    def end(self) -> Pos:
        return self.value.end()


# =============================================================================
# Types
# =============================================================================


class ArrayType(Expr):
    """Array or slice type; a missing length means a slice."""

    lbrack: Pos = NO_POS
    length: Expr | None = None
    elt: Expr

    def pos(self) -> Pos:
        return self.lbrack

    def end(self) -> Pos:
        return self.elt.end()


class StructType(Expr):
    struct_pos: Pos = NO_POS
    fields: FieldList = field(default_factory=FieldList)

    def pos(self) -> Pos:
        return self.struct_pos

    def end(self) -> Pos:
        return self.fields.end()


class FuncType(Expr):
    func_pos: Pos = NO_POS
    type_params: FieldList | None = None
    params: FieldList = field(default_factory=FieldList)
    results: FieldList | None = None

    def pos(self) -> Pos:
        if self.func_pos != NO_POS:
            return self.func_pos
        return self.params.pos()

    def end(self) -> Pos:
        if self.results is not None:
            return self.results.end()
        return self.params.end()


class InterfaceType(Expr):
    interface_pos: Pos = NO_POS
    methods: FieldList = field(default_factory=FieldList)

    def pos(self) -> Pos:
        return self.interface_pos

    def end(self) -> Pos:
        return self.methods.end()


class MapType(Expr):
    map_pos: Pos = NO_POS
    key: Expr
    value: Expr

    def pos(self) -> Pos:
        return self.map_pos

    def end(self) -> Pos:
        return self.value.end()


class ChanType(Expr):
    begin: Pos = NO_POS
    arrow: Pos = NO_POS
    dir: ChanDir = ChanDir.BOTH
    value: Expr

    def expects(self, name: str) -> bool:
        if name == "arrow":
            return self.dir is not ChanDir.BOTH
        return True

    def pos(self) -> Pos:
        return self.begin

    def end(self) -> Pos:
        return self.value.end()


# =============================================================================
# Statements
# =============================================================================


class DeclStmt(Stmt):
    decl: GenDecl

    def pos(self) -> Pos:
        return self.decl.pos()

    def end(self) -> Pos:
        return self.decl.end()


class EmptyStmt(Stmt):
    """Explicit ``;`` or an implicit empty statement."""

    semicolon: Pos = NO_POS
    implicit: bool = False

    def pos(self) -> Pos:
        return self.semicolon

    def end(self) -> Pos:
        if self.implicit:
            return self.semicolon
        return self.semicolon + 1


class LabeledStmt(Stmt):
    label: Ident
    colon: Pos = NO_POS
    stmt: Stmt

    def pos(self) -> Pos:
        return self.label.pos()

    def end(self) -> Pos:
        return self.stmt.end()


class ExprStmt(Stmt):
    x: Expr

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.x.end()


class SendStmt(Stmt):
    chan: Expr
    arrow: Pos = NO_POS
    value: Expr

    def pos(self) -> Pos:
        return self.chan.pos()

    def end(self) -> Pos:
        return self.value.end()


class IncDecStmt(Stmt):
    x: Expr
    tok_pos: Pos = NO_POS
    tok: Token = Token.INC

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.tok_pos + len(self.tok)


class AssignStmt(Stmt):
    lhs: list[Expr] = field(default_factory=list)
    tok_pos: Pos = NO_POS
    tok: Token = Token.ASSIGN
    rhs: list[Expr] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.lhs[0].pos()

    def end(self) -> Pos:
        return self.rhs[-1].end()


class GoStmt(Stmt):
    go_pos: Pos = NO_POS
    call: CallExpr

    def pos(self) -> Pos:
        return self.go_pos

    def end(self) -> Pos:
        return self.call.end()


class DeferStmt(Stmt):
    defer_pos: Pos = NO_POS
    call: CallExpr

    def pos(self) -> Pos:
        return self.defer_pos

    def end(self) -> Pos:
        return self.call.end()


class ReturnStmt(Stmt):
    return_pos: Pos = NO_POS
    results: list[Expr] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.return_pos

    def end(self) -> Pos:
        if self.results:
            return self.results[-1].end()
        return self.return_pos + len(Token.RETURN)


class BranchStmt(Stmt):
    """``break``, ``continue``, ``goto`` or ``fallthrough``."""

    tok_pos: Pos = NO_POS
    tok: Token
    label: Ident | None = None

    def pos(self) -> Pos:
        return self.tok_pos

    def end(self) -> Pos:
        if self.label is not None:
            return self.label.end()
        return self.tok_pos + len(self.tok)


class BlockStmt(Stmt):
    lbrace: Pos = NO_POS
    stmts: list[Stmt] = field(default_factory=list)
    rbrace: Pos = NO_POS

    def pos(self) -> Pos:
        return self.lbrace

    def end(self) -> Pos:
        return self.rbrace + 1


class IfStmt(Stmt):
    if_pos: Pos = NO_POS
    init: Stmt | None = None
    cond: Expr
    body: BlockStmt
    else_: Stmt | None = None

    def pos(self) -> Pos:
        return self.if_pos

    def end(self) -> Pos:
        if self.else_ is not None:
            return self.else_.end()
        return self.body.end()


class CaseClause(Stmt):
    """Case of an expression or type switch; no expressions means ``default``."""

    case_pos: Pos = NO_POS
    exprs: list[Expr] = field(default_factory=list)
    colon: Pos = NO_POS
    body: list[Stmt] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.case_pos

    def end(self) -> Pos:
        if self.body:
            return self.body[-1].end()
        return self.colon + 1


class SwitchStmt(Stmt):
    switch_pos: Pos = NO_POS
    init: Stmt | None = None
    subject: Expr | None = None
    body: BlockStmt

    def pos(self) -> Pos:
        return self.switch_pos

    def end(self) -> Pos:
        return self.body.end()


class TypeSwitchStmt(Stmt):
    switch_pos: Pos = NO_POS
    init: Stmt | None = None
    assign: Stmt
    body: BlockStmt

    def pos(self) -> Pos:
        return self.switch_pos

    def end(self) -> Pos:
        return self.body.end()


class CommClause(Stmt):
    """Case of a select statement; no comm statement means ``default``."""

    case_pos: Pos = NO_POS
    comm: Stmt | None = None
    colon: Pos = NO_POS
    body: list[Stmt] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.case_pos

    def end(self) -> Pos:
        if self.body:
            return self.body[-1].end()
        return self.colon + 1


class SelectStmt(Stmt):
    select_pos: Pos = NO_POS
    body: BlockStmt

    def pos(self) -> Pos:
        return self.select_pos

    def end(self) -> Pos:
        return self.body.end()


class ForStmt(Stmt):
    for_pos: Pos = NO_POS
    init: Stmt | None = None
    cond: Expr | None = None
    post: Stmt | None = None
    body: BlockStmt

    def pos(self) -> Pos:
        return self.for_pos

    def end(self) -> Pos:
        return self.body.end()


class RangeStmt(Stmt):
    for_pos: Pos = NO_POS
    key: Expr | None = None
    value: Expr | None = None
    tok_pos: Pos = NO_POS
    tok: Token | None = None
    range_pos: Pos = NO_POS
    x: Expr
    body: BlockStmt

    def expects(self, name: str) -> bool:
        if name == "tok_pos":
            return self.tok is not None
        return True

    def pos(self) -> Pos:
        return self.for_pos

    def end(self) -> Pos:
        return self.body.end()


# =============================================================================
# Specs and declarations
# =============================================================================


class ImportSpec(Spec):
    doc: CommentGroup | None = None
    name: Ident | None = None
    path: BasicLit

    def pos(self) -> Pos:
        if self.name is not None:
            return self.name.pos()
        return self.path.pos()

    def end(self) -> Pos:
        return self.path.end()


class ValueSpec(Spec):
    """Constant or variable specification."""

    doc: CommentGroup | None = None
    names: list[Ident] = field(default_factory=list)
    type: Expr | None = None
    values: list[Expr] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.names[0].pos()

    def end(self) -> Pos:
        if self.values:
            return self.values[-1].end()
        if self.type is not None:
            return self.type.end()
        return self.names[-1].end()


class TypeSpec(Spec):
    """Type declaration; ``alias`` selects the ``type A = B`` form."""

    doc: CommentGroup | None = None
    name: Ident
    type_params: FieldList | None = None
    alias: bool = False
    assign: Pos = NO_POS
    type: Expr

    def expects(self, name: str) -> bool:
        if name == "assign":
            return self.alias
        return True

    def pos(self) -> Pos:
        return self.name.pos()

    def end(self) -> Pos:
        return self.type.end()


class GenDecl(Decl):
    """``import``, ``const``, ``type`` or ``var`` declaration group."""

    doc: CommentGroup | None = None
    tok_pos: Pos = NO_POS
    tok: Token
    parenthesized: bool = False
    lparen: Pos = NO_POS
    specs: list[Spec] = field(default_factory=list)
    rparen: Pos = NO_POS

    def expects(self, name: str) -> bool:
        if name in ("lparen", "rparen"):
            return self.parenthesized
        return True

    def pos(self) -> Pos:
        return self.tok_pos

    def end(self) -> Pos:
        if self.parenthesized:
            return self.rparen + 1
        if self.specs:
            return self.specs[-1].end()
        return self.tok_pos + len(self.tok)


class FuncDecl(Decl):
    """Function or method declaration; the ``func`` keyword lives on ``type``."""

    doc: CommentGroup | None = None
    recv: FieldList | None = None
    name: Ident
    type: FuncType = field(default_factory=FuncType)
    body: BlockStmt | None = None

    def pos(self) -> Pos:
        return self.type.pos()

    def end(self) -> Pos:
        if self.body is not None:
            return self.body.end()
        return self.type.end()


class File(Node):
    """Root of a source file.

    ``comments`` lists every documentation comment group in source order; it
    is filled in by synthesis.
    """

    doc: CommentGroup | None = None
    package_pos: Pos = NO_POS
    name: Ident
    decls: list[Decl] = field(default_factory=list)
    comments: list[CommentGroup] = field(default_factory=list)
    file_start: Pos = NO_POS
    file_end: Pos = NO_POS

    def pos(self) -> Pos:
        return self.package_pos

    def end(self) -> Pos:
        if self.decls:
            return self.decls[-1].end()
        return self.name.end()
