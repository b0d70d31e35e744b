"""Synthesis of source positions for programmatically built syntax trees.

A tree assembled node by node has no positions, and a renderer that relies
on them to place line breaks and comments prints it as one compacted line
with its doc comments dropped. `rewrite_positions` walks such a tree and
invents positions, line starts and a comment list that look like what a
parser would have produced for nicely formatted source.

Supported doc comment anchors are the file itself, declaration groups and
their specs, function declarations and fields. Line breaks are added after
blocks, declaration groups, comments and per the composite literal rules in
`astpos.layout`; every other break is left to the renderer.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from astpos import layout
from astpos.comments import CommentAttacher
from astpos.config import SynthesisOptions
from astpos.context import ListContext
from astpos.errors import (
    CycleError,
    DuplicatePositionError,
    MissingPositionError,
    SharedNodeError,
    TreeDepthError,
    UnsupportedNodeError,
)
from astpos.lines import LineTable, PositionCounter
from astpos.nodes import Node, Pos
from astpos.schema import FieldKind, node_schema, position_fields
from astpos.syntax import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanType,
    CommClause,
    Comment,
    CommentGroup,
    CompositeLit,
    DeclStmt,
    DeferStmt,
    Ellipsis,
    EmptyStmt,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    GoStmt,
    Ident,
    IfStmt,
    ImportSpec,
    IncDecStmt,
    IndexExpr,
    IndexListExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    MapType,
    ParenExpr,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    StarExpr,
    StructType,
    SwitchStmt,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    ValueSpec,
)
from astpos.tokens import ChanDir, Token

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)


def rewrite_positions(
    file: File,
    options: SynthesisOptions | None = None,
) -> tuple[File, LineTable]:
    """Assign synthetic positions to every node of `file`.

    Args:
        file: Root of a tree built without positions
        options: Cursor base and layout thresholds (defaults if omitted)

    Returns:
        The same file, now positioned and carrying its doc comments in
        `file.comments`, and the table of line starts a renderer needs to
        reproduce the line breaks

    Raises:
        PositionError: If the tree cannot be positioned. The tree is left
            unmodified in that case.

    """
    if not isinstance(file, File):
        msg = f"Expected a File root, got {type(file).__name__}"
        raise UnsupportedNodeError(msg)
    positioner = Positioner(file, options)
    return file, positioner.run()


class Positioner:
    """Pre-order traverser that assigns positions one token at a time.

    Position writes are staged and only applied to the tree once the whole
    traversal has succeeded, so a failing run leaves the tree untouched.
    """

    def __init__(self, root: File, options: SynthesisOptions | None = None) -> None:
        self.root = root
        self.options = options if options is not None else SynthesisOptions()
        self.counter = PositionCounter(self.options.base)
        self.lists = ListContext()
        self.comments = CommentAttacher(self.counter, self._mark)

        self._staged: dict[tuple[int, str], Pos] = {}
        self._nodes: dict[int, Node] = {}
        self._visited: set[int] = set()
        self._active: set[int] = set()
        self._done = False

    def run(self) -> LineTable:
        """Position the whole tree and return its line table."""
        if self._done:
            msg = "Positioner instances are single-use"
            raise RuntimeError(msg)
        self._done = True

        self._mark(self.root, "file_start")
        try:
            self.traverse(self.root)
        except RecursionError as exc:
            msg = "Syntax tree is nested too deeply to be positioned"
            raise TreeDepthError(msg) from exc
        self._mark(self.root, "file_end")

        self._commit()
        self.root.comments = list(self.comments.groups)

        logger.debug(
            "Positioned %d nodes over %d lines with %d comment groups, end offset %d",
            len(self._nodes),
            len(self.counter.lines),
            len(self.comments.groups),
            self.counter.current(),
        )
        return self.counter.lines

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def traverse(self, node: Node | None, *, aggregate: bool = False) -> None:
        """Position `node` and, unless its rule did so, its children.

        `aggregate` is only read by field lists: it selects the struct layout
        with a line break after the opening brace and two after the closing one.
        """
        if node is None:
            return
        if not isinstance(node, Node):
            msg = f"Cannot position {type(node).__name__} value {node!r}"
            raise UnsupportedNodeError(msg)
        with self._visiting(node):
            if self._down(node, aggregate=aggregate):
                self._walk_children(node)

    def traverse_list(self, nodes: Sequence[Node]) -> None:
        """Traverse siblings inside their own list-context frame."""
        with self.lists.entered(len(nodes)) as frame:
            for node in nodes:
                self.traverse(node)
                frame.advance()

    def _walk_children(self, node: Node) -> None:
        for f in node_schema(type(node)).children:
            value = getattr(node, f.name)
            if f.kind is FieldKind.CHILDREN:
                self.traverse_list(value)
            else:
                self.traverse(value)

    @contextmanager
    def _visiting(self, node: Node) -> Iterator[None]:
        key = id(node)
        if key in self._active:
            msg = f"{type(node).__name__} node is its own ancestor"
            raise CycleError(msg)
        if key in self._visited:
            msg = f"{type(node).__name__} node is reachable through several parents"
            raise SharedNodeError(msg)
        self._visited.add(key)
        self._nodes[key] = node
        self._active.add(key)
        yield
        self._active.discard(key)

    def _down(self, n: Node, *, aggregate: bool = False) -> bool:
        """Apply the layout rule for `n`.

        Returns True when the generic walk should still visit the children,
        False when the rule has positioned them itself. Cases are sorted
        alphabetically.
        """
        match n:
            case ArrayType():
                self._token(n, "lbrack", Token.LBRACK)
                self.traverse(n.length)
                self._skip(Token.RBRACK)
                self.traverse(n.elt)
                return False

            case AssignStmt():
                self.traverse_list(n.lhs)
                self._token(n, "tok_pos", n.tok)
                self.traverse_list(n.rhs)
                return False

            case BasicLit():
                self._text(n, "value_pos", n.value)

            case BinaryExpr():
                self.traverse(n.x)
                self._token(n, "op_pos", n.op)
                self.traverse(n.y)
                return False

            case BlockStmt():
                self._token(n, "lbrace", Token.LBRACE)
                self.counter.newline()
                self.traverse_list(n.stmts)
                self._token(n, "rbrace", Token.RBRACE)
                self.counter.newline()
                return False

            case BranchStmt():
                self._token(n, "tok_pos", n.tok)

            case CallExpr():
                self.traverse(n.fun)
                self._token(n, "lparen", Token.LPAREN)
                self.traverse_list(n.args)
                if n.has_ellipsis:
                    self._token(n, "ellipsis", Token.ELLIPSIS)
                self._token(n, "rparen", Token.RPAREN)
                return False

            case CaseClause():
                self._token(n, "case_pos", Token.CASE if n.exprs else Token.DEFAULT)
                self.traverse_list(n.exprs)
                self._token(n, "colon", Token.COLON)
                self.counter.newline()
                self.traverse_list(n.body)
                return False

            case ChanType():
                begin = self._mark(n, "begin")
                if n.dir is ChanDir.RECV:
                    self._stage(n, "arrow", begin)
                    self._skip(Token.ARROW)
                self._skip(Token.CHAN)
                if n.dir is ChanDir.SEND:
                    self._token(n, "arrow", Token.ARROW)

            case CommClause():
                self._token(
                    n, "case_pos", Token.CASE if n.comm is not None else Token.DEFAULT
                )
                self.traverse(n.comm)
                self._token(n, "colon", Token.COLON)
                self.counter.newline()
                self.traverse_list(n.body)
                return False

            case Comment() | CommentGroup():
                msg = "Comments are positioned through the node they document"
                raise UnsupportedNodeError(msg)

            case CompositeLit():
                threshold = self.options.multiline_threshold
                breaks = layout.breaks_elements(n, threshold)
                multi = layout.is_multi(n, threshold)
                self.traverse(n.type)
                self._token(n, "lbrace", Token.LBRACE)
                if breaks:
                    self.counter.newline()
                with self.lists.entered(len(n.elts)) as frame:
                    for element in n.elts:
                        self.traverse(element)
                        if multi and layout.breaks_after_element(
                            element, self.lists.index(), self.lists.size()
                        ):
                            self.counter.newline()
                        frame.advance()
                if breaks:
                    self.counter.newline()
                self._token(n, "rbrace", Token.RBRACE)
                if layout.breaks_after_literal(n, self.lists.size(), threshold):
                    self.counter.newline()
                return False

            case DeclStmt() | ExprStmt() | FuncLit() | SelectorExpr():
                # No tokens of their own; children in source order.
                pass

            case DeferStmt():
                self._token(n, "defer_pos", Token.DEFER)

            case Ellipsis():
                self._token(n, "ellipsis", Token.ELLIPSIS)

            case EmptyStmt():
                self._token(n, "semicolon", Token.SEMICOLON)

            case Field():
                self.comments.attach(n.doc)

            case FieldList():
                if n.delimited:
                    self._mark(n, "opening")
                    self.counter.advance(1)
                    if aggregate:
                        self.counter.newline()
                self.traverse_list(n.fields)
                if n.delimited:
                    self._mark(n, "closing")
                    self.counter.advance(1)
                    if aggregate:
                        self.counter.newline()
                        self.counter.newline()
                return False

            case File():
                self.comments.attach(n.doc)
                self._token(n, "package_pos", Token.PACKAGE)
                self.counter.advance(1)
                self.traverse(n.name)
                self.counter.newline()
                self.traverse_list(n.decls)
                return False

            case ForStmt():
                self._token(n, "for_pos", Token.FOR)

            case FuncDecl():
                self.comments.attach(n.doc)
                with self._visiting(n.type):
                    self._token(n.type, "func_pos", Token.FUNC)
                    self.traverse(n.recv)
                    self.traverse(n.name)
                    self._signature(n.type)
                self.traverse(n.body)
                self.counter.newline()
                return False

            case FuncType():
                self._token(n, "func_pos", Token.FUNC)
                self._signature(n)
                return False

            case GenDecl():
                self.comments.attach(n.doc)
                self._token(n, "tok_pos", n.tok)
                if n.parenthesized:
                    self._token(n, "lparen", Token.LPAREN)
                    self.counter.newline()
                self.traverse_list(n.specs)
                if n.parenthesized:
                    self._token(n, "rparen", Token.RPAREN)
                    self.counter.newline()
                return False

            case GoStmt():
                self._token(n, "go_pos", Token.GO)

            case Ident():
                self._text(n, "name_pos", n.name)

            case IfStmt():
                self._token(n, "if_pos", Token.IF)

            case ImportSpec() | ValueSpec():
                self.comments.attach(n.doc)

            case IncDecStmt():
                self.traverse(n.x)
                self._token(n, "tok_pos", n.tok)
                return False

            case IndexExpr():
                self.traverse(n.x)
                self._token(n, "lbrack", Token.LBRACK)
                self.traverse(n.index)
                self._token(n, "rbrack", Token.RBRACK)
                return False

            case IndexListExpr():
                self.traverse(n.x)
                self._token(n, "lbrack", Token.LBRACK)
                self.traverse_list(n.indices)
                self._token(n, "rbrack", Token.RBRACK)
                return False

            case InterfaceType():
                self._token(n, "interface_pos", Token.INTERFACE)

            case KeyValueExpr():
                self.traverse(n.key)
                self._token(n, "colon", Token.COLON)
                self.traverse(n.value)
                if layout.breaks_after_pair(n, self.lists.size()):
                    self.counter.newline()
                return False

            case LabeledStmt():
                self.traverse(n.label)
                self._token(n, "colon", Token.COLON)
                self.traverse(n.stmt)
                return False

            case MapType():
                self._token(n, "map_pos", Token.MAP)

            case ParenExpr():
                self._token(n, "lparen", Token.LPAREN)
                self.traverse(n.x)
                self._token(n, "rparen", Token.RPAREN)
                return False

            case RangeStmt():
                self._token(n, "for_pos", Token.FOR)
                self.traverse(n.key)
                self.traverse(n.value)
                if n.tok is not None:
                    self._token(n, "tok_pos", n.tok)
                self._token(n, "range_pos", Token.RANGE)
                self.traverse(n.x)
                self.traverse(n.body)
                return False

            case ReturnStmt():
                self._token(n, "return_pos", Token.RETURN)

            case SelectStmt():
                self._token(n, "select_pos", Token.SELECT)

            case SendStmt():
                self.traverse(n.chan)
                self._token(n, "arrow", Token.ARROW)
                self.traverse(n.value)
                return False

            case SliceExpr():
                self.traverse(n.x)
                self._token(n, "lbrack", Token.LBRACK)
                self.traverse(n.low)
                self._skip(Token.COLON)
                self.traverse(n.high)
                if n.slice3:
                    self._skip(Token.COLON)
                    self.traverse(n.max)
                self._token(n, "rbrack", Token.RBRACK)
                return False

            case StarExpr():
                self._token(n, "star", Token.MUL)

            case StructType():
                self._token(n, "struct_pos", Token.STRUCT)
                self.traverse(n.fields, aggregate=True)
                return False

            case SwitchStmt():
                self._token(n, "switch_pos", Token.SWITCH)

            case TypeAssertExpr():
                self.traverse(n.x)
                self._skip(Token.PERIOD)
                self._token(n, "lparen", Token.LPAREN)
                if n.type is None:
                    self._skip(Token.TYPE)
                else:
                    self.traverse(n.type)
                self._token(n, "rparen", Token.RPAREN)
                return False

            case TypeSpec():
                self.comments.attach(n.doc)
                if not n.alias:
                    return True
                self.traverse(n.name)
                self.traverse(n.type_params)
                self._token(n, "assign", Token.ASSIGN)
                self.traverse(n.type)
                return False

            case TypeSwitchStmt():
                self._token(n, "switch_pos", Token.SWITCH)

            case UnaryExpr():
                self._token(n, "op_pos", n.op)

            case _:
                msg = f"No layout rule for node kind '{type(n).__name__}'"
                raise UnsupportedNodeError(msg)

        return True

    def _signature(self, n: FuncType) -> None:
        self.traverse(n.type_params)
        self.traverse(n.params)
        self.traverse(n.results)

    # -------------------------------------------------------------------------
    # Position bookkeeping
    # -------------------------------------------------------------------------

    def _mark(self, node: Node, name: str) -> Pos:
        """Stage the current cursor value as `node.<name>`."""
        pos = self.counter.current()
        self._stage(node, name, pos)
        return pos

    def _token(self, node: Node, name: str, tok: Token) -> None:
        self._mark(node, name)
        self.counter.advance(len(tok))

    def _text(self, node: Node, name: str, text: str) -> None:
        self._mark(node, name)
        self.counter.advance(len(text))

    def _skip(self, tok: Token) -> None:
        """Step over a token that has no position field."""
        self.counter.advance(len(tok))

    def _stage(self, node: Node, name: str, pos: Pos) -> None:
        if name not in position_fields(type(node)):
            msg = f"'{name}' is not a position field of {type(node).__name__}"
            raise AttributeError(msg)
        key = (id(node), name)
        if key in self._staged:
            msg = f"Position '{name}' of {type(node).__name__} assigned twice"
            raise DuplicatePositionError(msg)
        self._nodes.setdefault(id(node), node)
        self._staged[key] = pos

    def _commit(self) -> None:
        """Apply staged positions after checking none is missing."""
        for key, node in self._nodes.items():
            for name in position_fields(type(node)):
                if node.expects(name) and (key, name) not in self._staged:
                    msg = f"Position '{name}' of {type(node).__name__} was never assigned"
                    raise MissingPositionError(msg)

        for (key, name), pos in self._staged.items():
            setattr(self._nodes[key], name, pos)
