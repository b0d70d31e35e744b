"""
Hello World Example
===================

Builds the syntax tree of a small Go program by hand and gives it
positions, demonstrating:
- Constructing unpositioned nodes
- rewrite_positions and the line table it returns
- Doc comments collected into File.comments
- Handing the positioned tree to another process as JSON
"""

import logging

from astpos import iter_nodes, position_fields, rewrite_positions, to_json
from astpos.syntax import (
    BasicLit,
    BlockStmt,
    CallExpr,
    Comment,
    CommentGroup,
    ExprStmt,
    File,
    FuncDecl,
    GenDecl,
    Ident,
    ImportSpec,
    SelectorExpr,
)
from astpos.tokens import LitKind, Token


# ============================================================================
# Build the tree
# ============================================================================

def build() -> File:
    """
    package main

    import "fmt"

    // main greets the world.
    func main() {
        fmt.Println("hello, world")
    }
    """
    greet = ExprStmt(
        x=CallExpr(
            fun=SelectorExpr(x=Ident(name="fmt"), sel=Ident(name="Println")),
            args=[BasicLit(kind=LitKind.STRING, value='"hello, world"')],
        )
    )
    return File(
        name=Ident(name="main"),
        decls=[
            GenDecl(
                tok=Token.IMPORT,
                specs=[ImportSpec(path=BasicLit(kind=LitKind.STRING, value='"fmt"'))],
            ),
            FuncDecl(
                doc=CommentGroup(comments=[Comment(text="// main greets the world.")]),
                name=Ident(name="main"),
                body=BlockStmt(stmts=[greet]),
            ),
        ],
    )


# ============================================================================
# Main
# ============================================================================

def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    file, lines = rewrite_positions(build())

    print("Token positions:")
    for node in iter_nodes(file):
        for name in position_fields(type(node)):
            offset = getattr(node, name)
            if node.expects(name):
                print(f"  {node.tag:<12} {name:<12} {lines.position(offset).format()}")
    print()

    print(f"Line starts: {list(lines)}")
    print(f"Doc comments: {[c.text for g in file.comments for c in g.comments]}")
    print()

    print("Positioned tree as JSON:")
    print(to_json(file))


if __name__ == "__main__":
    main()
