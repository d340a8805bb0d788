"""Compile declaration trees into nested test groups.

Each declaration becomes a Group titled after it, holding the statements
folded from its own doc comments followed by the groups of its children in
source order. Groups without children are never produced.
"""

from typing import assert_never

from docexample.generator.comments import AssociatedComments, Comment
from docexample.generator.declarations import Container, Declaration, Leaf, Package, Unsupported
from docexample.generator.folder import EmptySectionPolicy, fold
from docexample.generator.nodes import CompileWarning, Group, SourcePosition, Statement
from docexample.generator.tokenizer import tokenize_doc


class TreeCompiler:
    """Compiles the declarations of one source file.

    Attributes:
        comments: Comment index of the file's syntax tree.
        path: File path used to anchor errors and warnings.
        dialect: Grammar version of the code blocks.
        policy: Treatment of tags without code.
        warnings: Malformed-tag warnings collected so far.
    """

    def __init__(
        self,
        comments: AssociatedComments,
        path: str = "<source>",
        dialect: str = "3.12",
        policy: EmptySectionPolicy = EmptySectionPolicy.DROP,
    ):
        self.comments = comments
        self.path = path
        self.dialect = dialect
        self.policy = policy
        self.warnings: list[CompileWarning] = []

    def compile(self, declaration: Declaration) -> Group | None:
        """Compile one declaration, returning None when it carries no test content."""
        if isinstance(declaration, Package):
            return self._group(declaration.name, self._own_statements(declaration) + self._children(declaration.children))
        if isinstance(declaration, Container):
            return self._group(declaration.name, self._own_statements(declaration) + self._children(declaration.children))
        if isinstance(declaration, Leaf):
            return self._group(declaration.name, self._own_statements(declaration))
        if isinstance(declaration, Unsupported):
            return None
        assert_never(declaration)

    def _own_statements(self, declaration: Package | Container | Leaf) -> tuple[Statement, ...]:
        statements: list[Statement] = []
        for comment in self.comments.leading(declaration.node):
            statements.extend(self._fold_comment(comment))
        return tuple(statements)

    def _fold_comment(self, comment: Comment) -> tuple[Statement, ...]:
        return fold(
            tokenize_doc(comment.text),
            dialect=self.dialect,
            origin=SourcePosition(self.path, comment.line, comment.column),
            indent=comment.indent,
            warnings=self.warnings,
            policy=self.policy,
        )

    def _children(self, children: tuple[Declaration, ...]) -> tuple[Statement, ...]:
        return tuple(group for child in children if (group := self.compile(child)) is not None)

    @staticmethod
    def _group(title: str, children: tuple[Statement, ...]) -> Group | None:
        if not children:
            return None
        return Group(title, children)
