"""Test generation from examples in doc comments.

Parses Python sources, associates doc comments with declarations, folds
each comment into test sections and nests them following the declaration
structure, then assembles one test module for all files.
"""

from docexample.generator.assembler import assemble
from docexample.generator.comments import AssociatedComments, Comment
from docexample.generator.compiler import TreeCompiler
from docexample.generator.declarations import Container, Declaration, Leaf, Package, Unsupported, declarations_of
from docexample.generator.folder import EmptySectionPolicy, FoldState, fold
from docexample.generator.nodes import (
    Code,
    CompileWarning,
    GeneratedSource,
    Group,
    Markup,
    Section,
    SourcePosition,
    Statement,
)
from docexample.generator.options import ExampleOptions
from docexample.generator.pipeline import SourceFile, compile_file, discover_sources, generate, module_name
from docexample.generator.tokenizer import tokenize_doc

__all__ = [
    "AssociatedComments",
    "Code",
    "Comment",
    "CompileWarning",
    "Container",
    "Declaration",
    "EmptySectionPolicy",
    "ExampleOptions",
    "FoldState",
    "GeneratedSource",
    "Group",
    "Leaf",
    "Markup",
    "Package",
    "Section",
    "SourceFile",
    "SourcePosition",
    "Statement",
    "TreeCompiler",
    "Unsupported",
    "assemble",
    "compile_file",
    "declarations_of",
    "discover_sources",
    "fold",
    "generate",
    "module_name",
    "tokenize_doc",
]
