"""Declarations of a parsed module, as a closed set of kinds.

Every statement of a module or class body maps to exactly one kind:
Package (the module itself), Container (a class), Leaf (functions, type
aliases and bindings) or Unsupported (everything else, skipped by the
compiler).
"""

import ast
from dataclasses import dataclass


@dataclass(frozen=True)
class Package:
    name: str
    node: ast.Module
    children: tuple["Declaration", ...]


@dataclass(frozen=True)
class Container:
    name: str
    node: ast.ClassDef
    children: tuple["Declaration", ...]


@dataclass(frozen=True)
class Leaf:
    name: str
    node: ast.stmt


@dataclass(frozen=True)
class Unsupported:
    node: ast.stmt


Declaration = Package | Container | Leaf | Unsupported


def declarations_of(module_name: str, tree: ast.Module) -> Package:
    """Build the declaration tree of a parsed module."""
    return Package(module_name, tree, tuple(_declaration(node) for node in tree.body))


def _declaration(node: ast.stmt) -> Declaration:
    if isinstance(node, ast.ClassDef):
        return Container(node.name, node, tuple(_declaration(child) for child in node.body))
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        return Leaf(node.name, node)
    if isinstance(node, ast.TypeAlias):
        return Leaf(node.name.id, node)
    if isinstance(node, ast.AnnAssign):
        return Leaf(binding_name(node.target), node)
    if isinstance(node, ast.Assign):
        return Leaf(" = ".join(binding_name(target) for target in node.targets), node)
    return Unsupported(node)


def binding_name(target: ast.expr) -> str:
    """Name of a simple binding, or the textual rendering of a destructuring pattern."""
    if isinstance(target, ast.Name):
        return target.id
    return ast.unparse(target)
