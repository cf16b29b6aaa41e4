"""Find ducktape-style test classes: methods decorated with ``@cluster(...)``."""

import ast
from pathlib import Path

from .models import PythonTestClass


def is_cluster_decorator(node: ast.expr) -> bool:
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == "cluster"
    )


def collect_test_fns(cls: ast.ClassDef) -> list[str]:
    return [
        item.name
        for item in cls.body
        if isinstance(item, ast.FunctionDef)
        and any(is_cluster_decorator(d) for d in item.decorator_list)
    ]


def find_tests_in_source(path: Path) -> list[PythonTestClass]:
    """Top-level classes in a Python file that hold at least one test."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    classes = []
    for stmt in tree.body:
        if isinstance(stmt, ast.ClassDef):
            tests = collect_test_fns(stmt)
            if tests:
                classes.append(
                    PythonTestClass(source_path=path, class_name=stmt.name, tests=tests)
                )
    return classes
