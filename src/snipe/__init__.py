"""snipe: find a single test in a large C++/Python tree and run it.

Pipeline: scan CMakeLists.txt -> expand sets and foreach loops -> resolved
suites -> fill test cases from sources -> cache -> build and run.

Example:
    from snipe import parse_suites

    suites = parse_suites(open("src/v/kafka/tests/CMakeLists.txt").read())
    for suite in suites:
        print(suite.name, suite.kind, sorted(suite.sources))
"""

__version__ = "0.1.0"

from .binding import BindingTable, Concrete, Derived, Transform, Unset
from .context import EvaluationContext
from .errors import BindingInvariantError, MalformedConstructError, ParseError, UnknownSymbolError
from .expander import (
    dispatch_tag_parse,
    expand_foreach,
    parse_suites,
    parse_suites_from_file,
    parse_unit,
)
from .models import PythonTestClass, SourceSet, SuiteDecl, SuiteKind
from .scanner import Tag, skip_to_next_tag

__all__ = [
    # Scan
    "Tag",
    "skip_to_next_tag",
    # Bindings
    "BindingTable",
    "Transform",
    "Unset",
    "Concrete",
    "Derived",
    # Model
    "SourceSet",
    "SuiteDecl",
    "SuiteKind",
    "PythonTestClass",
    "EvaluationContext",
    # Parse
    "parse_unit",
    "parse_suites",
    "parse_suites_from_file",
    "dispatch_tag_parse",
    "expand_foreach",
    # Errors
    "ParseError",
    "MalformedConstructError",
    "UnknownSymbolError",
    "BindingInvariantError",
]
