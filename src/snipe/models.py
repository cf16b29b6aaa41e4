"""Data model for extracted test suites."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .errors import UnknownSymbolError

if TYPE_CHECKING:
    from .context import EvaluationContext

PLACEHOLDER = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


def placeholder_name(token: str) -> str | None:
    """Return NAME if token is exactly ``${NAME}``, else None."""
    m = PLACEHOLDER.fullmatch(token)
    return m.group(1) if m else None


class SourceSet(BaseModel):
    """A named collection of source files declared with ``set(...)``."""

    name: str
    files: set[str] = Field(default_factory=set)

    @classmethod
    def from_tokens(cls, tokens: list[str]) -> SourceSet:
        return cls(name=tokens[0], files=set(tokens[1:]))


class SuiteKind(str, Enum):
    UNIT = "Unit"
    FIXTURE = "Fixture"
    BENCH = "Bench"

    @property
    def binary_suffix(self) -> str:
        return {
            SuiteKind.UNIT: "_rpunit",
            SuiteKind.FIXTURE: "_rpfixture",
            SuiteKind.BENCH: "_rpbench",
        }[self]

    def __str__(self) -> str:
        return self.value


class SuiteDecl(BaseModel):
    """A test suite declared with ``rp_test(...)``.

    Freshly parsed, the name and sources may still hold ``${VAR}``
    placeholders. Resolved suites hold only concrete strings. ``tests`` is
    filled later from the suite's source files.
    """

    name: str
    kind: SuiteKind
    sources: set[str] = Field(default_factory=set)
    tests: set[str] = Field(default_factory=set)

    def __str__(self) -> str:
        return f"{self.name} ({self.kind})"

    @property
    def test_target(self) -> str:
        """Binary name built for this suite (e.g. ``foo_rpunit``)."""
        return f"{self.name}{self.kind.binary_suffix}"

    def needs_source_expansion(self) -> bool:
        return any("$" in src for src in self.sources)

    def expand_sources(self, ctx: EvaluationContext) -> None:
        """Replace whole-token set references with the members of that set."""
        sources: set[str] = set()
        for src in self.sources:
            name = placeholder_name(src)
            if name is None:
                sources.add(src)
            else:
                sources |= ctx.resolve_set(name)
        self.sources = sources

    def evaluate(self, variables: dict[str, str], ctx: EvaluationContext) -> SuiteDecl:
        """Return a copy with loop bindings substituted into name and sources."""
        return self.model_copy(
            update={
                "name": self.eval_name(variables),
                "sources": self.eval_sources(variables, ctx),
                "tests": set(self.tests),
            }
        )

    def eval_name(self, variables: dict[str, str]) -> str:
        def substitute(m: re.Match) -> str:
            var = m.group(1)
            if var not in variables:
                raise UnknownSymbolError("variable", var)
            return variables[var]

        return PLACEHOLDER.sub(substitute, self.name)

    def eval_sources(self, variables: dict[str, str], ctx: EvaluationContext) -> set[str]:
        sources: set[str] = set()
        for src in self.sources:
            var = placeholder_name(src)
            if var is None:
                sources.add(src)
            elif var in variables:
                sources.add(variables[var])
            else:
                # not a loop binding, so it must name a declared set
                sources |= ctx.resolve_set(var)
        return sources


class PythonTestClass(BaseModel):
    """A Python class holding ``@cluster``-decorated test methods."""

    source_path: Path
    class_name: str
    tests: list[str] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.source_path}::{self.class_name}"
