"""Per-file evaluation state: declared source sets and discovered suites."""

from dataclasses import dataclass, field

from .errors import MalformedConstructError, UnknownSymbolError
from .models import SourceSet, SuiteDecl, placeholder_name


@dataclass
class EvaluationContext:
    """State of one parse of one CMake file.

    ``suites`` keeps discovery order; a later suite with the same name
    replaces the earlier one.
    """

    source_sets: dict[str, SourceSet] = field(default_factory=dict)
    suites: dict[str, SuiteDecl] = field(default_factory=dict)

    def declare_set(self, source_set: SourceSet) -> None:
        self.source_sets[source_set.name] = source_set

    def install(self, suite: SuiteDecl) -> None:
        self.suites[suite.name] = suite

    def lookup_set(self, name: str) -> SourceSet:
        if name not in self.source_sets:
            raise UnknownSymbolError("source set", name)
        return self.source_sets[name]

    def resolve_set(self, name: str, _seen: frozenset[str] = frozenset()) -> set[str]:
        """Concrete members of a set, following members that name other sets."""
        if name in _seen:
            raise MalformedConstructError("set", f"{name} refers to itself")
        seen = _seen | {name}
        files: set[str] = set()
        for member in self.lookup_set(name).files:
            ref = placeholder_name(member)
            if ref is None:
                files.add(member)
            else:
                files |= self.resolve_set(ref, seen)
        return files
