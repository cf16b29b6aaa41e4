"""Deferred bindings for foreach bodies.

A loop body is parsed before the loop variable has a value, and
``get_filename_component`` derives a second name from that variable. The
table therefore holds symbolic entries first and concrete values later:

    table = BindingTable()
    table.declare("F")
    table.declare_derived("STEM", "F", Transform.STRIP_CC_SUFFIX)
    table.bind("F", "a.cc")
    table.materialize()   # {"F": "a.cc", "STEM": "a"}
"""

from enum import Enum
from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, Field

from .errors import BindingInvariantError, UnknownSymbolError


class Transform(str, Enum):
    """Named string transforms a derived binding may apply."""

    STRIP_CC_SUFFIX = "strip_cc_suffix"

    def apply(self, value: str) -> str:
        match self:
            case Transform.STRIP_CC_SUFFIX:
                return value.replace(".cc", "")
            case _:
                raise ValueError(f"unhandled transform: {self!r}")


class Unset(BaseModel):
    type: TypingLiteral["unset"] = "unset"


class Concrete(BaseModel):
    type: TypingLiteral["concrete"] = "concrete"
    value: str


class Derived(BaseModel):
    """Value computed from another entry once that entry is concrete."""

    type: TypingLiteral["derived"] = "derived"
    target: str
    transform: Transform


Binding = Annotated[Unset | Concrete | Derived, Field(discriminator="type")]


class BindingTable(BaseModel):
    """Ordered map from symbolic name to a deferred value."""

    entries: dict[str, Binding] = Field(default_factory=dict)

    def declare(self, key: str) -> None:
        self.entries[key] = Unset()

    def declare_derived(self, key: str, target: str, transform: Transform) -> None:
        if target not in self.entries:
            raise UnknownSymbolError("binding", target)
        self.entries[key] = Derived(target=target, transform=transform)

    def bind(self, key: str, value: str) -> None:
        if key not in self.entries:
            raise UnknownSymbolError("binding", key)
        self.entries[key] = Concrete(value=value)

    def materialize(self) -> dict[str, str]:
        """Resolve every entry to a string. Does not modify the table."""
        values: dict[str, str] = {}
        for key, entry in self.entries.items():
            match entry:
                case Concrete(value=value):
                    values[key] = value
                case Derived(target=target, transform=transform):
                    source = self.entries.get(target)
                    if not isinstance(source, Concrete):
                        raise BindingInvariantError(
                            f"{key} derives from {target}, which has no value"
                        )
                    values[key] = transform.apply(source.value)
                case Unset():
                    raise BindingInvariantError(f"{key} was never bound")
        return values
