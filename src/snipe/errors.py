"""Exceptions raised while extracting test suites from CMake files."""


class ParseError(Exception):
    """Malformed input. Carries the 1-based line once the dispatcher knows it."""

    def __init__(self, msg: str, line: int | None = None):
        super().__init__(msg)
        self.msg = msg
        self.line = line

    def locate(self, line: int) -> None:
        if self.line is None:
            self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.msg
        return f"line {self.line}: {self.msg}"


class MalformedConstructError(ParseError):
    """A recognized construct is missing a required part."""

    def __init__(self, construct: str, missing: str, line: int | None = None):
        super().__init__(f"{construct}: {missing}", line)
        self.construct = construct
        self.missing = missing


class UnknownSymbolError(ParseError):
    """A set or binding key was referenced before being declared."""

    def __init__(self, kind: str, name: str, line: int | None = None):
        super().__init__(f"unknown {kind}: {name}", line)
        self.kind = kind
        self.name = name


class BindingInvariantError(AssertionError):
    """A binding table was materialized before every entry was concrete.

    This signals a defect in the loop expander, never bad input.
    """
