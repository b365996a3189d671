"""
Routedoc — Parameter Binders
==============================

What:  Extract one typed value from a path segment, the query string or a
       header, and document it under the caller's name.
How:   `bind_param()` returns a Route whose evaluation parses the raw token and
       whose documentation is a single ParameterSpec (plus a `{name}` path
       segment for path parameters).

Supported kinds are a closed enumeration (ParamKind). Each member carries its
parser and its TypeDescriptor, so the documented schema is fixed when the route
is declared.

Outcome rules:
    path    no segment left              → decline (route does not apply)
            segment fails to parse       → MalformedParameter
    query   absent and required          → MissingParameter
    and     absent and optional          → None ([] when repeated)
    header  any value fails to parse     → MalformedParameter
"""

import re
from enum import Enum
from typing import Any, Callable, Optional

from routedoc.core.docs import Location, ParameterSpec, RouteDoc
from routedoc.core.route import Match, Route
from routedoc.core.types import TypeDescriptor, array, boolean, integer, number, string
from routedoc.exceptions import MalformedParameter, MissingParameter

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(raw)


# ASCII digits only: int() and float() also take whitespace, underscores,
# non-ASCII digits and "nan"/"inf"
_INTEGER = re.compile(r"-?[0-9]+")
_NUMBER = re.compile(r"-?[0-9]+(\.[0-9]+)?([eE][-+]?[0-9]+)?")


def _parse_int(raw: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise ValueError(raw)
    return int(raw)


def _parse_number(raw: str) -> float:
    if not _NUMBER.fullmatch(raw):
        raise ValueError(raw)
    return float(raw)


class ParamKind(Enum):
    """Primitive types a binder can parse, with their documented schema."""

    INTEGER = ("an integer", _parse_int, integer)
    NUMBER = ("a number", _parse_number, number)
    STRING = ("a string", str, string)
    BOOLEAN = ("a boolean", _parse_bool, boolean)

    def __init__(self, label: str, parser: Callable[[str], Any], factory: Callable[[], TypeDescriptor]):
        self.label = label
        self.parser = parser
        self.factory = factory

    def parse(self, raw: str) -> Any:
        return self.parser(raw)

    @property
    def descriptor(self) -> TypeDescriptor:
        return self.factory()


class ParamBinder(Route):
    """A leaf route that extracts exactly one value."""

    def __init__(
        self,
        name: str,
        doc: str,
        location: Location,
        kind: ParamKind,
        required: bool,
        repeated: bool,
    ):
        self.name = name
        self.location = location
        self.kind = kind
        self.repeated = repeated
        # Path parameters are always required; absence means the route does not apply
        self.required = required or location is Location.PATH
        schema = array(kind.descriptor) if repeated else kind.descriptor
        self.spec = ParameterSpec(
            name=name,
            location=location,
            type=schema,
            required=self.required,
            doc=doc,
        )

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        if self.location is Location.PATH:
            if cursor >= len(ctx.segments):
                return None
            return Match((self._parse(ctx.segments[cursor]),), cursor + 1)

        if self.location is Location.QUERY:
            raw_values = list(ctx.query.get(self.name, ()))
        else:
            value = ctx.headers.get(self.name.lower())
            raw_values = [] if value is None else [value]

        if not raw_values:
            if self.required:
                raise MissingParameter(self.name, self.location.value)
            return Match(([] if self.repeated else None,), cursor)

        if self.repeated:
            return Match(([self._parse(raw) for raw in raw_values],), cursor)
        return Match((self._parse(raw_values[0]),), cursor)

    def _parse(self, raw: str) -> Any:
        try:
            return self.kind.parse(raw)
        except ValueError:
            raise MalformedParameter(self.name, self.location.value, raw, self.kind.label) from None

    def describe(self):
        segments = ("{%s}" % self.name,) if self.location is Location.PATH else ()
        return [RouteDoc(path_segments=segments, parameters=(self.spec,))]

    def __repr__(self) -> str:
        return f"bind_param({self.name!r}, {self.location.value}, {self.kind.name})"


def bind_param(
    name: str,
    description: str,
    location: Location = Location.PATH,
    kind: ParamKind = ParamKind.INTEGER,
    required: bool = True,
    repeated: bool = False,
) -> Route:
    """
    Bind a named parameter.

    Args:
        name:         Parameter name, used for lookup and in the document.
        description:  Human description rendered next to the parameter.
        location:     PATH (next segment), QUERY or HEADER.
        kind:         How the raw token is parsed and documented.
        required:     Query/header only; path parameters are always required.
        repeated:     Query only; collect every occurrence into a list.
    """
    return ParamBinder(name, description, location, kind, required, repeated)
