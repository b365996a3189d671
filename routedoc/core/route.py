"""
Routedoc — Route Declarations and Combinators
===============================================

What:  Composable route values. Each one is a predicate/extractor over a
       request and, at the same time, a source of documentation fragments.
How:   Every node implements two methods:

           evaluate(ctx, cursor) -> Optional[Match]
               Match(values, cursor) on success, None to decline. Input errors
               are raised (see routedoc.exceptions) and are never treated as a
               decline.

           describe() -> List[RouteDoc]
               One RouteDoc per distinct operation reachable through the node.

Composition:
    a.and_(b)     / a & b     sequence: both match in order, values concatenate,
                              docs are merged pairwise (cartesian product)
    a.or_(b)      / a | b     alternation: left-biased first match, docs of both
                              branches are kept as separate entries
    a.document(x, ...)        annotate: edits the docs of `a`, never its matching
    a.map(handler)            terminal: calls handler(*values) once the whole
                              path has been consumed

Example:
    get_pet = (
        get()
        .and_(bind_param("petId", "The id of the pet"))
        .document(description("Returns a single pet object"))
        .map(lambda pet_id: Pet(id=pet_id))
    )

Nodes hold no per-request state. A tree is built once and can then be
evaluated by any number of concurrent requests.
"""

import logging
from typing import Any, Callable, Iterable, List, NamedTuple, Optional

from pydantic import TypeAdapter, ValidationError

from routedoc.core.docs import Annotation, BodySpec, RouteDoc, apply_annotation
from routedoc.core.types import TypeDescriptor
from routedoc.exceptions import MalformedBody

logger = logging.getLogger(__name__)


class Match(NamedTuple):
    values: tuple
    cursor: int


class Route:
    """Base class for every route node."""

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        raise NotImplementedError

    def describe(self) -> List[RouteDoc]:
        raise NotImplementedError

    # ── Combinators ───────────────────────────────────────────────────────

    def and_(self, other: "Route") -> "Route":
        return sequence(self, other)

    def or_(self, other: "Route") -> "Route":
        return alternate(self, other)

    def document(self, *annotations: Annotation) -> "Route":
        return annotate(self, *annotations)

    def map(self, handler: Callable[..., Any]) -> "Route":
        return Handler(self, handler)

    __and__ = and_
    __or__ = or_


# ══════════════════════════════════════════════════════════════════════════
# Combinators
# ══════════════════════════════════════════════════════════════════════════

class Sequence(Route):
    def __init__(self, first: Route, second: Route):
        self.first = first
        self.second = second

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        left = self.first.evaluate(ctx, cursor)
        if left is None:
            return None
        right = self.second.evaluate(ctx, left.cursor)
        if right is None:
            return None
        return Match(left.values + right.values, right.cursor)

    def describe(self) -> List[RouteDoc]:
        seconds = self.second.describe()
        return [first.merge(second) for first in self.first.describe() for second in seconds]

    def __repr__(self) -> str:
        return f"({self.first!r} & {self.second!r})"


class Alternate(Route):
    def __init__(self, first: Route, second: Route):
        self.first = first
        self.second = second

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        matched = self.first.evaluate(ctx, cursor)
        if matched is not None:
            return matched
        return self.second.evaluate(ctx, cursor)

    def describe(self) -> List[RouteDoc]:
        return self.first.describe() + self.second.describe()

    def __repr__(self) -> str:
        return f"({self.first!r} | {self.second!r})"


class Annotated(Route):
    def __init__(self, route: Route, annotations: Iterable[Annotation]):
        self.route = route
        self.annotations = tuple(annotations)

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        return self.route.evaluate(ctx, cursor)

    def describe(self) -> List[RouteDoc]:
        docs = []
        for doc in self.route.describe():
            for annotation in self.annotations:
                doc = apply_annotation(annotation, doc)
            docs.append(doc)
        return docs

    def __repr__(self) -> str:
        return f"{self.route!r}.document(...)"


class Handler(Route):
    """
    Terminal node: runs the handler once the route has consumed the whole path.

    The number of segments each branch consumes is known from its docs, so a
    request with the wrong number of remaining segments is declined before any
    binder runs. A longer unknown path is then a 404, not a binder's 400.
    """

    def __init__(self, route: Route, handler: Callable[..., Any]):
        self.route = route
        self.handler = handler
        self.lengths = frozenset(len(doc.path_segments) for doc in route.describe())

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        if len(ctx.segments) - cursor not in self.lengths:
            return None
        matched = self.route.evaluate(ctx, cursor)
        if matched is None or matched.cursor != len(ctx.segments):
            return None
        if ctx.probe:
            return Match((None,), matched.cursor)
        return Match((self.handler(*matched.values),), matched.cursor)

    def describe(self) -> List[RouteDoc]:
        return self.route.describe()

    def __repr__(self) -> str:
        return f"{self.route!r}.map({getattr(self.handler, '__name__', 'handler')})"


def sequence(first: Route, second: Route) -> Route:
    return Sequence(first, second)


def alternate(first: Route, second: Route) -> Route:
    return Alternate(first, second)


def annotate(route: Route, *annotations: Annotation) -> Route:
    return Annotated(route, annotations)


# ══════════════════════════════════════════════════════════════════════════
# Leaves
# ══════════════════════════════════════════════════════════════════════════

class Literal(Route):
    def __init__(self, segment: str):
        self.segment = segment

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        if cursor < len(ctx.segments) and ctx.segments[cursor] == self.segment:
            return Match((), cursor + 1)
        return None

    def describe(self) -> List[RouteDoc]:
        return [RouteDoc(path_segments=(self.segment,))]

    def __repr__(self) -> str:
        return f"path({self.segment!r})"


class Method(Route):
    def __init__(self, name: str):
        self.name = name.upper()

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        # Probe passes ignore methods to tell 405 apart from 404
        if ctx.probe or ctx.method == self.name:
            return Match((), cursor)
        # HEAD is served by the GET route; the server drops the body
        if ctx.method == "HEAD" and self.name == "GET":
            return Match((), cursor)
        return None

    def describe(self) -> List[RouteDoc]:
        return [RouteDoc(method=self.name)]

    def __repr__(self) -> str:
        return f"method({self.name!r})"


class End(Route):
    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        return Match((), cursor) if cursor == len(ctx.segments) else None

    def describe(self) -> List[RouteDoc]:
        return [RouteDoc()]

    def __repr__(self) -> str:
        return "end()"


class Any_(Route):
    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        return Match((), cursor)

    def describe(self) -> List[RouteDoc]:
        return [RouteDoc()]

    def __repr__(self) -> str:
        return "any_()"


class JsonBody(Route):
    """
    Decode the request body as JSON, optionally validated into `model`.

    `model` is anything pydantic's TypeAdapter accepts (a BaseModel subclass,
    List[User], ...). Decoding failures raise MalformedBody.
    """

    def __init__(self, descriptor: TypeDescriptor, model: Any = None, media_type: str = "application/json"):
        self.spec = BodySpec(descriptor, media_type)
        self.adapter = TypeAdapter(model if model is not None else Any)

    def evaluate(self, ctx, cursor: int) -> Optional[Match]:
        if ctx.probe:
            return Match((None,), cursor)
        if not ctx.body:
            raise MalformedBody("Request body is empty")
        try:
            value = self.adapter.validate_json(ctx.body)
        except ValidationError as exc:
            problems = [
                f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
                for error in exc.errors()
            ]
            logger.debug("Rejected body: %s", problems)
            raise MalformedBody(
                "Request body does not match the expected shape",
                context={"errors": problems},
            ) from None
        return Match((value,), cursor)

    def describe(self) -> List[RouteDoc]:
        return [RouteDoc(request_body=self.spec)]

    def __repr__(self) -> str:
        return "json_body()"


def path(literal: str) -> Route:
    """Match one or more literal segments ("store/order" is two segments)."""
    parts = [part for part in literal.strip("/").split("/") if part]
    route: Route = Literal(parts[0])
    for part in parts[1:]:
        route = Sequence(route, Literal(part))
    return route


def method(name: str) -> Route:
    return Method(name)


def get() -> Route:
    return Method("GET")


def post() -> Route:
    return Method("POST")


def put() -> Route:
    return Method("PUT")


def delete() -> Route:
    return Method("DELETE")


def patch() -> Route:
    return Method("PATCH")


def end() -> Route:
    return End()


def any_() -> Route:
    return Any_()


def json_body(descriptor: TypeDescriptor, model: Any = None) -> Route:
    return JsonBody(descriptor, model)


def document(*annotations: Annotation) -> Route:
    """An always-matching leaf that only contributes documentation."""
    return Annotated(Any_(), annotations)
