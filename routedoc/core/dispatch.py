"""
Routedoc — Dispatch Engine
============================

What:  Evaluates the composed route tree against one request.
How:   The tree is walked once from the root. Alternations try branches left
       to right, sequences stop at the first decline, and the terminal handler
       runs on a full match.

Outcomes:
    full match                      → the handler's Reply
    no match, path known to tree    → MethodNotAllowed (405)
    no match at all                 → RouteNotFound (404)
    MalformedParameter / MissingParameter / MalformedBody
                                    → propagated as raised, no sibling is tried

405 versus 404 is decided by a second "probe" pass in which method filters
always match and handlers, bodies and parameter errors are not evaluated for
their result.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Mapping, Tuple

from routedoc.core.reply import Reply, to_reply
from routedoc.core.route import Route
from routedoc.exceptions import ClientInputError, MethodNotAllowed, RouteNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request input to route evaluation.

    Attributes:
        method:    Upper-case HTTP method.
        segments:  Decoded, non-empty path segments ("/pet/42" → ("pet", "42")).
        query:     Query parameter name → every value supplied, in order.
        headers:   Lower-cased header name → value.
        body:      Raw request body, already read by the transport.
        probe:     True only during the method-insensitive 405 probe.
    """

    method: str
    segments: Tuple[str, ...]
    query: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    probe: bool = False

    @property
    def path(self) -> str:
        return "/" + "/".join(self.segments)

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query: Iterable[Tuple[str, str]] = (),
        headers: Iterable[Tuple[str, str]] = (),
        body: bytes = b"",
    ) -> "RequestContext":
        grouped: Dict[str, Tuple[str, ...]] = {}
        for name, value in query:
            grouped[name] = grouped.get(name, ()) + (value,)
        return cls(
            method=method.upper(),
            segments=tuple(segment for segment in path.split("/") if segment),
            query=grouped,
            headers={name.lower(): value for name, value in headers},
            body=body,
        )


class Dispatcher:
    """
    Stateless request dispatcher over one immutable route tree.

    A single instance is created at startup and shared by every request.
    """

    def __init__(self, root: Route):
        self.root = root

    def dispatch(self, ctx: RequestContext) -> Reply:
        matched = self.root.evaluate(ctx, 0)
        if matched is not None:
            if len(matched.values) != 1:
                raise TypeError(
                    f"Route tree produced {len(matched.values)} values for {ctx.method} {ctx.path}; "
                    "every branch must end in .map(handler)"
                )
            return to_reply(matched.values[0])

        if self._matches_ignoring_method(ctx):
            logger.debug("Method %s not allowed for %s", ctx.method, ctx.path)
            raise MethodNotAllowed(ctx.method, ctx.path)
        logger.debug("No route for %s %s", ctx.method, ctx.path)
        raise RouteNotFound(ctx.method, ctx.path)

    def _matches_ignoring_method(self, ctx: RequestContext) -> bool:
        try:
            return self.root.evaluate(replace(ctx, probe=True), 0) is not None
        except ClientInputError:
            # The request reached a binder, so some route accepts this path
            return True
