"""
Routedoc — Exception Hierarchy
================================

What:  Application-specific exceptions for routing, input and documentation errors.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by parameter binders, body extractors, the dispatcher and the
       documentation aggregator.

Exception Hierarchy:
    RouteDocError (base)
    ├── ClientInputError                 → 400 Bad Request
    │   ├── MalformedParameter           → token present but not parseable
    │   ├── MissingParameter             → required query/header value absent
    │   └── MalformedBody                → body is not valid JSON for the route
    ├── RouteNotFound                    → 404 Not Found (no branch matched)
    ├── MethodNotAllowed                 → 405 (path matched, method did not)
    └── AggregationInconsistencyError    → startup only, never served

Declining is not an exception. A route that does not apply returns None from
its evaluation so the enclosing alternation can try the next branch. Everything
raised from this module propagates past alternation to the top of dispatch.
"""

from typing import Any, Dict, Optional, Sequence


class RouteDocError(Exception):
    """
    Base exception for all routedoc errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (returned as "details" for client errors)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ClientInputError(RouteDocError):
    """
    The route was selected correctly but the request input is invalid.

    HTTP: 400 Bad Request. Never retried against a sibling route.
    """

    status_code = 400
    error_code = "bad_request"


class MalformedParameter(ClientInputError):
    """
    A parameter was present but could not be parsed as its declared kind.

    Example:
        GET /pet/abc against an integer `petId` binder.
    """

    error_code = "malformed_parameter"

    def __init__(
        self,
        name: str,
        location: str,
        raw: str,
        expected: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"parameter": name, "in": location, "value": raw, "expected": expected})
        super().__init__(
            message=f"Parameter '{name}' in {location} must be {expected}, got '{raw}'",
            context=ctx,
        )
        self.name = name
        self.location = location


class MissingParameter(ClientInputError):
    """A required query or header parameter was not supplied."""

    error_code = "missing_parameter"

    def __init__(
        self,
        name: str,
        location: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"parameter": name, "in": location})
        super().__init__(
            message=f"Missing required {location} parameter '{name}'",
            context=ctx,
        )
        self.name = name
        self.location = location


class MalformedBody(ClientInputError):
    """
    The request body failed structural decoding.

    When: Empty body, invalid JSON, or JSON that does not fit the route's model.
    """

    error_code = "malformed_body"

    def __init__(
        self,
        message: str = "Request body could not be decoded",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RouteNotFound(RouteDocError):
    """No route in the composed tree accepted the request path."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, method: str, path: str):
        super().__init__(
            message=f"No route matches {method} {path}",
            context={"method": method, "path": path},
        )


class MethodNotAllowed(RouteDocError):
    """The path is served by the tree, but not for this HTTP method."""

    status_code = 405
    error_code = "method_not_allowed"

    def __init__(self, method: str, path: str):
        super().__init__(
            message=f"Method {method} is not allowed for {path}",
            context={"method": method, "path": path},
        )


class AggregationInconsistencyError(RouteDocError):
    """
    Two declarations document the same key differently.

    When:  Startup, while aggregating the route tree. Either two routes share a
           (method, path) key with different documentation, or two schemas
           share a component name with different definitions.
    Fatal: The application refuses to start with an inconsistent document.
    """

    def __init__(self, key: Sequence[Any], reason: str):
        super().__init__(
            message=f"Conflicting documentation for {' '.join(str(k) for k in key)}: {reason}",
            context={"key": list(key)},
        )
        self.key = tuple(key)
