"""
Routedoc — Documentation Aggregator
=====================================

What:  Collects the documentation of a whole route tree into one ApiDocument
       and renders it as an OpenAPI 3.0 document.
How:   `aggregate()` calls `describe()` on the root once. Each RouteDoc it
       yields is keyed by (method, path pattern):
           - first occurrence of a key          → kept, in declaration order
           - identical repeat of a key          → dropped
           - different documentation, same key  → AggregationInconsistencyError
       Named schemas are collected under components.schemas while rendering;
       two different definitions under one name are also an inconsistency.
When:  Once at startup. The result is immutable and rendering is pure, so the
       same tree always yields byte-identical JSON.
"""

import json
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Tuple

from routedoc.core.docs import ParameterSpec, ResponseSpec, RouteDoc
from routedoc.core.route import Route
from routedoc.exceptions import AggregationInconsistencyError

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"


@dataclass(frozen=True)
class ApiDocument:
    title: str
    version: str
    routes: Tuple[RouteDoc, ...]
    description: Optional[str] = None

    @property
    def keys(self) -> List[Tuple[str, str]]:
        return [route.key for route in self.routes]

    def find(self, method: str, path: str) -> Optional[RouteDoc]:
        for route in self.routes:
            if route.key == (method.upper(), path):
                return route
        return None

    def to_openapi(self) -> Dict[str, Any]:
        """Render a fresh OpenAPI dict; callers may mutate the result."""
        components: Dict[str, Dict[str, Any]] = {}
        paths: Dict[str, Dict[str, Any]] = {}
        for route in self.routes:
            method, path = route.key
            paths.setdefault(path, {})[method.lower()] = _render_operation(route, components)

        info: Dict[str, Any] = {"title": self.title, "version": self.version}
        if self.description:
            info["description"] = self.description

        spec: Dict[str, Any] = {"openapi": OPENAPI_VERSION, "info": info, "paths": paths}
        if components:
            spec["components"] = {"schemas": components}
        return spec

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_openapi(), indent=indent, ensure_ascii=False)


def aggregate(
    root: Route,
    title: str = "API",
    version: str = "1.0.0",
    description: Optional[str] = None,
) -> ApiDocument:
    """
    Build the ApiDocument for `root`.

    Raises:
        AggregationInconsistencyError: two routes document the same key
            differently, or a schema name is reused for a different shape.
    """
    entries: Dict[Tuple[str, str], RouteDoc] = {}
    for route in root.describe():
        existing = entries.get(route.key)
        if existing is None:
            entries[route.key] = route
        elif existing != route:
            raise AggregationInconsistencyError(route.key, "declared twice with different documentation")

    document = ApiDocument(
        title=title,
        version=version,
        routes=tuple(entries.values()),
        description=description,
    )
    # Render once so schema conflicts surface now rather than on first request
    rendered = document.to_openapi()
    logger.info(
        "Aggregated %d operations over %d paths (%d component schemas)",
        len(document.routes),
        len(rendered["paths"]),
        len(rendered.get("components", {}).get("schemas", {})),
    )
    return document


# ══════════════════════════════════════════════════════════════════════════
# Rendering
# ══════════════════════════════════════════════════════════════════════════

def _render_operation(route: RouteDoc, components: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    operation: Dict[str, Any] = {}
    if route.summary:
        operation["summary"] = route.summary
    if route.description:
        operation["description"] = route.description
    if route.parameters:
        operation["parameters"] = [_render_parameter(p, components) for p in route.parameters]
    if route.request_body is not None:
        operation["requestBody"] = {
            "required": True,
            "content": {
                route.request_body.media_type: {"schema": route.request_body.type.to_schema(components)},
            },
        }
    operation["responses"] = {
        str(response.status_code): _render_response(response, components)
        for response in route.responses
    }
    return operation


def _render_parameter(parameter: ParameterSpec, components: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    rendered: Dict[str, Any] = {
        "name": parameter.name,
        "in": parameter.location.value,
        "required": parameter.required,
        "schema": parameter.type.to_schema(components),
    }
    if parameter.doc:
        rendered["description"] = parameter.doc
    return rendered


def _render_response(response: ResponseSpec, components: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    rendered: Dict[str, Any] = {"description": response.doc or _status_phrase(response.status_code)}
    if response.headers:
        rendered["headers"] = {
            header.name: {"description": header.doc or "", "schema": {"type": "string"}}
            for header in response.headers
        }
    if response.body is not None:
        rendered["content"] = {response.media_type: {"schema": response.body.to_schema(components)}}
    return rendered


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""
