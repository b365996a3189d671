"""
Routedoc — Route Documentation Values
=======================================

What:  The documentation fragments a route accumulates while it is composed:
       ParameterSpec, ResponseSpec, RouteDoc, and the annotation helpers that
       edit a RouteDoc (description, summary, response, query, header, body).
How:   Everything here is a frozen dataclass. Editing a RouteDoc returns a new
       RouteDoc; nothing is mutated after construction, so a finished tree can
       be shared by every request without locking.

Merge rules (used by sequencing, see RouteDoc.merge):
    method, summary, description, request_body  → last non-empty value wins
    parameters                                  → unique by (name, location), last wins
    responses                                   → unique by status code; later body and
                                                  description override, headers append
    path_segments                               → concatenated
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from routedoc.core.types import TypeDescriptor


class Location(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    location: Location
    type: TypeDescriptor
    required: bool = True
    doc: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return self.name, self.location.value

    def description(self, text: str) -> "ParameterSpec":
        return replace(self, doc=text)

    def optional(self) -> "ParameterSpec":
        return replace(self, required=False)

    def apply(self, doc: "RouteDoc") -> "RouteDoc":
        return doc.with_parameter(self)


@dataclass(frozen=True)
class HeaderSpec:
    name: str
    doc: Optional[str] = None

    def description(self, text: str) -> "HeaderSpec":
        return replace(self, doc=text)


@dataclass(frozen=True)
class ResponseSpec:
    """One documented outcome of a route; a route may declare several."""

    status_code: int
    body: Optional[TypeDescriptor] = None
    headers: Tuple[HeaderSpec, ...] = ()
    doc: Optional[str] = None
    media_type: str = "application/json"

    def description(self, text: str) -> "ResponseSpec":
        return replace(self, doc=text)

    def header(self, header: HeaderSpec) -> "ResponseSpec":
        return replace(self, headers=self.headers + (header,))

    def mime(self, media_type: str) -> "ResponseSpec":
        return replace(self, media_type=media_type)

    def merge(self, later: "ResponseSpec") -> "ResponseSpec":
        """Combine two specs for the same status; `later` wins on conflicts."""
        return ResponseSpec(
            status_code=self.status_code,
            body=later.body if later.body is not None else self.body,
            headers=self.headers + tuple(h for h in later.headers if h not in self.headers),
            doc=later.doc if later.doc is not None else self.doc,
            media_type=later.media_type if later.body is not None else self.media_type,
        )

    def apply(self, doc: "RouteDoc") -> "RouteDoc":
        return doc.with_response(self)


@dataclass(frozen=True)
class BodySpec:
    type: TypeDescriptor
    media_type: str = "application/json"

    def mime(self, media_type: str) -> "BodySpec":
        return replace(self, media_type=media_type)

    def apply(self, doc: "RouteDoc") -> "RouteDoc":
        return replace(doc, request_body=self)


@dataclass(frozen=True)
class RouteDoc:
    """Documentation for one (method, path) operation, built up by composition."""

    method: Optional[str] = None
    path_segments: Tuple[str, ...] = ()
    parameters: Tuple[ParameterSpec, ...] = ()
    request_body: Optional[BodySpec] = None
    responses: Tuple[ResponseSpec, ...] = ()
    summary: Optional[str] = None
    description: Optional[str] = None

    @property
    def path(self) -> str:
        return "/" + "/".join(self.path_segments)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.method or "GET"), self.path

    def with_parameter(self, spec: ParameterSpec) -> "RouteDoc":
        kept = tuple(p for p in self.parameters if p.key != spec.key)
        return replace(self, parameters=kept + (spec,))

    def with_response(self, spec: ResponseSpec) -> "RouteDoc":
        responses = list(self.responses)
        for i, existing in enumerate(responses):
            if existing.status_code == spec.status_code:
                responses[i] = existing.merge(spec)
                break
        else:
            responses.append(spec)
        return replace(self, responses=tuple(responses))

    def merge(self, later: "RouteDoc") -> "RouteDoc":
        """Sequence two fragments: `self` was declared first."""
        merged = RouteDoc(
            method=later.method or self.method,
            path_segments=self.path_segments + later.path_segments,
            parameters=self.parameters,
            request_body=later.request_body or self.request_body,
            responses=self.responses,
            summary=later.summary or self.summary,
            description=later.description or self.description,
        )
        for parameter in later.parameters:
            merged = merged.with_parameter(parameter)
        for response in later.responses:
            merged = merged.with_response(response)
        return merged


# ══════════════════════════════════════════════════════════════════════════
# Annotations
# ══════════════════════════════════════════════════════════════════════════
# An annotation is anything with `apply(RouteDoc) -> RouteDoc`, or a plain
# callable with the same signature.

Annotation = Union[ParameterSpec, ResponseSpec, BodySpec, "Describe", Callable[[RouteDoc], RouteDoc]]


@dataclass(frozen=True)
class Describe:
    text: str
    field_name: str = "description"

    def apply(self, doc: RouteDoc) -> RouteDoc:
        return replace(doc, **{self.field_name: self.text})


def apply_annotation(annotation: Annotation, doc: RouteDoc) -> RouteDoc:
    if hasattr(annotation, "apply"):
        return annotation.apply(doc)
    return annotation(doc)


def description(text: str) -> Describe:
    return Describe(text)


def summary(text: str) -> Describe:
    return Describe(text, field_name="summary")


def response(status_code: int, body: Optional[TypeDescriptor] = None) -> ResponseSpec:
    return ResponseSpec(status_code=status_code, body=body)


def header(name: str) -> HeaderSpec:
    return HeaderSpec(name)


def body(type_: TypeDescriptor) -> BodySpec:
    return BodySpec(type_)


def query(name: str, type_: TypeDescriptor) -> ParameterSpec:
    return ParameterSpec(name=name, location=Location.QUERY, type=type_, required=False)


def header_param(name: str, type_: TypeDescriptor) -> ParameterSpec:
    return ParameterSpec(name=name, location=Location.HEADER, type=type_)
