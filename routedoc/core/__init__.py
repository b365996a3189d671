"""
Routedoc — Routing Core
=========================

What:  Route declarations that both dispatch requests and describe themselves.

Layers (leaves first):
    types.py      TypeDescriptor and its factories
    docs.py       ParameterSpec, ResponseSpec, RouteDoc, annotations
    params.py     bind_param() and ParamKind
    route.py      Route nodes, sequence/alternate/annotate, path/method leaves
    aggregate.py  aggregate() → ApiDocument → OpenAPI dict/JSON
    dispatch.py   RequestContext and Dispatcher
    reply.py      Reply and handler return normalization
"""

from routedoc.core.aggregate import ApiDocument, aggregate
from routedoc.core.dispatch import Dispatcher, RequestContext
from routedoc.core.docs import (
    Location,
    ParameterSpec,
    ResponseSpec,
    RouteDoc,
    body,
    description,
    header,
    header_param,
    query,
    response,
    summary,
)
from routedoc.core.params import ParamKind, bind_param
from routedoc.core.reply import Reply
from routedoc.core.route import (
    Route,
    alternate,
    annotate,
    any_,
    delete,
    document,
    end,
    get,
    json_body,
    method,
    patch,
    path,
    post,
    put,
    sequence,
)
from routedoc.core.types import TypeDescriptor, array, boolean, integer, map_of, number, obj, string

__all__ = [
    "ApiDocument",
    "Dispatcher",
    "Location",
    "ParamKind",
    "ParameterSpec",
    "Reply",
    "RequestContext",
    "ResponseSpec",
    "Route",
    "RouteDoc",
    "TypeDescriptor",
    "aggregate",
    "alternate",
    "annotate",
    "any_",
    "array",
    "bind_param",
    "body",
    "boolean",
    "delete",
    "description",
    "document",
    "end",
    "get",
    "header",
    "header_param",
    "integer",
    "json_body",
    "map_of",
    "method",
    "number",
    "obj",
    "patch",
    "path",
    "post",
    "put",
    "query",
    "response",
    "sequence",
    "string",
    "summary",
]
