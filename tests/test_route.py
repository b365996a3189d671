"""
Routedoc — Combinator Tests
=============================

What:  Sequencing, alternation, annotation and terminal handlers, both for
       matching and for the documentation they produce.

What we test:
    ✅ sequence concatenates values and declines if either side declines
    ✅ alternation is left-biased and keeps both branches' docs
    ✅ input errors propagate through alternation instead of trying siblings
    ✅ annotation never changes matching
    ✅ handlers only run once the whole path is consumed
"""

from typing import List

import pytest
from pydantic import BaseModel

from routedoc.core import (
    Location,
    ParamKind,
    bind_param,
    description,
    document,
    end,
    get,
    json_body,
    path,
    post,
    response,
)
from routedoc.core.types import integer, obj
from routedoc.exceptions import MalformedBody, MalformedParameter


class Item(BaseModel):
    id: int


class TestSequence:
    def test_values_concatenate(self, make_request):
        route = path("a").and_(bind_param("x", "x")).and_(bind_param("y", "y"))
        matched = route.evaluate(make_request("GET", "/a/1/2"), 0)
        assert matched.values == (1, 2)
        assert matched.cursor == 3

    def test_declines_if_either_side_declines(self, make_request):
        route = path("a").and_(path("b"))
        assert route.evaluate(make_request("GET", "/a/c"), 0) is None
        assert route.evaluate(make_request("GET", "/c/b"), 0) is None

    def test_operator_form(self, make_request):
        route = get() & path("a")
        assert route.evaluate(make_request("GET", "/a"), 0) is not None

    def test_multi_segment_literal(self, make_request):
        route = path("store/order")
        assert route.evaluate(make_request("GET", "/store/order"), 0).cursor == 2
        assert [d.path for d in route.describe()] == ["/store/order"]

    def test_docs_merge(self):
        route = get().and_(path("pet")).and_(bind_param("petId", "The id"))
        [doc] = route.describe()
        assert doc.key == ("GET", "/pet/{petId}")
        assert [p.name for p in doc.parameters] == ["petId"]


class TestAlternate:
    def test_left_bias(self, make_request):
        route = (
            path("a").map(lambda: "left")
            .or_(path("a").map(lambda: "right"))
        )
        assert route.evaluate(make_request("GET", "/a"), 0).values == ("left",)

    def test_falls_through_on_decline(self, make_request):
        route = path("a").map(lambda: "a") | path("b").map(lambda: "b")
        assert route.evaluate(make_request("GET", "/b"), 0).values == ("b",)
        assert route.evaluate(make_request("GET", "/c"), 0) is None

    def test_alternation_restarts_at_same_cursor(self, make_request):
        route = path("x").and_(path("a").and_(path("b")).or_(path("a").and_(path("c"))))
        assert route.evaluate(make_request("GET", "/x/a/c"), 0).cursor == 3

    def test_keeps_both_branches_docs(self):
        route = path("user").and_(
            path("createWithArray").or_(path("createWithList")).and_(post()).map(lambda: "ok")
        )
        assert [doc.key for doc in route.describe()] == [
            ("POST", "/user/createWithArray"),
            ("POST", "/user/createWithList"),
        ]

    def test_malformed_parameter_is_not_a_decline(self, make_request):
        called = []
        route = (
            bind_param("id", "id").map(lambda value: called.append("int") or value)
            .or_(bind_param("name", "name", kind=ParamKind.STRING).map(lambda value: called.append("str") or value))
        )
        with pytest.raises(MalformedParameter):
            route.evaluate(make_request("GET", "/abc"), 0)
        assert called == []

    def test_malformed_body_propagates(self, make_request):
        route = (
            post().and_(json_body(obj({"id": integer()}), Item)).map(lambda item: item)
            .or_(post().map(lambda: "fallback"))
        )
        with pytest.raises(MalformedBody):
            route.evaluate(make_request("POST", "/", body=b"{not json"), 0)


class TestAnnotate:
    def test_annotation_does_not_affect_matching(self, make_request):
        plain = path("a").map(lambda: "ok")
        annotated = path("a").document(description("A"), response(200)).map(lambda: "ok")
        for target in ("/a", "/b"):
            ctx = make_request("GET", target)
            assert plain.evaluate(ctx, 0) == annotated.evaluate(ctx, 0)

    def test_annotations_apply_in_declaration_order(self):
        route = path("a").document(description("first"), description("second"))
        assert route.describe()[0].description == "second"

    def test_later_annotation_in_sequence_wins(self):
        route = (
            path("a").document(response(404).description("early"))
            .and_(document(response(404).description("late")))
        )
        [doc] = route.describe()
        assert [(r.status_code, r.doc) for r in doc.responses] == [(404, "late")]

    def test_annotation_reaches_every_branch(self):
        route = (path("a").or_(path("b"))).document(description("shared"))
        assert [d.description for d in route.describe()] == ["shared", "shared"]


class TestHandler:
    def test_requires_full_path(self, make_request):
        route = path("a").map(lambda: "ok")
        assert route.evaluate(make_request("GET", "/a/extra"), 0) is None

    def test_wrong_length_declines_before_binders_run(self, make_request):
        route = (
            path("a")
            .and_(bind_param("q", "q", Location.QUERY))
            .map(lambda q: q)
        )
        assert route.evaluate(make_request("GET", "/a/extra"), 0) is None
        with pytest.raises(MalformedParameter):
            route.evaluate(make_request("GET", "/a", query=[("q", "x")]), 0)

    def test_handler_only_sees_the_left_match(self, make_request):
        route = (path("a").or_(path("a/b"))).map(lambda: "ok")
        assert route.evaluate(make_request("GET", "/a/b"), 0) is None
        route = (path("a/b").or_(path("a"))).map(lambda: "ok")
        assert route.evaluate(make_request("GET", "/a/b"), 0).values == ("ok",)

    def test_head_matches_get(self, make_request):
        assert get().evaluate(make_request("HEAD", "/"), 0) is not None
        assert post().evaluate(make_request("HEAD", "/"), 0) is None

    def test_end_filter(self, make_request):
        assert end().evaluate(make_request("GET", "/"), 0) is not None
        assert end().evaluate(make_request("GET", "/a"), 0) is None

    def test_body_decoded_into_model(self, make_request):
        route = post().and_(json_body(obj({"id": integer()}), List[Item])).map(len)
        matched = route.evaluate(make_request("POST", "/", json_body=[{"id": 1}, {"id": 2}]), 0)
        assert matched.values == (2,)

    def test_empty_body_is_malformed(self, make_request):
        route = post().and_(json_body(obj({"id": integer()}), Item)).map(lambda item: item)
        with pytest.raises(MalformedBody, match="empty"):
            route.evaluate(make_request("POST", "/"), 0)

    def test_shape_mismatch_lists_errors(self, make_request):
        route = post().and_(json_body(obj({"id": integer()}), Item)).map(lambda item: item)
        with pytest.raises(MalformedBody) as excinfo:
            route.evaluate(make_request("POST", "/", json_body={"id": "not a number"}), 0)
        assert excinfo.value.context["errors"][0].startswith("id:")

    def test_header_binder_order(self, make_request):
        route = (
            path("a")
            .and_(bind_param("api_key", "key", Location.HEADER, ParamKind.STRING))
            .map(lambda key: key)
        )
        assert route.evaluate(make_request("GET", "/a", headers={"api_key": "k"}), 0).values == ("k",)
