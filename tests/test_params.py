"""
Routedoc — Parameter Binder Tests
===================================

What:  Path/query/header extraction, parse failures, missing values, and the
       ParameterSpec each binder documents under its given name.
"""

import pytest

from routedoc.core import Location, ParamKind, bind_param
from routedoc.exceptions import MalformedParameter, MissingParameter


class TestPathBinder:
    def test_parses_integer_segment(self, make_request):
        binder = bind_param("petId", "The id of the pet")
        matched = binder.evaluate(make_request("GET", "/42"), 0)
        assert matched.values == (42,)
        assert matched.cursor == 1

    def test_declines_without_segment(self, make_request):
        binder = bind_param("petId", "The id of the pet")
        assert binder.evaluate(make_request("GET", "/"), 0) is None

    def test_malformed_segment_raises(self, make_request):
        binder = bind_param("petId", "The id of the pet")
        with pytest.raises(MalformedParameter) as excinfo:
            binder.evaluate(make_request("GET", "/abc"), 0)
        assert excinfo.value.context["parameter"] == "petId"
        assert excinfo.value.status_code == 400

    @pytest.mark.parametrize("raw", ["1.5", " 3", "1_000", "+", "-"])
    def test_integer_rejects_loose_tokens(self, make_request, raw):
        binder = bind_param("n", "number")
        with pytest.raises(MalformedParameter):
            binder.evaluate(make_request("GET", f"/{raw}"), 0)

    def test_negative_integer(self, make_request):
        assert bind_param("n", "n").evaluate(make_request("GET", "/-3"), 0).values == (-3,)

    def test_string_kind_accepts_anything(self, make_request):
        binder = bind_param("username", "The name", kind=ParamKind.STRING)
        assert binder.evaluate(make_request("GET", "/alice"), 0).values == ("alice",)

    def test_boolean_kind(self, make_request):
        binder = bind_param("flag", "A flag", kind=ParamKind.BOOLEAN)
        assert binder.evaluate(make_request("GET", "/true"), 0).values == (True,)
        assert binder.evaluate(make_request("GET", "/0"), 0).values == (False,)
        with pytest.raises(MalformedParameter):
            binder.evaluate(make_request("GET", "/maybe"), 0)

    def test_documents_name_and_segment(self):
        binder = bind_param("petId", "The id of the pet")
        [doc] = binder.describe()
        assert doc.path_segments == ("{petId}",)
        spec = doc.parameters[0]
        assert (spec.name, spec.location, spec.required, spec.doc) == (
            "petId", Location.PATH, True, "The id of the pet",
        )
        assert spec.type.to_schema() == {"type": "integer"}

    def test_path_parameter_is_always_required(self):
        binder = bind_param("petId", "id", required=False)
        assert binder.describe()[0].parameters[0].required is True


class TestQueryBinder:
    def test_repeated_values(self, make_request):
        binder = bind_param("status", "Statuses", Location.QUERY, ParamKind.STRING, repeated=True)
        ctx = make_request("GET", "/", query=[("status", "sold"), ("status", "pending")])
        matched = binder.evaluate(ctx, 0)
        assert matched.values == (["sold", "pending"],)
        assert matched.cursor == 0

    def test_repeated_documents_array(self):
        binder = bind_param("status", "Statuses", Location.QUERY, ParamKind.STRING, repeated=True)
        assert binder.describe()[0].parameters[0].type.to_schema() == {
            "type": "array",
            "items": {"type": "string"},
        }

    def test_first_value_wins_when_not_repeated(self, make_request):
        binder = bind_param("limit", "Limit", Location.QUERY)
        ctx = make_request("GET", "/", query=[("limit", "5"), ("limit", "9")])
        assert binder.evaluate(ctx, 0).values == (5,)

    def test_missing_required_raises(self, make_request):
        binder = bind_param("username", "User", Location.QUERY, ParamKind.STRING)
        with pytest.raises(MissingParameter, match="username"):
            binder.evaluate(make_request("GET", "/"), 0)

    def test_missing_optional_is_none(self, make_request):
        binder = bind_param("limit", "Limit", Location.QUERY, required=False)
        assert binder.evaluate(make_request("GET", "/"), 0).values == (None,)

    def test_malformed_value_raises(self, make_request):
        binder = bind_param("limit", "Limit", Location.QUERY)
        with pytest.raises(MalformedParameter) as excinfo:
            binder.evaluate(make_request("GET", "/", query=[("limit", "abc")]), 0)
        assert excinfo.value.context == {
            "parameter": "limit", "in": "query", "value": "abc", "expected": "an integer",
        }

    def test_malformed_optional_value_still_raises(self, make_request):
        binder = bind_param("limit", "Limit", Location.QUERY, required=False)
        with pytest.raises(MalformedParameter):
            binder.evaluate(make_request("GET", "/", query=[("limit", "abc")]), 0)

    def test_one_bad_repeated_value_raises(self, make_request):
        binder = bind_param("ids", "Ids", Location.QUERY, repeated=True)
        ctx = make_request("GET", "/", query=[("ids", "1"), ("ids", "two"), ("ids", "3")])
        with pytest.raises(MalformedParameter) as excinfo:
            binder.evaluate(ctx, 0)
        assert excinfo.value.context["value"] == "two"

    def test_query_binder_contributes_no_path_segment(self):
        binder = bind_param("limit", "Limit", Location.QUERY)
        assert binder.describe()[0].path_segments == ()


class TestHeaderBinder:
    def test_lookup_is_case_insensitive(self, make_request):
        binder = bind_param("api_key", "Key", Location.HEADER, ParamKind.STRING)
        ctx = make_request("DELETE", "/", headers={"API_KEY": "secret"})
        assert binder.evaluate(ctx, 0).values == ("secret",)

    def test_missing_header_raises(self, make_request):
        binder = bind_param("api_key", "Key", Location.HEADER, ParamKind.STRING)
        with pytest.raises(MissingParameter) as excinfo:
            binder.evaluate(make_request("DELETE", "/"), 0)
        assert excinfo.value.location == "header"

    def test_malformed_header_raises(self, make_request):
        binder = bind_param("X-Limit", "Limit", Location.HEADER)
        with pytest.raises(MalformedParameter) as excinfo:
            binder.evaluate(make_request("GET", "/", headers={"X-Limit": "many"}), 0)
        assert excinfo.value.context["in"] == "header"


class TestStrictParsing:
    @pytest.mark.parametrize("raw", ["١٢", "１２", "--3", "3-"])
    def test_integer_is_ascii_only(self, make_request, raw):
        with pytest.raises(MalformedParameter):
            bind_param("n", "n").evaluate(make_request("GET", f"/{raw}"), 0)

    @pytest.mark.parametrize("raw, expected", [("1.5", 1.5), ("-2", -2.0), ("3e2", 300.0)])
    def test_number_accepts_decimal_forms(self, make_request, raw, expected):
        binder = bind_param("x", "x", kind=ParamKind.NUMBER)
        assert binder.evaluate(make_request("GET", f"/{raw}"), 0).values == (expected,)

    @pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity", "1_0.5", ".5", "١.٥"])
    def test_number_rejects_loose_tokens(self, make_request, raw):
        binder = bind_param("x", "x", kind=ParamKind.NUMBER)
        with pytest.raises(MalformedParameter):
            binder.evaluate(make_request("GET", f"/{raw}"), 0)

    def test_number_query_rejects_whitespace(self, make_request):
        binder = bind_param("x", "x", Location.QUERY, ParamKind.NUMBER)
        with pytest.raises(MalformedParameter):
            binder.evaluate(make_request("GET", "/", query=[("x", " 1.5 ")]), 0)
