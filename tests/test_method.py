"""Tests for waymark.routing.method — Method enum and verb sets."""

import pytest

from waymark.routing.method import Method, accepts, as_verbs, verbs


class TestMethod:
    def test_verb(self) -> None:
        assert Method.GET.verb == "GET"
        assert Method.ALL.verb == "*"

    def test_is_str(self) -> None:
        assert Method.POST == "POST"

    @pytest.mark.parametrize("text", ["get", "GET", " Get "])
    def test_parse_any_case(self, text: str) -> None:
        assert Method.parse(text) is Method.GET

    def test_parse_wildcards(self) -> None:
        assert Method.parse("*") is Method.ALL
        assert Method.parse("all") is Method.ALL

    def test_parse_passthrough(self) -> None:
        assert Method.parse(Method.DELETE) is Method.DELETE

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown HTTP method: 'FETCH'"):
            Method.parse("FETCH")


class TestVerbs:
    def test_verbs(self) -> None:
        assert verbs(Method.GET, "post") == frozenset({Method.GET, Method.POST})

    def test_as_verbs_single(self) -> None:
        assert as_verbs("get") == frozenset({Method.GET})
        assert as_verbs(Method.PUT) == frozenset({Method.PUT})

    def test_as_verbs_iterable(self) -> None:
        assert as_verbs(["GET", Method.PATCH]) == frozenset({Method.GET, Method.PATCH})


class TestAccepts:
    def test_member(self) -> None:
        assert accepts(verbs("GET"), Method.GET)
        assert not accepts(verbs("GET"), Method.POST)

    def test_wildcard_route(self) -> None:
        assert accepts(verbs("*"), Method.DELETE)

    def test_wildcard_lookup(self) -> None:
        assert accepts(verbs("GET"), Method.ALL)
