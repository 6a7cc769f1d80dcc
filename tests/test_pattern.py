"""Tests for perch.routing.pattern — template compilation and splitting."""

import pytest

from perch.errors import ConfigurationError
from perch.routing.pattern import (
    Segment,
    SegmentKind,
    compile_host,
    compile_path,
    join_path,
    split_host,
    split_path,
)


class TestCompilePath:
    def test_root(self) -> None:
        pattern = compile_path("/")
        assert pattern.segments == ()
        assert pattern.trailing_slash is False

    def test_literals(self) -> None:
        pattern = compile_path("/api/v2/users")
        assert [s.value for s in pattern.segments] == ["api", "v2", "users"]
        assert all(s.kind is SegmentKind.LITERAL for s in pattern.segments)

    def test_capture(self) -> None:
        pattern = compile_path("/e/<x>")
        assert pattern.segments[1] == Segment(SegmentKind.CAPTURE, "x")
        assert pattern.capture_names == ("x",)

    def test_trailing_slash(self) -> None:
        pattern = compile_path("/f/<x>/<y>/")
        assert pattern.trailing_slash is True
        assert pattern.capture_names == ("x", "y")

    def test_wildcard(self) -> None:
        pattern = compile_path("/static/*")
        assert pattern.is_wildcard
        assert pattern.segments[-1].kind is SegmentKind.WILDCARD

    def test_str_round_trips_segments(self) -> None:
        pattern = compile_path("/a/<b>/*")
        assert "/".join(str(s) for s in pattern.segments) == "a/<b>/*"

    def test_bind_pairs_names_with_values(self) -> None:
        pattern = compile_path("/f/<x>/<y>/")
        assert pattern.bind(["foo", "bar"]) == {"x": "foo", "y": "bar"}

    def test_bind_duplicate_name_last_wins(self) -> None:
        pattern = compile_path("/<x>/<x>")
        assert pattern.bind(["first", "second"]) == {"x": "second"}

    @pytest.mark.parametrize(
        "template",
        [
            "users",
            "/a//b",
            "/files/*/more",
            "/files/*/",
            "/<1abc>",
            "/<>",
            "/a<b>",
            "/x*",
        ],
    )
    def test_rejects_malformed(self, template: str) -> None:
        with pytest.raises(ConfigurationError):
            compile_path(template)

    def test_rejects_brace_param_with_hint(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            compile_path("/share/{slug}")
        assert "<slug>" in str(exc_info.value)


class TestCompileHost:
    def test_labels_reversed(self) -> None:
        pattern = compile_host("www.example.com")
        assert [s.value for s in pattern.segments] == ["com", "example", "www"]

    def test_capture_label(self) -> None:
        pattern = compile_host("<x>.example.com")
        assert pattern.segments[-1] == Segment(SegmentKind.CAPTURE, "x")

    def test_literals_lowercased(self) -> None:
        pattern = compile_host("WWW.Example.COM")
        assert [s.value for s in pattern.segments] == ["com", "example", "www"]

    def test_leading_wildcard(self) -> None:
        assert compile_host("*.example.com").is_wildcard

    @pytest.mark.parametrize("template", ["", "example..com", "www.*.com", " example.com"])
    def test_rejects_malformed(self, template: str) -> None:
        with pytest.raises(ConfigurationError):
            compile_host(template)


class TestSplitPath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/", ((), False)),
            ("", ((), False)),
            ("/a", (("a",), False)),
            ("/a/", (("a",), True)),
            ("/f/foo/bar/", (("f", "foo", "bar"), True)),
        ],
    )
    def test_split(self, path: str, expected: tuple[tuple[str, ...], bool]) -> None:
        assert split_path(path) == expected

    def test_join_adds_slash_only_when_asked(self) -> None:
        assert join_path(("d",), True) == "/d/"
        assert join_path(("d",), False) == "/d"
        assert join_path((), True) == "/"


class TestSplitHost:
    def test_reverses_labels(self) -> None:
        assert split_host("foo.example.com") == ("com", "example", "foo")

    def test_strips_port_and_case(self) -> None:
        assert split_host("Foo.Example.com:8080") == ("com", "example", "foo")

    def test_strips_root_dot(self) -> None:
        assert split_host("example.com.") == ("com", "example")

    def test_ipv6_literal(self) -> None:
        assert split_host("[::1]:8000") == ("[::1]",)

    def test_empty(self) -> None:
        assert split_host("") == ()
