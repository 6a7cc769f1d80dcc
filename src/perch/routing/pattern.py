"""Route templates compiled into matchable segments.

Path templates::

    "/"             -> ()
    "/users"        -> (users,)
    "/users/<id>"   -> (users, <id>)
    "/static/*"     -> (static, *)
    "/docs/"        -> (docs,) with trailing_slash=True

Host templates are stored most-significant label first, so the trie walks
them TLD-first::

    "<x>.example.com" -> (com, example, <x>)
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from perch._internal.types import Handler
from perch.errors import ConfigurationError

WILDCARD = "*"

_CAPTURE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


class SegmentKind(Enum):
    """The closed set of things one segment can be."""

    LITERAL = "literal"
    CAPTURE = "capture"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class Segment:
    """One compiled path segment or host label.

    Literal:  ``users``  (value is the text to match)
    Capture:  ``<id>``   (value is the parameter name)
    Wildcard: ``*``      (value is empty)
    """

    kind: SegmentKind
    value: str = ""

    def __str__(self) -> str:
        if self.kind is SegmentKind.CAPTURE:
            return f"<{self.value}>"
        if self.kind is SegmentKind.WILDCARD:
            return WILDCARD
        return self.value


@dataclass(frozen=True, slots=True)
class Pattern:
    """A compiled registration template.

    The segment sequence is immutable once compiled. ``handlers`` maps an
    upper-case method (or ``"*"`` for any other method) to a handler and
    is filled in by the owning router.
    """

    template: str
    segments: tuple[Segment, ...]
    trailing_slash: bool = False
    handlers: dict[str, Handler] = field(default_factory=dict, compare=False, repr=False)

    @property
    def capture_names(self) -> tuple[str, ...]:
        """Parameter names in segment order."""
        return tuple(s.value for s in self.segments if s.kind is SegmentKind.CAPTURE)

    @property
    def is_wildcard(self) -> bool:
        return bool(self.segments) and self.segments[-1].kind is SegmentKind.WILDCARD

    @property
    def methods(self) -> frozenset[str]:
        """Methods with an explicit handler (``"*"`` included when set)."""
        return frozenset(self.handlers)

    def bind(self, values: Sequence[str]) -> dict[str, str]:
        """Pair captured segment text with this pattern's parameter names.

        A name used twice in one template keeps the later segment's value.
        """
        return dict(zip(self.capture_names, values, strict=True))


def _parse_segment(part: str, template: str) -> Segment:
    if not part:
        msg = f"Route template {template!r} contains an empty segment."
        raise ConfigurationError(msg)
    if part == WILDCARD:
        return Segment(SegmentKind.WILDCARD)
    if part.startswith("<") and part.endswith(">"):
        name = part[1:-1]
        if not _CAPTURE_NAME.match(name):
            msg = f"Route template {template!r} has an invalid parameter name {name!r}."
            raise ConfigurationError(msg)
        return Segment(SegmentKind.CAPTURE, name)
    if part.startswith("{") and part.endswith("}"):
        msg = (
            f"Route template {template!r} uses {{param}} syntax. "
            f"Perch captures are written <param>, e.g. <{part[1:-1]}>."
        )
        raise ConfigurationError(msg)
    if "<" in part or ">" in part or WILDCARD in part:
        msg = (
            f"Route template {template!r}: segment {part!r} mixes literal text "
            "with a capture or wildcard. Captures and wildcards must fill a whole segment."
        )
        raise ConfigurationError(msg)
    return Segment(SegmentKind.LITERAL, part)


def _check_wildcard(segments: tuple[Segment, ...], template: str) -> None:
    for seg in segments[:-1]:
        if seg.kind is SegmentKind.WILDCARD:
            msg = f"Route template {template!r}: a wildcard may only be the final segment."
            raise ConfigurationError(msg)


def compile_path(template: str) -> Pattern:
    """Compile a path template such as ``/users/<id>/`` into a Pattern.

    Raises ``ConfigurationError`` for malformed templates.
    """
    if not template.startswith("/"):
        msg = f"Route template {template!r} must start with '/'."
        raise ConfigurationError(msg)
    if template == "/":
        return Pattern(template=template, segments=())

    trailing_slash = template.endswith("/")
    body = template[1:-1] if trailing_slash else template[1:]
    segments = tuple(_parse_segment(part, template) for part in body.split("/"))
    _check_wildcard(segments, template)

    if trailing_slash and segments[-1].kind is SegmentKind.WILDCARD:
        msg = f"Route template {template!r}: a wildcard may only be the final segment."
        raise ConfigurationError(msg)

    return Pattern(template=template, segments=segments, trailing_slash=trailing_slash)


def compile_host(template: str) -> Pattern:
    """Compile a host template such as ``<x>.example.com`` into a Pattern.

    Labels are reversed so the most significant one comes first. Literal
    labels are lower-cased; a ``*`` is only allowed as the left-most label.
    """
    if not template or template != template.strip():
        msg = f"Host template {template!r} must be a non-empty host name."
        raise ConfigurationError(msg)
    labels = template.rstrip(".").split(".")
    segments = tuple(_parse_segment(label, template) for label in reversed(labels))
    _check_wildcard(segments, template)
    segments = tuple(
        Segment(SegmentKind.LITERAL, s.value.lower()) if s.kind is SegmentKind.LITERAL else s
        for s in segments
    )
    return Pattern(template=template, segments=segments)


def split_path(path: str) -> tuple[tuple[str, ...], bool]:
    """Split a request path into segments and a trailing-slash flag.

    Examples::

        "/"         -> ((), False)
        "/a/b"      -> (("a", "b"), False)
        "/f/x/y/"   -> (("f", "x", "y"), True)
    """
    if path in ("", "/"):
        return (), False
    body = path[1:] if path.startswith("/") else path
    trailing_slash = body.endswith("/")
    if trailing_slash:
        body = body[:-1]
    return tuple(body.split("/")), trailing_slash


def join_path(segments: Sequence[str], trailing_slash: bool) -> str:
    """Inverse of :func:`split_path`."""
    if not segments:
        return "/"
    path = "/" + "/".join(segments)
    return path + "/" if trailing_slash else path


def split_host(host: str) -> tuple[str, ...]:
    """Split a request host into labels, most significant first.

    Lower-cases, drops any ``:port`` suffix and a trailing root dot.
    Bracketed IPv6 literals come back as a single label.
    """
    host = host.strip().lower()
    if host.startswith("["):
        end = host.find("]")
        return (host[: end + 1],) if end != -1 else (host,)
    host = host.partition(":")[0].rstrip(".")
    if not host:
        return ()
    return tuple(reversed(host.split(".")))
