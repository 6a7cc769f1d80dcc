"""Segment trie shared by the path and host routers.

Nodes branch on literal text first, then on a single capture child, then
on a single wildcard child. Lookup walks greedily in that order and
backtracks when a branch dead-ends.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from perch.errors import ConfigurationError
from perch.routing.pattern import Pattern, SegmentKind


class TrieNode:
    """One level of the trie. Mutated only while routes are registered."""

    __slots__ = ("capture", "literals", "terminals", "wildcard")

    def __init__(self) -> None:
        # Literal children: "users" -> node
        self.literals: dict[str, TrieNode] = {}
        # Single capture child, shared by every capture at this level
        self.capture: TrieNode | None = None
        # Single wildcard child; its terminals hold one pattern under both keys
        self.wildcard: TrieNode | None = None
        # Patterns ending here, keyed by their trailing-slash flag
        self.terminals: dict[bool, Pattern] = {}


@dataclass(frozen=True, slots=True)
class TrieMatch:
    """A node that consumed every segment, plus the captured text."""

    terminals: Mapping[bool, Pattern]
    values: tuple[str, ...]


class SegmentTrie:
    """Trie of compiled patterns.

    Usage::

        trie = SegmentTrie()
        trie.insert(compile_path("/users/<id>"))
        match = trie.lookup(("users", "42"))
    """

    __slots__ = ("_patterns", "_root")

    def __init__(self) -> None:
        self._root = TrieNode()
        self._patterns: list[Pattern] = []

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    @property
    def depth(self) -> int:
        """Segment count of the longest registered pattern."""
        return max((len(p.segments) for p in self._patterns), default=0)

    def insert(self, pattern: Pattern) -> Pattern:
        """Insert *pattern* and return the stored Pattern for its position.

        If an equivalent pattern is already stored it is returned instead,
        so callers merge their handlers into it.
        """
        node = self._root
        for seg in pattern.segments:
            if seg.kind is SegmentKind.LITERAL:
                child = node.literals.get(seg.value)
                if child is None:
                    child = node.literals[seg.value] = TrieNode()
                node = child
            elif seg.kind is SegmentKind.CAPTURE:
                if node.capture is None:
                    node.capture = TrieNode()
                node = node.capture
            else:
                if node.wildcard is None:
                    node.wildcard = TrieNode()
                node = node.wildcard

        existing = node.terminals.get(pattern.trailing_slash)
        if existing is not None:
            if existing.capture_names != pattern.capture_names:
                msg = (
                    f"Route template {pattern.template!r} conflicts with "
                    f"{existing.template!r}: same shape, different parameter names."
                )
                raise ConfigurationError(msg)
            return existing

        if pattern.is_wildcard:
            node.terminals[False] = node.terminals[True] = pattern
        else:
            node.terminals[pattern.trailing_slash] = pattern
        self._patterns.append(pattern)
        return pattern

    def lookup(self, segments: Sequence[str], trailing_slash: bool = False) -> TrieMatch | None:
        """Find the node that consumes every segment, or ``None``.

        A node is accepted when it ends a pattern in the requested
        trailing-slash form, or when the request has no trailing slash and
        the node ends a slash-terminated pattern (a redirect candidate).
        """
        return self._walk(self._root, segments, trailing_slash, 0, ())

    def _walk(
        self,
        node: TrieNode,
        segments: Sequence[str],
        trailing_slash: bool,
        index: int,
        values: tuple[str, ...],
    ) -> TrieMatch | None:
        # All segments consumed
        if index == len(segments):
            if trailing_slash in node.terminals or True in node.terminals:
                return TrieMatch(node.terminals, values)
            return None

        part = segments[index]

        # 1. Literal
        child = node.literals.get(part)
        if child is not None:
            found = self._walk(child, segments, trailing_slash, index + 1, values)
            if found is not None:
                return found

        # 2. Capture (never binds an empty segment)
        if node.capture is not None and part:
            found = self._walk(
                node.capture, segments, trailing_slash, index + 1, (*values, part)
            )
            if found is not None:
                return found

        # 3. Wildcard: swallows the remainder, binds nothing
        if node.wildcard is not None:
            return TrieMatch(node.wildcard.terminals, values)

        return None
