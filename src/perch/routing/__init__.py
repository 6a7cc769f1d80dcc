"""Routing — path and host dispatch over a shared segment trie.

Routes are registered during setup; dispatch is a read-only walk that
returns a ``Dispatch`` describing the outcome.
"""

from perch.routing.dispatch import Dispatch, Disposition
from perch.routing.host import HostRouter
from perch.routing.pattern import Pattern, Segment, SegmentKind, compile_host, compile_path
from perch.routing.router import ANY_METHOD, Router
from perch.routing.trie import SegmentTrie

__all__ = [
    "ANY_METHOD",
    "Dispatch",
    "Disposition",
    "HostRouter",
    "Pattern",
    "Router",
    "Segment",
    "SegmentKind",
    "SegmentTrie",
    "compile_host",
    "compile_path",
]
