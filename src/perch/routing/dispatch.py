"""Dispatch outcomes returned by the routers."""

from dataclasses import dataclass, field
from enum import Enum

from perch._internal.types import Handler
from perch.routing.pattern import Pattern


class Disposition(Enum):
    """What a dispatch attempt decided, with the HTTP status it maps to."""

    MATCH = 200
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    REDIRECT = 301


@dataclass(frozen=True, slots=True)
class Dispatch:
    """Result of one dispatch.

    ``handler`` and ``params`` are set for ``MATCH``; ``location`` is the
    canonical path for ``REDIRECT``; ``allowed`` lists the methods of the
    matched pattern for ``METHOD_NOT_ALLOWED``.
    """

    disposition: Disposition
    handler: Handler | None = None
    params: dict[str, str] = field(default_factory=dict)
    pattern: Pattern | None = None
    location: str | None = None
    allowed: frozenset[str] = frozenset()

    @property
    def status(self) -> int:
        return self.disposition.value

    @property
    def is_match(self) -> bool:
        return self.disposition is Disposition.MATCH
