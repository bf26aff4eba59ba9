"""Segment classifier — map a directory name to its routing role.

File-based routing encodes the route shape in directory names::

    users/              static       -> key "users"
    [id]/               dynamic      -> key "_id", binds one segment
    [...slug]/          catch-all    -> key "___slug", binds one or more
    [[...slug]]/        optional     -> key "_____slug", binds zero or more
    (marketing)/        group        -> transparent, no key
    @modal/             parallel     -> transparent, no key
    _components/        private      -> excluded with its subtree
    (.)photo/           intercepting -> excluded with its subtree

Classification is pure and never fails: anything unrecognised is static.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from routeschema.routes.schema import ParamArity, ParamBinding

type SegmentKind = Literal[
    "static",
    "dynamic",
    "catch_all",
    "optional_catch_all",
    "group",
    "parallel",
    "intercepting",
    "private",
]

OPTIONAL_CATCH_ALL_PREFIX = "_____"
CATCH_ALL_PREFIX = "___"
DYNAMIC_PREFIX = "_"

_INTERCEPT_MARKERS: tuple[str, ...] = ("(.)", "(..)", "(...)")

_OPTIONAL_CATCH_ALL_RE = re.compile(r"^\[\[\.\.\.(?P<name>[^\[\]]+)\]\]$")
_CATCH_ALL_RE = re.compile(r"^\[\.\.\.(?P<name>[^\[\]]+)\]$")
_DYNAMIC_RE = re.compile(r"^\[(?P<name>[^\[\]]+)\]$")

_KEY_PREFIXES: dict[SegmentKind, str] = {
    "dynamic": DYNAMIC_PREFIX,
    "catch_all": CATCH_ALL_PREFIX,
    "optional_catch_all": OPTIONAL_CATCH_ALL_PREFIX,
}

_ARITIES: dict[SegmentKind, ParamArity] = {
    "dynamic": "single",
    "catch_all": "catch_all",
    "optional_catch_all": "optional_catch_all",
}


@dataclass(frozen=True, slots=True)
class Segment:
    """A classified directory name.

    Attributes:
        name: The raw directory name.
        kind: Routing role of the directory.
        param_name: Extracted parameter name for dynamic kinds, else empty.

    """

    name: str
    kind: SegmentKind
    param_name: str = ""

    @property
    def is_transparent(self) -> bool:
        """Group and parallel segments splice their contents into the parent."""
        return self.kind in ("group", "parallel")

    @property
    def is_excluded(self) -> bool:
        """Private and intercepting segments are never traversed."""
        return self.kind in ("private", "intercepting")

    @property
    def is_param(self) -> bool:
        return self.kind in _ARITIES

    @property
    def key(self) -> str:
        """Schema key for this segment, with the kind encoded as a prefix."""
        if self.is_param:
            return _KEY_PREFIXES[self.kind] + self.param_name
        return self.name

    def binding(self) -> ParamBinding | None:
        """The parameter this segment binds, or *None* for non-dynamic kinds."""
        if not self.is_param:
            return None
        return ParamBinding(name=self.param_name, arity=_ARITIES[self.kind])


def classify_segment(name: str) -> Segment:
    """Classify a directory (or file) name.

    Rules are checked in precedence order: group, parallel, private,
    intercepting, optional catch-all, catch-all, dynamic, static.
    """
    if len(name) >= 2 and name.startswith("(") and name.endswith(")"):
        return Segment(name=name, kind="group")
    if name.startswith("@"):
        return Segment(name=name, kind="parallel")
    if name.startswith("_"):
        return Segment(name=name, kind="private")
    if name.startswith(_INTERCEPT_MARKERS):
        return Segment(name=name, kind="intercepting")

    for kind, pattern in (
        ("optional_catch_all", _OPTIONAL_CATCH_ALL_RE),
        ("catch_all", _CATCH_ALL_RE),
        ("dynamic", _DYNAMIC_RE),
    ):
        match = pattern.match(name)
        if match:
            return Segment(name=name, kind=kind, param_name=match.group("name"))

    return Segment(name=name, kind="static")
