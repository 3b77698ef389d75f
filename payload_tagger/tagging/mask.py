# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

from typing import Dict, Iterator, List, Optional, Protocol, Tuple

WILDCARD = "*"

class MaskSyntaxError(ValueError):
    pass

class MaskCursor(Protocol):
    def can_tag(self, key: str, is_last_key: bool) -> bool: ...

    def with_next(self, key: str) -> "MaskCursor": ...

class Mask(Protocol):
    def get_head(self) -> MaskCursor: ...

class _Node:
    __slots__ = ("children", "wildcard", "terminal")

    def __init__(self):
        self.children: Dict[str, "_Node"] = {}
        self.wildcard: Optional["_Node"] = None
        self.terminal = False

    def add(self, segment: str, is_wildcard: bool) -> "_Node":
        if is_wildcard:
            if self.wildcard is None:
                self.wildcard = _Node()
            return self.wildcard
        return self.children.setdefault(segment, _Node())

def _split_rules(filter: str) -> List[str]:
    rules: List[str] = []
    buf: List[str] = []
    chars = iter(filter)
    for ch in chars:
        if ch == "\\":
            buf.append(ch)
            nxt = next(chars, None)
            if nxt is not None:
                buf.append(nxt)
        elif ch == ",":
            rules.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    rules.append("".join(buf))
    return rules

def _split_rule(rule: str) -> List[Tuple[str, bool]]:
    """Split one rule on unescaped dots into (segment, is_wildcard) pairs."""
    segments: List[Tuple[str, bool]] = []
    buf: List[str] = []
    escaped = False
    chars = iter(rule)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                raise MaskSyntaxError(f"Dangling escape in mask rule: {rule!r}")
            buf.append(nxt)
            escaped = True
        elif ch == ".":
            segments.append(_segment(buf, escaped, rule))
            buf, escaped = [], False
        else:
            buf.append(ch)
    segments.append(_segment(buf, escaped, rule))
    return segments

def _segment(buf: List[str], escaped: bool, rule: str) -> Tuple[str, bool]:
    text = "".join(buf)
    if not text:
        raise MaskSyntaxError(f"Empty segment in mask rule: {rule!r}")
    return text, (text == WILDCARD and not escaped)

class GlobMaskCursor:
    __slots__ = ("_nodes", "_include_all")

    def __init__(self, nodes: Tuple[_Node, ...], include_all: bool = False):
        self._nodes = nodes
        self._include_all = include_all

    def _matching(self, key: str) -> Iterator[_Node]:
        for node in self._nodes:
            child = node.children.get(key)
            if child is not None:
                yield child
            if node.wildcard is not None:
                yield node.wildcard

    def can_tag(self, key: str, is_last_key: bool) -> bool:
        if self._include_all:
            return True
        matched = list(self._matching(key))
        if not matched:
            return False
        if any(n.terminal for n in matched):
            return True
        # A scalar cannot satisfy a rule that still expects deeper keys
        return not is_last_key

    def with_next(self, key: str) -> "GlobMaskCursor":
        if self._include_all:
            return self
        matched = tuple(self._matching(key))
        return GlobMaskCursor(matched, any(n.terminal for n in matched))

class GlobMask:
    """Inclusion mask built from comma-separated dotted rules.

    ``*`` matches any single key, a backslash escapes the next character
    (``\\.``, ``\\,``, ``\\*``), and a rule that has fully matched includes
    everything below it::

        GlobMask("*")                     # everything
        GlobMask("user.name,items.*.id")  # two branches only
    """

    def __init__(self, filter: Optional[str]):
        self.rules: List[str] = []
        self._root = _Node()
        if not filter or not filter.strip():
            return
        for raw in _split_rules(filter):
            rule = raw.strip()
            if not rule:
                raise MaskSyntaxError(f"Empty rule in mask: {filter!r}")
            node = self._root
            for segment, is_wildcard in _split_rule(rule):
                node = node.add(segment, is_wildcard)
            node.terminal = True
            self.rules.append(rule)

    def get_head(self) -> GlobMaskCursor:
        return GlobMaskCursor((self._root,))

    def __repr__(self):
        return f"GlobMask({','.join(self.rules)!r})"
