# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import json

from .constants import (
    MAX_VALUE_LENGTH,
    PAYLOAD_TAG_REQUEST_PREFIX,
    PAYLOAD_TAG_RESPONSE_PREFIX,
    PAYLOAD_TAGGING_MAX_TAGS,
    REDACTED,
    TRIMMED_TAG,
    TRUNCATED,
)
from .logger import log_json
from .mask import Mask, MaskCursor
from .redaction import is_redacted_key

@dataclass
class TagContext:
    """Counters and output for a single traversal; never shared between calls."""
    max_depth: int
    max_tags: int
    tags: Dict[str, Any] = field(default_factory=dict)
    tag_count: int = 0

    @property
    def trimmed(self) -> bool:
        return TRIMMED_TAG in self.tags

    def emit(self, path: str, value: str):
        self.tags[path] = value
        self.tag_count += 1

def escape_key(key: str) -> str:
    return key.replace(".", "\\.")

def is_json_content_type(content_type: Optional[str]) -> bool:
    return isinstance(content_type, str) and content_type[-4:] == "json"

def _number_to_str(n) -> str:
    if isinstance(n, float) and n.is_integer() and abs(n) < 1e21:
        return str(int(n))
    return repr(n) if isinstance(n, float) else str(n)

def _tag_rec(path: str, key: str, obj: Any, cursor: MaskCursor, depth: int, ctx: TagContext):
    # Off by one: the trimmed marker takes the last slot of the budget
    if ctx.tag_count >= ctx.max_tags - 1:
        ctx.tags[TRIMMED_TAG] = True
        return

    composite = isinstance(obj, (dict, list, tuple))
    if depth >= ctx.max_depth and composite:
        ctx.emit(path, TRUNCATED)
        return
    depth += 1

    if obj is None:
        ctx.emit(path, "null")
        return

    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        ctx.emit(path, "true" if obj else "false")
        return

    if isinstance(obj, (int, float)):
        ctx.emit(path, _number_to_str(obj))
        return

    if not composite:
        ctx.emit(path, REDACTED if is_redacted_key(key) else str(obj)[:MAX_VALUE_LENGTH])
        return

    entries = obj.items() if isinstance(obj, dict) else ((str(i), v) for i, v in enumerate(obj))
    for child_key, value in entries:
        child_key = str(child_key)
        is_last_key = not isinstance(value, (dict, list, tuple))
        if not cursor.can_tag(child_key, is_last_key):
            continue
        _tag_rec(f"{path}.{escape_key(child_key)}", child_key, value, cursor.with_next(child_key), depth, ctx)

def tags_from_object(obj: Any, mask: Mask, max_depth: int, prefix: str = "",
                     max_tags: int = PAYLOAD_TAGGING_MAX_TAGS) -> Dict[str, Any]:
    """Flatten a decoded payload into ``{dotted.path: str}`` span tags.

    Containers deeper than ``max_depth`` become ``"truncated"``; once
    ``max_tags - 1`` tags exist, the rest of the traversal only sets
    ``_dd.payload_tags_trimmed``. String leaves whose key is in
    ``REDACTED_KEYS`` are replaced with ``"redacted"``.
    """
    ctx = TagContext(max_depth=max_depth, max_tags=max_tags)
    _tag_rec(prefix, prefix.rsplit(".", 1)[-1], obj, mask.get_head(), 0, ctx)
    if ctx.trimmed:
        log_json(level="debug", msg="payload_tags_trimmed", prefix=prefix, max_tags=max_tags)
    return ctx.tags

def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")

def get_body_tags(json_string: str, content_type: Optional[str], mask: Mask, max_depth: int,
                  prefix: str = "", max_tags: int = PAYLOAD_TAGGING_MAX_TAGS) -> Dict[str, Any]:
    if not is_json_content_type(content_type):
        return {}
    try:
        obj = json.loads(json_string, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError) as e:
        log_json(level="debug", msg="payload_decode_failed", prefix=prefix, error=f"{type(e).__name__}: {e}")
        return {}
    return tags_from_object(obj, mask, max_depth, prefix, max_tags)

def get_body_request_tags(json_string: str, content_type: Optional[str], mask: Mask, max_depth: int,
                          max_tags: int = PAYLOAD_TAGGING_MAX_TAGS) -> Dict[str, Any]:
    return get_body_tags(json_string, content_type, mask, max_depth, PAYLOAD_TAG_REQUEST_PREFIX, max_tags)

def get_body_response_tags(json_string: str, content_type: Optional[str], mask: Mask, max_depth: int,
                           max_tags: int = PAYLOAD_TAGGING_MAX_TAGS) -> Dict[str, Any]:
    return get_body_tags(json_string, content_type, mask, max_depth, PAYLOAD_TAG_RESPONSE_PREFIX, max_tags)
