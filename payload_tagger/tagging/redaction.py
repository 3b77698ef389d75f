# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

from typing import Any, FrozenSet

from .constants import REDACTED

REDACTED_KEYS: FrozenSet[str] = frozenset(["authorization", "x-authorization", "password", "token"])

def is_redacted_key(key: str) -> bool:
    """Exact, case-sensitive check of a single path segment."""
    return key in REDACTED_KEYS

def _sanitize_obj(o):
    if isinstance(o, dict):
        return {k: (REDACTED if str(k).lower() in REDACTED_KEYS else _sanitize_obj(v)) for k, v in o.items()}
    elif isinstance(o, (list, tuple)):
        return [_sanitize_obj(x) for x in o]
    else:
        return o

def sanitize(o: Any) -> Any:
    # Log records only; tag values go through is_redacted_key
    return _sanitize_obj(o)
