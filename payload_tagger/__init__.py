# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

from .tagging.mask import GlobMask, Mask, MaskCursor, MaskSyntaxError
from .tagging.tagger import (
    get_body_request_tags,
    get_body_response_tags,
    get_body_tags,
    is_json_content_type,
    tags_from_object,
)

__version__ = "0.1.0"

__all__ = [
    "GlobMask",
    "Mask",
    "MaskCursor",
    "MaskSyntaxError",
    "get_body_request_tags",
    "get_body_response_tags",
    "get_body_tags",
    "is_json_content_type",
    "tags_from_object",
]
