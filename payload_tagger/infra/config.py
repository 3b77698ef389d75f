# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

import os
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..tagging.constants import DEFAULT_MAX_DEPTH, PAYLOAD_TAGGING_MAX_TAGS
from ..tagging.logger import log_json
from ..tagging.mask import GlobMask

DEFAULTS_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "defaults.yaml")

# env var -> settings field
_ENV_OVERRIDES = {
    "PAYLOAD_TAGGING_REQUEST": "request",
    "PAYLOAD_TAGGING_RESPONSE": "response",
    "PAYLOAD_TAGGING_MAX_DEPTH": "max_depth",
    "PAYLOAD_TAGGING_MAX_TAGS": "max_tags",
    "PAYLOAD_TAGGING_LOG_LEVEL": "log_level",
}

class PayloadTaggingSettings(BaseModel):
    request: Optional[str] = None
    response: Optional[str] = None
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=100)
    max_tags: int = Field(default=PAYLOAD_TAGGING_MAX_TAGS, ge=2, le=10000)
    log_level: Literal["debug", "info", "warning", "error"] = "info"

    @field_validator("request", "response")
    @classmethod
    def _check_rules(cls, v: Optional[str]) -> Optional[str]:
        v = v.strip() if v else None
        if v:
            GlobMask(v)
        return v or None

    def request_mask(self) -> Optional[GlobMask]:
        return GlobMask(self.request) if self.request else None

    def response_mask(self) -> Optional[GlobMask]:
        return GlobMask(self.response) if self.response else None

def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        doc = yaml.safe_load(f) or {}
    values = dict(doc.get("payload_tagging") or {})
    level = (doc.get("logging") or {}).get("level")
    if level:
        values["log_level"] = level
    return values

def load_settings(path: Optional[str] = None) -> PayloadTaggingSettings:
    # Priority: ENV > file > defaults
    path = path or os.environ.get("PAYLOAD_TAGGING_CONFIG") or DEFAULTS_PATH
    values = _read_yaml(path)
    for env, name in _ENV_OVERRIDES.items():
        val = os.environ.get(env)
        # An empty mask rule disables tagging; empty numeric overrides are ignored
        if val is not None and (val or name in ("request", "response")):
            values[name] = val
    settings = PayloadTaggingSettings(**values)
    log_json(level="info", msg="settings_loaded", path=path, request=settings.request,
             response=settings.response, max_depth=settings.max_depth, max_tags=settings.max_tags)
    return settings
