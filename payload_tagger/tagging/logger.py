# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

import json, os, sys, time
from .redaction import sanitize

LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}

_threshold = LEVELS.get(os.environ.get("PAYLOAD_TAGGING_LOG_LEVEL", "info").lower(), LEVELS["info"])

def set_level(level: str):
    global _threshold
    if level.lower() not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    _threshold = LEVELS[level.lower()]

def log_json(**kwargs):
    level = kwargs.get("level", "info")
    if LEVELS.get(level, LEVELS["info"]) < _threshold:
        return
    rec = {"ts": int(time.time()*1000)}
    rec.update(kwargs)
    safe = sanitize(rec)
    sys.stdout.write(json.dumps(safe, default=str) + "\n")
    sys.stdout.flush()
