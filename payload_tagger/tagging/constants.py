# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

PAYLOAD_TAG_REQUEST_PREFIX = "http.payload.request"
PAYLOAD_TAG_RESPONSE_PREFIX = "http.payload.response"

# Includes the slot reserved for TRIMMED_TAG
PAYLOAD_TAGGING_MAX_TAGS = 758
DEFAULT_MAX_DEPTH = 10

TRIMMED_TAG = "_dd.payload_tags_trimmed"
TRUNCATED = "truncated"
REDACTED = "redacted"
MAX_VALUE_LENGTH = 5000
