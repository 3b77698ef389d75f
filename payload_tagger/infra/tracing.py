# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

from typing import Any, Dict
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanLimits, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
import os

from ..tagging.constants import PAYLOAD_TAGGING_MAX_TAGS
from ..tagging.logger import log_json

_tracer_inited = False
_max_attributes = 0

def init_tracing(service_name: str = "payload-tagger", max_attributes: int = PAYLOAD_TAGGING_MAX_TAGS):
    global _tracer_inited, _max_attributes
    if _tracer_inited:
        if max_attributes > _max_attributes:
            log_json(level="warning", msg="span_limits_already_set", applied=_max_attributes, requested=max_attributes)
        return
    endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")
    resource = Resource.create({"service.name": service_name})
    # Query, request and response tags share one span, plus span metadata
    limits = SpanLimits(max_span_attributes=3 * max_attributes + 32)
    provider = TracerProvider(resource=resource, span_limits=limits)
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint + "/v1/traces"))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _tracer_inited = True
    _max_attributes = max_attributes

def get_tracer(name: str = "payload_tagger"):
    return trace.get_tracer(name)

def set_payload_tags(span, tags: Dict[str, Any]):
    if not tags or not span.is_recording():
        return
    span.set_attributes(tags)
