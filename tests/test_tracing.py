import json

from opentelemetry import trace

from payload_tagger.infra import tracing
from payload_tagger.infra.tracing import set_payload_tags
from payload_tagger.tagging.constants import TRIMMED_TAG
from payload_tagger.tagging.mask import GlobMask
from payload_tagger.tagging.tagger import get_body_request_tags


def test_tags_are_merged_into_span_attributes(tracer, span_exporter):
    tags = get_body_request_tags('{"user": {"id": 7, "token": "t"}}', "application/json", GlobMask("*"), 10)
    with tracer.start_as_current_span("op") as span:
        set_payload_tags(span, tags)
    (finished,) = span_exporter.get_finished_spans()
    assert dict(finished.attributes) == {
        "http.payload.request.user.id": "7",
        "http.payload.request.user.token": "redacted",
    }


def test_trimmed_marker_is_a_boolean_attribute(tracer, span_exporter):
    tags = get_body_request_tags('{"a": 1, "b": 2, "c": 3}', "application/json", GlobMask("*"), 10, max_tags=2)
    with tracer.start_as_current_span("op") as span:
        set_payload_tags(span, tags)
    (finished,) = span_exporter.get_finished_spans()
    assert finished.attributes[TRIMMED_TAG] is True
    assert finished.attributes["http.payload.request.a"] == "1"


def test_non_recording_span_is_ignored():
    set_payload_tags(trace.INVALID_SPAN, {"a": "b"})


def test_empty_tags_leave_span_untouched(tracer, span_exporter):
    with tracer.start_as_current_span("op") as span:
        set_payload_tags(span, {})
    (finished,) = span_exporter.get_finished_spans()
    assert not finished.attributes


def test_reinit_with_larger_budget_is_logged(monkeypatch, capsys):
    monkeypatch.setattr(tracing, "_tracer_inited", True)
    monkeypatch.setattr(tracing, "_max_attributes", 100)
    tracing.init_tracing(max_attributes=50)
    assert capsys.readouterr().out == ""
    tracing.init_tracing(max_attributes=500)
    rec = json.loads(capsys.readouterr().out)
    assert rec["msg"] == "span_limits_already_set"
    assert rec["applied"] == 100
    assert rec["requested"] == 500
