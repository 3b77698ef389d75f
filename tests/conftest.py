import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from payload_tagger.tagging import logger
from payload_tagger.tagging.mask import GlobMask


@pytest.fixture(autouse=True)
def restore_log_level(monkeypatch):
    monkeypatch.setattr(logger, "_threshold", logger._threshold)


@pytest.fixture
def glob_mask() -> GlobMask:
    return GlobMask("*")


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer("tests")
