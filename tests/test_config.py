import pytest
from pydantic import ValidationError

from payload_tagger.infra.config import PayloadTaggingSettings, load_settings
from payload_tagger.tagging.mask import GlobMask

ENV_VARS = [
    "PAYLOAD_TAGGING_CONFIG",
    "PAYLOAD_TAGGING_REQUEST",
    "PAYLOAD_TAGGING_RESPONSE",
    "PAYLOAD_TAGGING_MAX_DEPTH",
    "PAYLOAD_TAGGING_MAX_TAGS",
    "PAYLOAD_TAGGING_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "tagging.yaml"
    path.write_text(
        "payload_tagging:\n"
        "  request: '*'\n"
        "  response: 'user.*'\n"
        "  max_depth: 5\n"
        "  max_tags: 100\n"
        "logging:\n"
        "  level: debug\n"
    )
    return path


def test_bundled_defaults():
    settings = load_settings()
    assert settings.request is None
    assert settings.response is None
    assert settings.max_depth == 10
    assert settings.max_tags == 758
    assert settings.request_mask() is None


def test_reads_yaml_file(config_file):
    settings = load_settings(str(config_file))
    assert settings.request == "*"
    assert settings.response == "user.*"
    assert settings.max_depth == 5
    assert settings.max_tags == 100
    assert settings.log_level == "debug"
    assert isinstance(settings.request_mask(), GlobMask)


def test_config_path_from_env(config_file, monkeypatch):
    monkeypatch.setenv("PAYLOAD_TAGGING_CONFIG", str(config_file))
    assert load_settings().max_depth == 5


def test_env_overrides_file(config_file, monkeypatch):
    monkeypatch.setenv("PAYLOAD_TAGGING_RESPONSE", "items.*.id")
    monkeypatch.setenv("PAYLOAD_TAGGING_MAX_DEPTH", "3")
    settings = load_settings(str(config_file))
    assert settings.response == "items.*.id"
    assert settings.max_depth == 3
    assert settings.request == "*"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "missing.yaml"))


def test_empty_file_uses_model_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings(str(path)) == PayloadTaggingSettings()


@pytest.mark.parametrize(
    "values",
    [{"max_depth": 0}, {"max_depth": 101}, {"max_tags": 1}, {"request": "a..b"}, {"log_level": "loud"}],
)
def test_invalid_settings(values):
    with pytest.raises(ValidationError):
        PayloadTaggingSettings(**values)


def test_blank_rules_disable_tagging():
    settings = PayloadTaggingSettings(request="  ", response="")
    assert settings.request is None
    assert settings.response_mask() is None


def test_empty_env_rule_disables_file_mask(config_file, monkeypatch):
    monkeypatch.setenv("PAYLOAD_TAGGING_REQUEST", "")
    monkeypatch.setenv("PAYLOAD_TAGGING_MAX_DEPTH", "")
    settings = load_settings(str(config_file))
    assert settings.request is None
    assert settings.request_mask() is None
    assert settings.response == "user.*"
    assert settings.max_depth == 5
