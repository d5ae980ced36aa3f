import pytest

from weighin.config import DEFAULT_MAX_IMAGE_BYTES, DEFAULT_VISION_URL, load_config

ENV_KEYS = [
    "GOOGLE_VISION_API_KEY",
    "GOOGLE_VISION_URL",
    "HTTP_TIMEOUT_SECONDS",
    "HTTP_RETRIES",
    "MAX_IMAGE_BYTES",
    "OCR_STATIC_TEXT",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_config_defaults():
    config = load_config()

    assert config.vision_api_key is None
    assert not config.uses_vision
    assert config.vision_url == DEFAULT_VISION_URL
    assert config.http_retries == 3
    assert config.max_image_bytes == DEFAULT_MAX_IMAGE_BYTES
    assert config.log_level == "INFO"


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_VISION_API_KEY", " key-123 ")
    monkeypatch.setenv("HTTP_RETRIES", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.uses_vision
    assert config.vision_api_key == "key-123"
    assert config.http_retries == 1
    assert config.log_level == "DEBUG"


def test_load_config_rejects_malformed_numbers(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ValueError):
        load_config()


def test_load_config_rejects_malformed_integers(monkeypatch):
    monkeypatch.setenv("HTTP_RETRIES", "abc")
    with pytest.raises(ValueError, match="HTTP_RETRIES"):
        load_config()


def test_load_config_log_format(monkeypatch):
    assert load_config().log_format == "json"

    monkeypatch.setenv("LOG_FORMAT", "Console")
    assert load_config().log_format == "console"

    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValueError):
        load_config()
