import os

import pytest

from veoprompt.config.config import get_api_key, get_default_config, init_env, load_config


@pytest.fixture(autouse=True)
def clear_overrides(monkeypatch):
    for name in ["VEO_MODEL_ID", "VEO_INSTRUCTION_VERSION", "VEO_LOG_LEVEL", "VEO_LOG_FILE", "VEO_SERVER_PORT"]:
        monkeypatch.delenv(name, raising=False)


def test_load_config_merges_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("model_id: gemini-2.5-pro\n", encoding="utf-8")
    config = load_config(str(path))
    assert config["model_id"] == "gemini-2.5-pro"
    assert config["instruction_version"] == get_default_config()["instruction_version"]
    assert config["server_port"] == 8000


def test_load_config_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("model_id: gemini-2.5-pro\n", encoding="utf-8")
    monkeypatch.setenv("VEO_MODEL_ID", "gemini-2.5-flash-lite")
    monkeypatch.setenv("VEO_SERVER_PORT", "9001")
    config = load_config(str(path))
    assert config["model_id"] == "gemini-2.5-flash-lite"
    assert config["server_port"] == 9001


def test_load_config_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_load_config_default_uses_example_file():
    config = load_config()
    assert config["model_id"] == "gemini-2.5-flash"
    assert config["instruction_version"] == "v1"


def test_api_key_is_read_at_call_time(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    assert get_api_key() is None
    monkeypatch.setenv("API_KEY", "first")
    assert get_api_key() == "first"
    monkeypatch.setenv("API_KEY", "second")
    assert get_api_key() == "second"


def test_init_env_does_not_override(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("API_KEY=from-file\nVEO_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("API_KEY", "from-env")
    monkeypatch.delenv("VEO_LOG_LEVEL", raising=False)
    try:
        assert init_env(str(env_file)) == str(env_file)
        assert os.environ["API_KEY"] == "from-env"
        assert os.environ["VEO_LOG_LEVEL"] == "DEBUG"
    finally:
        os.environ.pop("VEO_LOG_LEVEL", None)


def test_init_env_missing_file(tmp_path):
    assert init_env(str(tmp_path / "missing.env")) is None
