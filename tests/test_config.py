from webseed import __version__
from webseed.config import DEFAULT_PORT, ENV_DEFAULTS, Settings


def test_defaults_when_environment_is_empty():
    settings = Settings.from_env({})
    assert settings.port == DEFAULT_PORT
    assert settings.env == "local"
    assert settings.app_name == "web-seed"
    assert settings.group == "tool"
    assert settings.host == "local"
    assert settings.app_root == "unknown"
    assert settings.user == "unknown"
    assert settings.data_centre == "sd16"
    assert settings.zone == "DRN"
    assert settings.country == "srb"
    assert settings.dns_alias == ""
    assert settings.local_mode == "false"
    assert settings.version == __version__
    assert settings.log_file is None
    assert settings.is_local_mode is False


def test_literal_values_when_set():
    environ = {name: f"value-{name.lower()}" for name in ENV_DEFAULTS}
    settings = Settings.from_env(environ)
    assert settings.env == "value-env"
    assert settings.app_name == "value-component"
    assert settings.group == "value-group"
    assert settings.host == "value-host"
    assert settings.app_root == "value-apps"
    assert settings.user == "value-user"
    assert settings.data_centre == "value-data_centre"
    assert settings.zone == "value-zone"
    assert settings.country == "value-country"
    assert settings.dns_alias == "value-dns_alias"
    assert settings.local_mode == "value-local_mode"
    assert settings.version == "value-version"


def test_empty_string_is_taken_literally():
    settings = Settings.from_env({"ENV": "", "ZONE": ""})
    assert settings.env == ""
    assert settings.zone == ""


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("COUNTRY", "nld")
    monkeypatch.delenv("DATA_CENTRE", raising=False)
    settings = Settings.from_env()
    assert settings.country == "nld"
    assert settings.data_centre == "sd16"


def test_local_mode_flag_and_bind_address():
    settings = Settings.from_env({"LOCAL_MODE": "true"}, port=8123)
    assert settings.is_local_mode is True
    assert settings.bind_address == "0.0.0.0:8123"
