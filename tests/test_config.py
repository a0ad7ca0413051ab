"""Tests for loading the settings file."""

import dataclasses

import pytest

from config import DEFAULT_SITE, DEFAULT_TIMEOUT, REQUIRED_SETTINGS, ConfigError, load_settings


def test_load_key_value_file(write_settings, settings_values):
    settings = load_settings(write_settings(settings_values))

    assert settings.base_url == "https://ctrl"
    assert settings.login == "u"
    assert settings.password == "p"
    assert settings.device_id == "dev1"
    assert settings.port_profile_up == "PROF_UP"
    assert settings.port_profile_down == "PROF_DOWN"


def test_optional_settings_defaults(write_settings, settings_values):
    settings = load_settings(write_settings(settings_values))

    assert settings.site == DEFAULT_SITE
    assert settings.verify_ssl is True
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.mfa_secret is None


def test_optional_settings_overrides(write_settings, settings_values):
    settings_values.update(site="branch", verify_ssl="no", timeout="3", mfa_secret="JBSWY3DPEHPK3PXP")

    settings = load_settings(write_settings(settings_values))

    assert settings.site == "branch"
    assert settings.verify_ssl is False
    assert settings.timeout == 3
    assert settings.mfa_secret == "JBSWY3DPEHPK3PXP"


def test_load_json_file(write_settings, settings_values):
    settings_values.update(verify_ssl=False, timeout=5)

    settings = load_settings(write_settings(settings_values, name="unifi.json"))

    assert settings.device_id == "dev1"
    assert settings.verify_ssl is False
    assert settings.timeout == 5


def test_comments_and_unquoted_values(tmp_path):
    path = tmp_path / "unifi.conf"
    path.write_text(
        "# UniFi controller\n"
        "base_url=https://ctrl:8443\n"
        "login = admin\n"
        "password = 's3cr#t'\n"
        "device_id = dev1  # the core switch\n"
        "port_profile_up = PROF_UP\n"
        "port_profile_down = PROF_DOWN\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.base_url == "https://ctrl:8443"
    assert settings.password == "s3cr#t"
    assert settings.device_id == "dev1"


@pytest.mark.parametrize("missing", REQUIRED_SETTINGS)
def test_missing_required_setting_is_named(write_settings, settings_values, missing):
    del settings_values[missing]

    with pytest.raises(ConfigError, match=f"can't find {missing} setting"):
        load_settings(write_settings(settings_values))


@pytest.mark.parametrize("missing", REQUIRED_SETTINGS)
def test_missing_required_setting_in_json(write_settings, settings_values, missing):
    del settings_values[missing]

    with pytest.raises(ConfigError, match=missing):
        load_settings(write_settings(settings_values, name="unifi.json"))


def test_blank_required_setting_rejected(write_settings, settings_values):
    settings_values["device_id"] = "  "

    with pytest.raises(ConfigError, match="device_id"):
        load_settings(write_settings(settings_values))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "nope.conf")


def test_invalid_json(tmp_path):
    path = tmp_path / "unifi.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(path)


def test_json_root_must_be_object(tmp_path):
    path = tmp_path / "unifi.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigError, match="object"):
        load_settings(path)


def test_nested_json_value_rejected(write_settings, settings_values):
    settings_values["device_id"] = {"id": "dev1"}

    with pytest.raises(ConfigError, match="device_id"):
        load_settings(write_settings(settings_values, name="unifi.json"))


@pytest.mark.parametrize("key, value", [("verify_ssl", "maybe"), ("timeout", "soon"), ("timeout", "0")])
def test_invalid_optional_values(write_settings, settings_values, key, value):
    settings_values[key] = value

    with pytest.raises(ConfigError, match=key):
        load_settings(write_settings(settings_values))


def test_settings_are_immutable(write_settings, settings_values):
    settings = load_settings(write_settings(settings_values))

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.device_id = "other"


def test_password_not_in_repr(write_settings, settings_values):
    settings_values["password"] = "hunter2"

    settings = load_settings(write_settings(settings_values))

    assert "hunter2" not in repr(settings)


def test_load_yaml_file(tmp_path):
    path = tmp_path / "unifi.yaml"
    path.write_text(
        "base_url: https://ctrl\n"
        "login: u\n"
        "password: p\n"
        "device_id: dev1\n"
        "port_profile_up: PROF_UP\n"
        "port_profile_down: PROF_DOWN\n"
        "verify_ssl: false\n"
        "timeout: 4\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.base_url == "https://ctrl"
    assert settings.port_profile_up == "PROF_UP"
    assert settings.verify_ssl is False
    assert settings.timeout == 4


def test_missing_required_setting_in_yaml(tmp_path):
    path = tmp_path / "unifi.yml"
    path.write_text("base_url: https://ctrl\nlogin: u\npassword: p\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="can't find device_id setting"):
        load_settings(path)


@pytest.mark.parametrize("content", ["", "- a\n- b\n", "base_url: [unclosed\n"])
def test_invalid_yaml_rejected(tmp_path, content):
    path = tmp_path / "unifi.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match="YAML"):
        load_settings(path)
