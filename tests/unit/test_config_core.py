"""
Unit tests for Config, ConnectionSettings and ConfigLoader.
"""

import json

import pytest
from pydantic import ValidationError

from ircconnector.config import Config, ConfigLoader, ConnectionSettings
from ircconnector.errors.internal import ConfigurationError


def make(settings=None, uris=None):
    settings = {"nickname": "bot", **(settings or {})}
    return Config.from_dict({"uris": uris or ["irc://irc.example.org/"], "settings": settings})


class TestConnectionSettings:
    def test_requires_at_least_one_uri(self):
        with pytest.raises(ValidationError):
            ConnectionSettings.model_validate({"uris": []})

    def test_rejects_uri_without_host(self):
        with pytest.raises(ValidationError):
            ConnectionSettings.model_validate({"uris": ["irc:///"]})

    def test_strips_uris_and_drops_null_settings(self):
        settings = ConnectionSettings.model_validate(
            {"uris": ["  ircs://irc.example.org/  "], "settings": {"password": None, "nickname": "x"}}
        )

        assert settings.uris == ["ircs://irc.example.org/"]
        assert settings.settings == {"nickname": "x"}

    def test_requires_nickname(self):
        with pytest.raises(ValidationError, match="nickname"):
            ConnectionSettings.model_validate({"uris": ["irc://irc.example.org/"], "settings": {}})

    @pytest.mark.parametrize("nickname", ["", "   ", 42, True, None])
    def test_rejects_unusable_nickname(self, nickname):
        with pytest.raises(ValidationError):
            ConnectionSettings.model_validate(
                {"uris": ["irc://irc.example.org/"], "settings": {"nickname": nickname}}
            )


class TestConfig:
    def test_connection_uris_are_copied(self):
        config = make(uris=["irc://a.example/", "irc://b.example/"])

        uris = config.get_connection_uris()
        uris.append("irc://c.example/")

        assert config.get_connection_uris() == ["irc://a.example/", "irc://b.example/"]

    def test_parse_string_with_default(self):
        config = make({"nickname": "Erebot"})

        assert config.parse_string("nickname") == "Erebot"
        assert config.parse_string("password", "") == ""

    def test_parse_string_missing_without_default(self):
        with pytest.raises(ConfigurationError) as exc:
            make().parse_string("realname")
        assert exc.value.data == {"key": "realname"}

    def test_parse_string_wrong_type(self):
        with pytest.raises(ConfigurationError):
            make({"realname": True}).parse_string("realname")

    @pytest.mark.parametrize(
        "raw,expected",
        [(True, True), (False, False), ("yes", True), ("Off", False), ("1", True), (0, False)],
    )
    def test_parse_bool(self, raw, expected):
        assert make({"upgrade": raw}).parse_bool("upgrade") is expected

    def test_parse_bool_default_false(self):
        assert make().parse_bool("upgrade", False) is False

    def test_parse_bool_invalid(self):
        with pytest.raises(ConfigurationError):
            make({"upgrade": "maybe"}).parse_bool("upgrade")

    def test_parse_int(self):
        config = make({"a": 5, "b": "7", "c": 2.0})

        assert config.parse_int("a") == 5
        assert config.parse_int("b") == 7
        assert config.parse_int("c") == 2
        assert config.parse_int("missing", 0) == 0

    def test_parse_int_rejects_bool(self):
        with pytest.raises(ConfigurationError):
            make({"a": True}).parse_int("a")

    def test_reload_is_seen_by_next_read(self):
        config = make({"nickname": "old"})

        config.reload(ConnectionSettings.model_validate({"uris": ["irc://x.example/"], "settings": {"nickname": "new"}}))

        assert config.parse_string("nickname") == "new"


class TestConfigLoader:
    def test_loads_valid_file(self, tmp_path):
        path = tmp_path / "conf.json"
        path.write_text(json.dumps({"uris": ["irc://irc.example.org/"], "settings": {"nickname": "bot"}}))

        config = ConfigLoader(path).get_configuration()

        assert config.parse_string("nickname") == "bot"

    def test_uses_env_file(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"uris": ["irc://irc.example.org/"]}))
        monkeypatch.setenv("IRCCONNECTOR_CONF_FILE", str(path))

        assert ConfigLoader().path == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc:
            ConfigLoader(tmp_path / "nope.json").get_configuration()
        assert exc.value.data["path"].endswith("nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load_raw()

    def test_non_object_root(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load_raw()

    def test_schema_errors(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"uris": []}))

        with pytest.raises(ConfigurationError) as exc:
            ConfigLoader(path).get_configuration()
        assert exc.value.data["errors"]

    def test_missing_nickname_fails_at_load_time(self, tmp_path):
        path = tmp_path / "nonick.json"
        path.write_text(json.dumps({"uris": ["irc://irc.example.org/"], "settings": {}}))

        with pytest.raises(ConfigurationError) as exc:
            ConfigLoader(path).get_configuration()
        assert exc.value.data["path"] == str(path)
        assert any("nickname" in err["msg"] for err in exc.value.data["errors"])
