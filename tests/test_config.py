"""Tests for ucb.config: UserConfig and validation."""

import os
import stat

import pytest
import yaml
from knack.util import CLIError

from ucb.cloudbuild.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ucb.config import (
    DEFAULT_CONFIG,
    SECRET_KEY_PREFIXES,
    UserConfig,
    _sanitize_for_yaml,
    get_config_dir,
)

from conftest import API_KEY, CRED_ID


class TestDefaultConfig:
    """Verify DEFAULT_CONFIG structure."""

    def test_has_defaults_section(self):
        assert DEFAULT_CONFIG["defaults"] == {"orgId": ""}

    def test_has_api_section(self):
        assert DEFAULT_CONFIG["api"]["base_url"] == DEFAULT_BASE_URL
        assert DEFAULT_CONFIG["api"]["timeout"] == DEFAULT_TIMEOUT

    def test_api_key_is_secret(self):
        assert "defaults.apiKey" in SECRET_KEY_PREFIXES


class TestConfigDir:

    def test_env_override(self, config_dir):
        assert get_config_dir() == config_dir

    def test_home_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("UCB_CONFIG_DIR", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_dir().name == ".ucb"


class TestUserConfig:
    """Test UserConfig load/save/get/set."""

    def test_load_without_file_uses_defaults(self, config_dir):
        config = UserConfig()
        data = config.load()

        assert data == DEFAULT_CONFIG
        assert not config.exists()

    def test_create_default(self, config_dir):
        config = UserConfig()
        config.create_default()

        assert config.exists()
        with open(config_dir / "settings.yaml", encoding="utf-8") as f:
            assert yaml.safe_load(f) == DEFAULT_CONFIG

    def test_load_merges_file_over_defaults(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("defaults:\n  orgId: acme\n", encoding="utf-8")

        config = UserConfig()
        config.load()

        assert config.get("defaults.orgId") == "acme"
        assert config.get("api.timeout") == DEFAULT_TIMEOUT

    def test_load_empty_file(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("", encoding="utf-8")

        assert UserConfig().load() == DEFAULT_CONFIG

    def test_load_invalid_yaml_raises(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("defaults: [unclosed\n", encoding="utf-8")

        with pytest.raises(CLIError, match="Could not parse"):
            UserConfig().load()

    def test_load_non_mapping_raises(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(CLIError, match="expected a mapping"):
            UserConfig().load()

    def test_get_dot_notation(self, config_dir):
        config = UserConfig()
        config.load()

        assert config.get("api.base_url") == DEFAULT_BASE_URL
        assert config.get("nonexistent.key", "fallback") == "fallback"
        assert config.get("api.timeout.deeper") is None

    def test_set_persists(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.orgId", "acme")

        reloaded = UserConfig()
        reloaded.load()
        assert reloaded.get("defaults.orgId") == "acme"

    def test_set_creates_intermediate_sections(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.label", "Prod")

        assert config.get("defaults.label") == "Prod"

    def test_explicit_config_dir(self, tmp_path):
        config = UserConfig(tmp_path / "elsewhere")
        config.load()
        config.set("defaults.orgId", "acme")

        assert (tmp_path / "elsewhere" / "settings.yaml").exists()


class TestSecrets:

    def test_api_key_goes_to_secrets_file(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.apiKey", API_KEY)

        with open(config_dir / "settings.yaml", encoding="utf-8") as f:
            settings = yaml.safe_load(f)
        with open(config_dir / "secrets.yaml", encoding="utf-8") as f:
            secrets = yaml.safe_load(f)

        assert "apiKey" not in settings["defaults"]
        assert secrets == {"defaults": {"apiKey": API_KEY}}

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_secrets_file_is_owner_only(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.apiKey", API_KEY)

        mode = stat.S_IMODE((config_dir / "secrets.yaml").stat().st_mode)
        assert mode == 0o600

    def test_secrets_merged_on_load(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.apiKey", API_KEY)

        reloaded = UserConfig()
        reloaded.load()
        assert reloaded.get("defaults.apiKey") == API_KEY

    def test_masked_hides_secret(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.apiKey", API_KEY)

        masked = config.masked()
        assert masked["defaults"]["apiKey"] == "***"
        assert config.get("defaults.apiKey") == API_KEY

    def test_masked_without_secret(self, config_dir):
        config = UserConfig()
        config.load()
        assert "apiKey" not in config.masked()["defaults"]

    def test_get_masked_hides_secret_below_section(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.apiKey", API_KEY)

        assert config.get_masked("defaults") == {"orgId": "", "apiKey": "***"}
        assert config.get_masked("defaults.apiKey") == "***"
        assert config.get_masked("api.timeout") == DEFAULT_TIMEOUT
        assert config.get_masked("nope", "fallback") == "fallback"

    def test_non_secret_save_does_not_leak_key(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.apiKey", API_KEY)
        config.set("defaults.orgId", "acme")

        with open(config_dir / "settings.yaml", encoding="utf-8") as f:
            assert API_KEY not in f.read()

    def test_is_secret_key(self):
        assert UserConfig.is_secret_key("defaults.apiKey") is True
        assert UserConfig.is_secret_key("defaults.orgId") is False


class TestValidation:

    def test_rejects_malformed_api_key(self, config_dir):
        config = UserConfig()
        config.load()
        with pytest.raises(CLIError, match="invalid api key"):
            config.set("defaults.apiKey", "nope")
        assert not (config_dir / "secrets.yaml").exists()

    def test_rejects_malformed_cert_id(self, config_dir):
        config = UserConfig()
        config.load()
        with pytest.raises(CLIError, match="invalid cert id"):
            config.set("defaults.certId", "nope")

    def test_accepts_valid_cert_id(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("defaults.certId", CRED_ID)
        assert config.get("defaults.certId") == CRED_ID

    @pytest.mark.parametrize("value", [0, -5, "30", True])
    def test_rejects_bad_timeout(self, config_dir, value):
        config = UserConfig()
        config.load()
        with pytest.raises(CLIError, match="timeout"):
            config.set("api.timeout", value)

    def test_rejects_plain_http_url(self, config_dir):
        config = UserConfig()
        config.load()
        with pytest.raises(CLIError, match="https://"):
            config.set("api.base_url", "http://insecure.example.com")


class TestDerivedSettings:

    def test_flag_defaults_drop_empty_values(self, config_dir):
        config = UserConfig()
        config.load()
        assert config.flag_defaults() == {}

        config.set("defaults.orgId", "acme")
        config.set("defaults.apiKey", API_KEY)
        assert config.flag_defaults() == {"orgId": "acme", "apiKey": API_KEY}

    def test_flag_defaults_stringify(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("defaults:\n  orgId: 1234\n", encoding="utf-8")

        config = UserConfig()
        config.load()
        assert config.flag_defaults() == {"orgId": "1234"}

    def test_api_settings(self, config_dir):
        config = UserConfig()
        config.load()
        config.set("api.timeout", 90)

        assert config.api_settings() == {"base_url": DEFAULT_BASE_URL, "timeout": 90}

    def test_api_settings_rejects_hand_edited_timeout(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("api:\n  timeout: abc\n", encoding="utf-8")

        config = UserConfig()
        config.load()
        with pytest.raises(CLIError, match="ucb config edit"):
            config.api_settings()

    def test_api_settings_accepts_numeric_string(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("api:\n  timeout: '45'\n", encoding="utf-8")

        config = UserConfig()
        config.load()
        assert config.api_settings()["timeout"] == 45


class TestSanitizeForYaml:

    def test_str_subclass_becomes_str(self):
        class Wrapped(str):
            pass

        result = _sanitize_for_yaml({"key": Wrapped("value")})
        assert type(result["key"]) is str
        yaml.safe_dump(result)

    def test_nested_lists(self):
        assert _sanitize_for_yaml({"a": [1, True, 1.5]}) == {"a": [1, True, 1.5]}
