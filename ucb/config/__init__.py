"""User configuration management.

Settings live in ``~/.ucb/settings.yaml`` (the directory can be moved with
``UCB_CONFIG_DIR``).  Values under ``defaults`` are used as flag defaults
for every command, keyed by the field's external name::

    defaults:
      orgId: my-org
    api:
      base_url: https://build-api.cloud.unity3d.com/api/v1
      timeout: 30

The API key is sensitive and is written to a separate ``secrets.yaml``
next to the settings file.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from knack.util import CLIError

from ucb.cloudbuild.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ucb.forms import ValidationFailed
from ucb.forms import validators

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "UCB_CONFIG_DIR"

# Keys whose values belong in the secrets file.
SECRET_KEY_PREFIXES = ("defaults.apiKey",)

# Config keys checked with the same validator the prompt would use.
_FIELD_VALIDATED_KEYS = {
    "defaults.apiKey": "apiKey",
    "defaults.certId": "certId",
}

DEFAULT_CONFIG = {
    "defaults": {
        "orgId": "",
    },
    "api": {
        "base_url": DEFAULT_BASE_URL,
        "timeout": DEFAULT_TIMEOUT,
    },
}


def get_config_dir() -> Path:
    """Return the directory holding settings.yaml and secrets.yaml."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".ucb"


def _sanitize_for_yaml(data: Any) -> Any:
    """Recursively convert values to plain Python types for safe YAML.

    knack wraps argument defaults in ``knack.validators.DefaultStr`` (a
    *str* subclass) which ``yaml.safe_dump`` refuses to represent.
    """
    if isinstance(data, dict):
        return {str(k): _sanitize_for_yaml(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_sanitize_for_yaml(item) for item in data]
    # bool before int (bool is an int subclass)
    if isinstance(data, bool):
        return bool(data)
    if isinstance(data, int):
        return int(data)
    if isinstance(data, float):
        return float(data)
    if isinstance(data, str):
        return str(data)
    return data


class UserConfig:
    """Manages the user's settings.yaml and secrets.yaml.

    Provides dot-notation get/set for nested values.  A missing settings
    file is not an error: every value then falls back to ``DEFAULT_CONFIG``.
    """

    CONFIG_FILENAME = "settings.yaml"
    SECRETS_FILENAME = "secrets.yaml"

    def __init__(self, config_dir: str | Path | None = None):
        self.config_dir = Path(config_dir) if config_dir else get_config_dir()
        self.config_path = self.config_dir / self.CONFIG_FILENAME
        self.secrets_path = self.config_dir / self.SECRETS_FILENAME
        self._config: dict = copy.deepcopy(DEFAULT_CONFIG)
        self._secrets: dict = {}

    # ------------------------------------------------------------------ #
    #  Persistence                                                        #
    # ------------------------------------------------------------------ #

    def load(self) -> dict:
        """Load settings (and secrets if present) over the defaults.

        Returns:
            Merged config dict.

        Raises:
            CLIError if a file exists but is not valid YAML.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._secrets = {}

        if self.config_path.exists():
            self._apply_overrides_to(self._config, self._read_yaml(self.config_path))

        if self.secrets_path.exists():
            self._secrets = self._read_yaml(self.secrets_path)
            self._apply_overrides_to(self._config, self._secrets)

        return self._config

    def save(self):
        """Persist the non-secret configuration to settings.yaml."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._write_yaml(self.config_path, self._strip_secrets(self._config))
        logger.debug("Configuration saved to %s", self.config_path)

    def save_secrets(self):
        """Persist secrets to secrets.yaml, readable only by the owner."""
        if not self._secrets:
            return

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._write_yaml(self.secrets_path, self._secrets)
        try:
            os.chmod(self.secrets_path, 0o600)
        except OSError as exc:
            logger.debug("Could not restrict permissions on %s: %s", self.secrets_path, exc)

        logger.debug("Secrets saved to %s", self.secrets_path)

    def create_default(self) -> dict:
        """Write a settings file containing the defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._secrets = {}
        self.save()
        return self._config

    def exists(self) -> bool:
        return self.config_path.exists()

    # ------------------------------------------------------------------ #
    #  Access                                                             #
    # ------------------------------------------------------------------ #

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-separated key.

        Examples:
            config.get("defaults.orgId")
            config.get("api.timeout")
        """
        return self._lookup(self._config, key, default)

    def get_masked(self, key: str, default: Any = None) -> Any:
        """Like :meth:`get`, but secrets anywhere below *key* read as ``***``."""
        return self._lookup(self.masked(), key, default)

    def set(self, key: str, value: Any):
        """Validate and persist a value.

        Secret keys are routed to secrets.yaml.
        """
        self._validate_config_value(key, value)

        self._set_nested(self._config, key, value)

        if self.is_secret_key(key):
            self._set_nested(self._secrets, key, value)
            self.save()
            self.save_secrets()
        else:
            self.save()

    def flag_defaults(self) -> dict[str, str]:
        """Return the ``defaults`` section as a flag mapping (empty values dropped)."""
        defaults = self.get("defaults", {}) or {}
        return {str(k): str(v) for k, v in defaults.items() if v not in (None, "")}

    def api_settings(self) -> dict[str, Any]:
        """Return keyword arguments for constructing a Cloud Build client.

        Raises:
            CLIError if ``api.timeout`` was edited into something that is not
            a number.
        """
        raw_timeout = self.get("api.timeout") or DEFAULT_TIMEOUT
        try:
            timeout = int(raw_timeout)
        except (TypeError, ValueError):
            raise CLIError(
                f"Invalid api.timeout '{raw_timeout}' in {self.config_path}: expected a number of seconds.\n"
                "Run 'ucb config edit' to fix it."
            ) from None
        return {
            "base_url": self.get("api.base_url") or None,
            "timeout": timeout,
        }

    def to_dict(self) -> dict:
        """Return a deep copy of the merged config."""
        return copy.deepcopy(self._config)

    def masked(self) -> dict:
        """Return the merged config with secret values replaced by ``***``."""
        result = self.to_dict()
        for prefix in SECRET_KEY_PREFIXES:
            parts = prefix.split(".")
            node = result
            for part in parts[:-1]:
                if isinstance(node, dict) and part in node:
                    node = node[part]
                else:
                    break
            else:
                leaf = parts[-1]
                if isinstance(node, dict) and node.get(leaf):
                    node[leaf] = "***"
        return result

    @staticmethod
    def is_secret_key(key: str) -> bool:
        """Return True if *key* should be stored in the secrets file."""
        return any(key.startswith(prefix) for prefix in SECRET_KEY_PREFIXES)

    # ------------------------------------------------------------------ #
    #  Validation                                                         #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate_config_value(key: str, value: Any):
        """Reject values that would only fail later, at request time."""
        field_name = _FIELD_VALIDATED_KEYS.get(key)
        if field_name:
            try:
                validators.lookup(field_name)(value)
            except ValidationFailed as exc:
                raise CLIError(f"Cannot set '{key}': {exc}") from exc

        if key == "api.timeout":
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise CLIError(f"Cannot set '{key}': timeout must be a positive number of seconds.")

        if key == "api.base_url":
            if not isinstance(value, str) or not value.startswith("https://"):
                raise CLIError(f"Cannot set '{key}': the API URL must start with https://")

    # ------------------------------------------------------------------ #
    #  Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _read_yaml(path: Path) -> dict:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise CLIError(f"Could not parse {path}: {exc}\nRun 'ucb config edit' to fix it.") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CLIError(f"Could not parse {path}: expected a mapping at the top level.")
        return data

    @staticmethod
    def _write_yaml(path: Path, data: dict):
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                _sanitize_for_yaml(data),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    @staticmethod
    def _apply_overrides_to(base: dict, overlay: dict):
        """Recursively merge *overlay* into *base*."""

        def merge(b: dict, o: dict):
            for key, value in o.items():
                if isinstance(value, dict) and isinstance(b.get(key), dict):
                    merge(b[key], value)
                else:
                    b[key] = value

        merge(base, overlay)

    @staticmethod
    def _lookup(data: dict, key: str, default: Any) -> Any:
        current = data
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    @staticmethod
    def _set_nested(target: dict, key: str, value: Any):
        """Set a dot-separated *key* in *target*, creating intermediate dicts."""
        parts = key.split(".")
        current = target
        for part in parts[:-1]:
            if part not in current or not isinstance(current[part], dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def _strip_secrets(self, config: dict) -> dict:
        """Return a deep copy of *config* with secret leaf values removed."""
        clean = copy.deepcopy(config)
        for prefix in SECRET_KEY_PREFIXES:
            parts = prefix.split(".")
            node = clean
            for part in parts[:-1]:
                if isinstance(node, dict) and part in node:
                    node = node[part]
                else:
                    break
            else:
                if isinstance(node, dict):
                    node.pop(parts[-1], None)
        return clean
