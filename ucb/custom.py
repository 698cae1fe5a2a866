"""Custom command implementations for ucb.

These functions are the handlers knack calls.  Each one maps to a
registered command in commands.py.

Remote commands follow the same pipeline: build an empty record, run the
global pass, build the authenticated service from the global values, run
the command pass with that service as the candidate source, then act.
"""

import json
import logging
import os
import shlex
import subprocess
import sys
from contextlib import contextmanager
from typing import Iterator

from knack.util import CLIError

from ucb.cloudbuild import CredentialsService, ProjectsService
from ucb.config import UserConfig
from ucb.forms import Prompter, populate, populate_global
from ucb.records import (
    DeleteCredentialArgs,
    GetCredentialArgs,
    ListCredentialsArgs,
    ListProjectsArgs,
    UpdateCredentialArgs,
    UploadCredentialArgs,
)

logger = logging.getLogger(__name__)


# ======================================================================
# Helpers
# ======================================================================

def _load_config() -> UserConfig:
    config = UserConfig()
    config.load()
    return config


def _get_prompter() -> Prompter:
    from ucb.ui.console import TerminalPrompter, console

    return TerminalPrompter(console=console)


def _collect_flags(config: UserConfig, **values) -> dict[str, str]:
    """Overlay the given argument values on the config defaults.

    Keys are external field names; ``None`` and empty values are dropped so
    the config default (or a prompt) fills them.
    """
    flags = config.flag_defaults()
    for name, value in values.items():
        if value:
            flags[name] = str(value)
    return flags


@contextmanager
def _credentials_form(record, flags: dict[str, str], config: UserConfig) -> Iterator[CredentialsService]:
    """Populate *record* and yield the service built from its global values.

    The service's HTTP session is closed when the block exits.
    """
    prompter = _get_prompter()
    populate_global(flags, record, prompter)

    with CredentialsService(record.api_key, record.org_id, **config.api_settings()) as service:
        populate(flags, record, prompter, resolver=service)
        yield service


# ======================================================================
# Credential Commands
# ======================================================================

def ucb_cred_get(cred_id=None, api_key=None, org_id=None):
    """Show one iOS credential."""
    config = _load_config()
    flags = _collect_flags(config, apiKey=api_key, orgId=org_id, credId=cred_id)

    record = GetCredentialArgs()
    with _credentials_form(record, flags, config) as service:
        return service.get_ios(record.cred_id).to_dict()


def ucb_cred_list(api_key=None, org_id=None):
    """List every iOS credential of the organization."""
    config = _load_config()
    flags = _collect_flags(config, apiKey=api_key, orgId=org_id)

    record = ListCredentialsArgs()
    with _credentials_form(record, flags, config) as service:
        return [cred.to_dict() for cred in service.list_ios()]


def ucb_cred_update(cert_id=None, label=None, cert_path=None, profile_path=None, cert_pass=None,
                    api_key=None, org_id=None):
    """Replace the files and label of an iOS credential."""
    config = _load_config()
    flags = _collect_flags(
        config,
        apiKey=api_key,
        orgId=org_id,
        certId=cert_id,
        label=label,
        certPath=cert_path,
        profilePath=profile_path,
        certPass=cert_pass,
    )

    record = UpdateCredentialArgs()
    with _credentials_form(record, flags, config) as service:
        cred = service.update_ios(
            record.cert_id,
            record.label,
            record.cert_path,
            record.profile_path,
            record.cert_pass,
        )
    return cred.to_dict()


def ucb_cred_upload(label=None, cert_path=None, profile_path=None, cert_pass=None, api_key=None, org_id=None):
    """Upload a new iOS credential."""
    config = _load_config()
    flags = _collect_flags(
        config,
        apiKey=api_key,
        orgId=org_id,
        label=label,
        certPath=cert_path,
        profilePath=profile_path,
        certPass=cert_pass,
    )

    record = UploadCredentialArgs()
    with _credentials_form(record, flags, config) as service:
        cred = service.upload_ios(record.label, record.cert_path, record.profile_path, record.cert_pass)
    return cred.to_dict()


def ucb_cred_delete(cert_id=None, api_key=None, org_id=None):
    """Delete an iOS credential."""
    from ucb.ui.console import console

    config = _load_config()
    flags = _collect_flags(config, apiKey=api_key, orgId=org_id, certId=cert_id)

    record = DeleteCredentialArgs()
    with _credentials_form(record, flags, config) as service:
        status = service.delete_ios(record.cert_id)
    console.print_success(f"Deleted credential {record.cert_id}")
    return {"credentialId": record.cert_id, "status": status}


# ======================================================================
# Project Commands
# ======================================================================

def ucb_project_list(api_key=None, org_id=None):
    """List the organization's projects."""
    config = _load_config()
    flags = _collect_flags(config, apiKey=api_key, orgId=org_id)

    record = ListProjectsArgs()
    prompter = _get_prompter()
    populate_global(flags, record, prompter)
    populate(flags, record, prompter)

    with ProjectsService(record.api_key, record.org_id, **config.api_settings()) as service:
        return [{"name": p.name, "id": p.guid} for p in service.list_all()]


# ======================================================================
# Config Commands
# ======================================================================

def ucb_config_show():
    """Display the configuration with secrets masked."""
    return _load_config().masked()


def ucb_config_get(key=None):
    """Get a single configuration value by dot-separated key."""
    if not key:
        raise CLIError("--key is required.")

    config = _load_config()
    value = config.get_masked(key)
    if value is None:
        raise CLIError(f"Key '{key}' not found in configuration.")

    return {"key": key, "value": value}


def ucb_config_set(key=None, value=None):
    """Set a configuration value."""
    if not key:
        raise CLIError("--key is required.")
    if value is None:
        raise CLIError("--value is required.")

    config = _load_config()

    # Field defaults are always strings; an all-digit API key must not become an int.
    if key.startswith("defaults."):
        config.set(key, value)
    else:
        try:
            config.set(key, json.loads(value))
        except (json.JSONDecodeError, TypeError):
            config.set(key, value)

    stored = config.get_masked(key)
    return {"key": key, "value": stored, "status": "updated"}


def _resolve_editor() -> list[str]:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if editor:
        return shlex.split(editor, posix=sys.platform != "win32")
    return ["notepad"] if sys.platform == "win32" else ["vim"]


def ucb_config_edit():
    """Open settings.yaml in the user's editor, creating it first if needed."""
    from ucb.ui.console import console

    config = UserConfig()
    if not config.exists():
        config.create_default()
        console.print_info(f"Created {config.config_path}")

    editor = _resolve_editor()
    logger.debug("Running: %s %s", " ".join(editor), config.config_path)
    try:
        result = subprocess.run([*editor, str(config.config_path)], check=False)
    except FileNotFoundError:
        raise CLIError(f"Editor '{editor[0]}' not found. Set $EDITOR to your preferred editor.")

    if result.returncode != 0:
        raise CLIError(f"Editor exited with status {result.returncode}.")

    # Surface YAML mistakes now rather than on the next command
    config.load()
    return {"file": str(config.config_path), "status": "saved"}
