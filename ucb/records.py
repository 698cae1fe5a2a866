"""Result records for each remote command.

One record class per command; each invocation fills a fresh instance.
"""

from dataclasses import dataclass

from ucb.forms import PromptType, form_field


@dataclass
class GlobalArgs:
    """Fields every remote command needs before it can talk to the API."""

    api_key: str = form_field("apiKey", is_global=True)
    org_id: str = form_field("orgId", is_global=True)


@dataclass
class GetCredentialArgs(GlobalArgs):
    cred_id: str = form_field("credId", prompt=PromptType.IDENTIFIER_SELECT)


@dataclass
class ListCredentialsArgs(GlobalArgs):
    pass


@dataclass
class UpdateCredentialArgs(GlobalArgs):
    cert_id: str = form_field("certId", prompt=PromptType.IDENTIFIER_SELECT)
    label: str = form_field("label")
    cert_path: str = form_field("certPath", prompt=PromptType.FILE_PATH)
    profile_path: str = form_field("profilePath", prompt=PromptType.FILE_PATH)
    cert_pass: str = form_field("certPass", prompt=PromptType.PASSWORD)


@dataclass
class UploadCredentialArgs(GlobalArgs):
    label: str = form_field("label")
    cert_path: str = form_field("certPath", prompt=PromptType.FILE_PATH)
    profile_path: str = form_field("profilePath", prompt=PromptType.FILE_PATH)
    cert_pass: str = form_field("certPass", prompt=PromptType.PASSWORD)


@dataclass
class DeleteCredentialArgs(GlobalArgs):
    cert_id: str = form_field("certId", prompt=PromptType.IDENTIFIER_SELECT)


@dataclass
class ListProjectsArgs(GlobalArgs):
    pass
