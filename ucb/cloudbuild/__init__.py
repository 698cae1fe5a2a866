"""Unity Cloud Build REST API client."""

from ucb.cloudbuild.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, CloudBuildClient, CloudBuildError
from ucb.cloudbuild.credentials import CredentialsService
from ucb.cloudbuild.models import Certificate, Credential, Project, ProvisioningProfile
from ucb.cloudbuild.projects import ProjectsService

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "Certificate",
    "CloudBuildClient",
    "CloudBuildError",
    "Credential",
    "CredentialsService",
    "Project",
    "ProjectsService",
    "ProvisioningProfile",
]
