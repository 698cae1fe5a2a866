"""Project listing."""

from ucb.cloudbuild.client import CloudBuildClient
from ucb.cloudbuild.models import Project


class ProjectsService(CloudBuildClient):
    """Read-only access to the organization's projects."""

    def list_all(self) -> list[Project]:
        data = self.get_json(self.org_url("projects")) or []
        return [Project.from_dict(item) for item in data]
