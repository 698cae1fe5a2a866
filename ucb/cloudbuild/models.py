"""Cloud Build API resource types."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Certificate:
    """Signing certificate attached to an iOS credential."""

    team_id: str = ""
    cert_name: str = ""
    expiration: str = ""
    is_distribution: bool = False
    uploaded: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Certificate:
        data = data or {}
        return cls(
            team_id=data.get("teamId", ""),
            cert_name=data.get("certName", ""),
            expiration=data.get("expiration", ""),
            is_distribution=bool(data.get("isDistribution", False)),
            uploaded=data.get("uploaded", ""),
        )


@dataclass
class ProvisioningProfile:
    """Provisioning profile attached to an iOS credential."""

    team_id: str = ""
    bundle_id: str = ""
    expiration: str = ""
    is_enterprise_profile: bool = False
    type: str = ""
    num_devices: int = 0
    uploaded: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ProvisioningProfile:
        data = data or {}
        return cls(
            team_id=data.get("teamId", ""),
            bundle_id=data.get("bundleId", ""),
            expiration=data.get("expiration", ""),
            is_enterprise_profile=bool(data.get("isEnterpriseProfile", False)),
            type=data.get("type", ""),
            num_devices=int(data.get("numDevices", 0) or 0),
            uploaded=data.get("uploaded", ""),
        )


@dataclass
class Credential:
    """An iOS signing credential (certificate + provisioning profile)."""

    credential_id: str
    label: str = ""
    created: str = ""
    last_mod: str = ""
    certificate: Certificate = field(default_factory=Certificate)
    provisioning_profile: ProvisioningProfile = field(default_factory=ProvisioningProfile)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Credential:
        return cls(
            credential_id=data.get("credentialid", ""),
            label=data.get("label", ""),
            created=data.get("created", ""),
            last_mod=data.get("lastMod", ""),
            certificate=Certificate.from_dict(data.get("certificate")),
            provisioning_profile=ProvisioningProfile.from_dict(data.get("provisioningProfile")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict suitable for knack output."""
        return asdict(self)


@dataclass
class Project:
    """A Cloud Build project."""

    name: str
    project_id: str = ""
    guid: str = ""
    org_id: str = ""
    created: str = ""
    disabled: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        return cls(
            name=data.get("name", ""),
            project_id=data.get("projectid", ""),
            guid=data.get("guid", ""),
            org_id=data.get("orgid", ""),
            created=data.get("created", ""),
            disabled=bool(data.get("disabled", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
