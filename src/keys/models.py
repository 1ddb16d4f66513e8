"""Config file models."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .authorized_items import AuthorizedItems
from .identity import Identities


class HostEntry(BaseModel):
    """One authorized_keys file on a host, reached as ``user``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: Annotated[str, Field(min_length=1)]
    path: Annotated[str, Field(min_length=1)]
    authorized_keys: AuthorizedItems = Field(default_factory=AuthorizedItems)

    @field_validator("authorized_keys", mode="before")
    @classmethod
    def parse_items(cls, v: Any) -> AuthorizedItems:
        if v is None:
            return AuthorizedItems()
        if isinstance(v, AuthorizedItems):
            return v
        if not isinstance(v, list):
            raise ValueError("authorized_keys must be a list")
        return AuthorizedItems.parse_all(v)

    def to_config(self) -> dict:
        return {"user": self.user, "path": self.path, "authorized_keys": self.authorized_keys.to_strings()}


class FleetConfig(BaseModel):
    """The whole config file: hosts and their targets, plus identities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    hosts: dict[str, list[HostEntry]] = Field(default_factory=dict)
    identities: Identities = Field(default_factory=Identities)

    @field_validator("hosts", mode="before")
    @classmethod
    def default_hosts(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("identities", mode="before")
    @classmethod
    def parse_identities(cls, v: Any) -> Identities:
        if v is None:
            return Identities()
        if isinstance(v, Identities):
            return v
        if not isinstance(v, dict):
            raise ValueError("identities must be a mapping of name to key list")
        for name, lines in v.items():
            if not isinstance(lines, list):
                raise ValueError(f"identity {name} must be a list of keys")
        return Identities.from_config(v)

    def targets(self) -> list[tuple[str, HostEntry]]:
        """Every (hostname, entry) pair in file order."""
        return [(hostname, entry) for hostname, entries in self.hosts.items() for entry in entries]

    def to_config(self) -> dict:
        data: dict = {
            "hosts": {hostname: [entry.to_config() for entry in entries] for hostname, entries in self.hosts.items()},
        }
        if len(self.identities):
            data["identities"] = self.identities.to_config()
        return data
