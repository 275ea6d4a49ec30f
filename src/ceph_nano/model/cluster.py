# -*- coding: utf-8 -*-
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClusterIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    logical_name: str = Field(
        ...,
        description="Cluster name as given on the command line",
    )
    container_name: str = Field(
        ...,
        description="Namespaced name used to address the engine",
    )


class ContainerObservation(BaseModel):
    """One container as reported by a list call. Never cached."""

    names: List[str] = Field(
        default_factory=list,
        description="Names reported by the engine, with leading separator",
    )
    state: str = Field(
        "",
        description="Engine state, e.g. 'running' or 'exited'",
    )
    image_id: str = Field(
        "",
        description="Image identifier, usually 'sha256:<id>'",
    )


class ContainerDetails(BaseModel):
    binds: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)
    image: str = ""

    @classmethod
    def from_attrs(cls, attrs: dict) -> "ContainerDetails":
        host_config = attrs.get("HostConfig") or {}
        config = attrs.get("Config") or {}
        return cls(
            binds=host_config.get("Binds") or [],
            env=config.get("Env") or [],
            image=config.get("Image") or "",
        )


class ClusterRow(BaseModel):
    name: str
    state: str
    image_tag: str
    image_release: str
    image_created: str


class S3Credentials(BaseModel):
    access_key: str
    secret_key: str


class StatusReport(BaseModel):
    cluster: str
    health: str
    endpoint: str
    user: str
    access_key: str
    secret_key: str
    working_directory: str

    def render(self) -> str:
        return (
            f"\n{self.health} is the Ceph status \n"
            f"S3 object server address is: {self.endpoint}\n"
            f"S3 user is: {self.user} \n"
            f"S3 access key is: {self.access_key}\n"
            f"S3 secret key is: {self.secret_key}\n"
            f"Your working directory is: {self.working_directory}\n"
        )


class PurgeOptions(BaseModel):
    """Flags of a purge request, fixed once parsed."""

    model_config = ConfigDict(frozen=True)

    confirmed: bool = Field(
        False,
        description="The user acknowledged the purge is destructive",
    )
    delete_image: bool = Field(
        False,
        description="Also remove the image backing the cluster",
    )


class PurgeResult(BaseModel):
    cluster: str
    image: Optional[str] = None
