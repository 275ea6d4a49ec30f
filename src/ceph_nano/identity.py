# -*- coding: utf-8 -*-
"""Cluster naming and container/image metadata lookups."""

import logging
from typing import Optional

from .config import Settings, get_settings
from .constant import (
    IMAGE_DIGEST_PREFIX,
    IMAGE_NOT_PRESENT,
    NAME_SEPARATOR,
    RELEASE_LABEL,
    UNKNOWN_IMAGE_RELEASE,
)
from .container_clients import BaseClient
from .enums import ImageField, InspectField
from .exception import ContainerInspectError, ImageNotFoundError
from .model import ClusterIdentity, ImageDetails

logger = logging.getLogger(__name__)


def _prefix(prefix: Optional[str]) -> str:
    if prefix is not None:
        return prefix
    return get_settings().CONTAINER_NAME_PREFIX


def resolve_container_name(
    logical_name: str,
    prefix: Optional[str] = None,
) -> str:
    """Namespace a cluster name, e.g. "mycluster" -> "ceph-nano-mycluster"."""
    return f"{_prefix(prefix)}{logical_name}"


def display_name(engine_name: str, prefix: Optional[str] = None) -> str:
    """
    Turn an engine-reported name back into the cluster name shown to users.

    Strips one leading separator, then the namespace prefix.
    """
    name = engine_name
    if name.startswith(NAME_SEPARATOR):
        name = name[len(NAME_SEPARATOR) :]
    namespace = _prefix(prefix)
    if name.startswith(namespace):
        name = name[len(namespace) :]
    return name


def is_cluster_name(engine_name: str, prefix: Optional[str] = None) -> bool:
    """Whether an engine-reported name belongs to the cluster namespace."""
    return engine_name.lstrip(NAME_SEPARATOR).startswith(_prefix(prefix))


def cluster_identity(
    logical_name: str,
    prefix: Optional[str] = None,
) -> ClusterIdentity:
    return ClusterIdentity(
        logical_name=logical_name,
        container_name=resolve_container_name(logical_name, prefix),
    )


def image_lookup_key(image_id: str) -> str:
    """Strip the digest scheme, "sha256:<id>" -> "<id>"."""
    if image_id.startswith(IMAGE_DIGEST_PREFIX):
        return image_id[len(IMAGE_DIGEST_PREFIX) :]
    return image_id


class IdentityResolver:
    """Reads container and image metadata from the engine, never cached."""

    def __init__(self, client: BaseClient, config: Optional[Settings] = None):
        self.client = client
        self.config = config or get_settings()

    def inspect_image(self, image_id: str, field: ImageField) -> str:
        """
        Look up one metadata field of an image.

        A missing image is not an error: listings must keep rendering rows
        for clusters whose image has been deleted, so a status message is
        returned instead. Any other engine failure propagates.
        """
        try:
            details = self.client.inspect_image(image_lookup_key(image_id))
        except ImageNotFoundError:
            logger.debug(f"Image {image_id} is not present")
            return IMAGE_NOT_PRESENT

        if field is ImageField.TAG:
            return self._tag(details)
        if field is ImageField.CREATED:
            return details.created
        if field is ImageField.RELEASE:
            return details.labels.get(RELEASE_LABEL) or UNKNOWN_IMAGE_RELEASE
        raise ValueError(f"Unknown image field: {field}")

    @staticmethod
    def _tag(details: ImageDetails) -> str:
        # The tag moves away when a newer image is pulled under the same
        # name, only the digest is left then
        if details.repo_tags:
            return ", ".join(details.repo_tags)
        return ", ".join(details.repo_digests)

    def image_tag(self, image_id: str) -> str:
        return self.inspect_image(image_id, ImageField.TAG)

    def image_created(self, image_id: str) -> str:
        return self.inspect_image(image_id, ImageField.CREATED)

    def image_release(self, image_id: str) -> str:
        return self.inspect_image(image_id, ImageField.RELEASE)

    def docker_inspect(self, container_name: str, field: InspectField) -> str:
        """
        Look up one field of an existing container.

        Callers must have checked the container exists; engine failures
        propagate as EngineError.
        """
        details = self.client.inspect_container(container_name)

        if field is InspectField.BINDS:
            if not details.binds:
                raise ContainerInspectError(container_name, field.value)
            return details.binds[0].split(":")[0]
        if field is InspectField.PORT_BINDINGS:
            if not details.env or "=" not in details.env[0]:
                raise ContainerInspectError(container_name, field.value)
            return details.env[0].split("=", 1)[1]
        if field is InspectField.IMAGE:
            return details.image
        raise ValueError(f"Unknown inspect field: {field}")

    def working_directory(self, container_name: str) -> str:
        return self.docker_inspect(container_name, InspectField.BINDS)

    def gateway_port(self, container_name: str) -> str:
        return self.docker_inspect(container_name, InspectField.PORT_BINDINGS)

    def container_image(self, container_name: str) -> str:
        return self.docker_inspect(container_name, InspectField.IMAGE)
