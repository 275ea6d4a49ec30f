# -*- coding: utf-8 -*-
"""Cluster lifecycle operations behind the ``cn`` commands."""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from .config import Settings, get_settings
from .constant import PORT_NOT_FOUND
from .container_clients import BaseClient, DockerClient
from .exception import (
    ClusterAlreadyRunningError,
    ClusterUnhealthyError,
    CredentialsError,
    EngineError,
    PortAllocationError,
    PurgeNotConfirmedError,
)
from .identity import (
    IdentityResolver,
    cluster_identity,
    display_name,
    is_cluster_name,
)
from .model import (
    ClusterIdentity,
    ClusterRow,
    PurgeOptions,
    PurgeResult,
    ReadinessSuccess,
    S3Credentials,
    StatusReport,
)
from .readiness import ReadinessOrchestrator
from .state import ClusterStateClassifier
from .utils.net_utils import select_advertise_address
from .utils.port_utils import allocate_gateway_port
from .utils.stream import decode_output

logger = logging.getLogger(__name__)


class ClusterManager:
    def __init__(
        self,
        client: Optional[BaseClient] = None,
        config: Optional[Settings] = None,
        orchestrator: Optional[ReadinessOrchestrator] = None,
    ):
        self.config = config or get_settings()
        self.client = client or DockerClient(self.config)
        self.resolver = IdentityResolver(self.client, self.config)
        self.classifier = ClusterStateClassifier(
            self.client,
            self.config.CONTAINER_NAME_PREFIX,
        )
        self.orchestrator = orchestrator or ReadinessOrchestrator(
            self.client,
            self.config,
            resolver=self.resolver,
        )

    def identity(self, logical_name: str) -> ClusterIdentity:
        return cluster_identity(
            logical_name,
            self.config.CONTAINER_NAME_PREFIX,
        )

    def list_clusters(self) -> List[ClusterRow]:
        """List every namespaced container, running or not."""
        prefix = self.config.CONTAINER_NAME_PREFIX
        rows = []
        for container in self.client.list_containers(all_containers=True):
            for name in container.names:
                if not is_cluster_name(name, prefix):
                    continue
                rows.append(
                    ClusterRow(
                        name=display_name(name, prefix),
                        state=container.state,
                        image_tag=self.resolver.image_tag(container.image_id),
                        image_release=self.resolver.image_release(
                            container.image_id,
                        ),
                        image_created=self.resolver.image_created(
                            container.image_id,
                        ),
                    ),
                )
        return rows

    def get_credentials(self, container_name: str) -> S3Credentials:
        """Read the first S3 key pair stored inside the container."""
        output = decode_output(
            self.client.exec_in_container(
                container_name,
                ["cat", self.config.USER_DETAILS_PATH],
            ),
        )
        try:
            first = json.loads(output)["Keys"][0]
            return S3Credentials(
                access_key=first["Access_key"],
                secret_key=first["Secret_key"],
            )
        except (ValueError, KeyError, IndexError, TypeError) as e:
            cluster = display_name(
                container_name,
                self.config.CONTAINER_NAME_PREFIX,
            )
            raise CredentialsError(
                cluster,
                f"{self.config.USER_DETAILS_PATH} is malformed ({e!r})",
            ) from e

    def get_health(self, container_name: str) -> str:
        return decode_output(
            self.client.exec_in_container(
                container_name,
                ["ceph", "health"],
            ),
        )

    def wait_until_ready(self, container_name: str) -> ReadinessSuccess:
        result = self.orchestrator.run(container_name)
        if not result.ok:
            raise ClusterUnhealthyError(result)
        return result

    def _report(
        self,
        identity: ClusterIdentity,
        ready: ReadinessSuccess,
    ) -> StatusReport:
        name = identity.container_name
        credentials = self.get_credentials(name)
        return StatusReport(
            cluster=identity.logical_name,
            health=self.get_health(name),
            endpoint=ready.endpoint,
            user=self.config.S3_USER,
            access_key=credentials.access_key,
            secret_key=credentials.secret_key,
            working_directory=self.resolver.working_directory(name),
        )

    def status(self, logical_name: str) -> StatusReport:
        """
        Report on a running cluster once it is fully up.

        Raises:
            ClusterNotFoundError: The cluster does not exist.
            ClusterNotRunningError: The cluster exists but has exited.
            ClusterUnhealthyError: A readiness phase timed out.
        """
        identity = self.identity(logical_name)
        self.classifier.require_exists(identity.container_name)
        self.classifier.require_running(identity.container_name)
        ready = self.wait_until_ready(identity.container_name)
        return self._report(identity, ready)

    def purge(self, logical_name: str, options: PurgeOptions) -> PurgeResult:
        """
        Remove a cluster, and its image when asked to.

        Removal is best effort: engine errors during removal are logged and
        otherwise ignored.
        """
        if not options.confirmed:
            raise PurgeNotConfirmedError()

        identity = self.identity(logical_name)
        name = identity.container_name
        self.classifier.require_exists(name)

        image = None
        if options.delete_image:
            image = self.resolver.container_image(name)

        logger.info(f"Purging cluster {logical_name}...")
        try:
            self.client.remove_container(
                name,
                force=True,
                remove_volumes=True,
                remove_links=False,
            )
        except EngineError as e:
            logger.debug(f"Ignoring failure to remove {name}: {e}")

        if image:
            logger.info(f"Removing container image {image}...")
            try:
                self.client.remove_image(
                    image,
                    force=True,
                    prune_children=True,
                )
            except EngineError as e:
                logger.debug(f"Ignoring failure to remove {image}: {e}")

        return PurgeResult(cluster=logical_name, image=image)

    def pull_image(
        self,
        image: Optional[str] = None,
        on_progress: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> bool:
        """
        Pull the cluster image unless it is already present.

        Returns:
            bool: True if the image was pulled.
        """
        ref = image or self.config.IMAGE_NAME
        if self.client.image_exists(ref):
            logger.debug(f"Image {ref} found locally.")
            return False

        for message in self.client.pull_image(ref):
            if "error" in message:
                raise EngineError(message["error"], {"image": ref})
            if on_progress is not None:
                on_progress(message)
        return True

    def start(
        self,
        logical_name: str,
        work_dir: Optional[str] = None,
        image: Optional[str] = None,
        on_pull_progress: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> StatusReport:
        """
        Start a cluster, creating it when it does not exist yet.

        Raises:
            ClusterAlreadyRunningError: Nothing to start.
            PortAllocationError: No free port for the S3 gateway.
            ClusterUnhealthyError: A readiness phase timed out.
        """
        identity = self.identity(logical_name)
        name = identity.container_name

        if self.classifier.is_running(name):
            raise ClusterAlreadyRunningError(logical_name)

        if self.classifier.is_exited(name):
            logger.info(f"Starting cluster {logical_name}...")
            self.client.start_container(name)
        else:
            ref = image or self.config.IMAGE_NAME
            self.pull_image(ref, on_progress=on_pull_progress)

            port = allocate_gateway_port(config=self.config)
            if port == PORT_NOT_FOUND:
                raise PortAllocationError(*self.config.PORT_RANGE)

            # The gateway port must stay the first entry, it is read back
            # from there by the status report
            environment = [
                f"RGW_CIVETWEB_PORT={port}",
                f"EXPOSED_IP={select_advertise_address()}",
                f"CEPH_DEMO_UID={self.config.S3_USER}",
                "NETWORK_AUTO_DETECT=4",
            ]
            logger.info(f"Running cluster {logical_name} on port {port}...")
            self.client.create_container(
                name=name,
                image=ref,
                environment=environment,
                port=int(port),
                work_dir=work_dir or self.config.DEFAULT_WORK_DIR,
            )

        ready = self.wait_until_ready(name)
        return self._report(identity, ready)

    def stop(self, logical_name: str) -> None:
        identity = self.identity(logical_name)
        self.classifier.require_exists(identity.container_name)
        self.classifier.require_running(identity.container_name)
        logger.info(f"Stopping cluster {logical_name}...")
        self.client.stop_container(identity.container_name)
