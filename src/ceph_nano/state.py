# -*- coding: utf-8 -*-
import logging
from typing import Optional

from .constant import (
    CONTAINER_STATE_EXITED,
    CONTAINER_STATE_RUNNING,
    NAME_SEPARATOR,
)
from .container_clients import BaseClient
from .exception import ClusterNotFoundError, ClusterNotRunningError
from .identity import display_name

logger = logging.getLogger(__name__)


class ClusterStateClassifier:
    """Answers existence and run-state questions against the engine."""

    def __init__(self, client: BaseClient, prefix: Optional[str] = None):
        self.client = client
        self.prefix = prefix

    def container_state(self, container_name: str, all_containers=True):
        """
        Get the engine state of a container, or None if it is not listed.
        """
        wanted = {container_name, f"{NAME_SEPARATOR}{container_name}"}
        for container in self.client.list_containers(
            all_containers=all_containers,
        ):
            if wanted.intersection(container.names):
                return container.state
        return None

    def exists(self, container_name: str) -> bool:
        return self.container_state(container_name) in (
            CONTAINER_STATE_RUNNING,
            CONTAINER_STATE_EXITED,
        )

    def is_running(self, container_name: str) -> bool:
        return self.container_state(container_name) == CONTAINER_STATE_RUNNING

    def is_exited(self, container_name: str) -> bool:
        return self.container_state(container_name) == CONTAINER_STATE_EXITED

    def require_exists(self, container_name: str) -> None:
        if not self.exists(container_name):
            logger.debug(f"Container {container_name} does not exist")
            raise ClusterNotFoundError(
                display_name(container_name, self.prefix),
            )

    def require_running(self, container_name: str) -> None:
        if self.is_exited(container_name):
            logger.debug(f"Container {container_name} has exited")
            raise ClusterNotRunningError(
                display_name(container_name, self.prefix),
            )
