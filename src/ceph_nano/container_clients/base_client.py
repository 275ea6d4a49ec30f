# -*- coding: utf-8 -*-
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

from ..exception import ImageNotFoundError
from ..model import ContainerDetails, ContainerObservation, ImageDetails


class BaseClient(ABC):
    @abstractmethod
    def list_containers(
        self,
        all_containers: bool = True,
    ) -> List[ContainerObservation]:
        """List containers, including stopped ones when requested."""

    @abstractmethod
    def inspect_container(self, name: str) -> ContainerDetails:
        """Get the bind mounts, environment and image of a container."""

    @abstractmethod
    def inspect_image(self, ref: str) -> ImageDetails:
        """
        Get the metadata of an image, raising ImageNotFoundError when the
        image is gone.
        """

    @abstractmethod
    def exec_in_container(self, name: str, cmd: List[str]) -> bytes:
        """
        Run a command inside a running container and return its raw
        stdout and stderr. The output may still carry stream frame headers.
        """

    @abstractmethod
    def container_logs(self, name: str) -> bytes:
        """Get the full log stream of a container."""

    @abstractmethod
    def remove_container(
        self,
        name: str,
        force: bool = False,
        remove_volumes: bool = False,
        remove_links: bool = False,
    ) -> None:
        """Remove a specified container."""

    @abstractmethod
    def remove_image(
        self,
        ref: str,
        force: bool = False,
        prune_children: bool = True,
    ) -> None:
        """Remove an image, optionally pruning untagged parents."""

    @abstractmethod
    def pull_image(self, ref: str) -> Iterator[Dict[str, Any]]:
        """Pull an image, yielding decoded progress messages."""

    @abstractmethod
    def create_container(
        self,
        name: str,
        image: str,
        environment: List[str],
        port: int,
        work_dir: str,
    ) -> str:
        """Create and start a container, returning its ID."""

    @abstractmethod
    def start_container(self, name: str) -> None:
        """Start a stopped container."""

    @abstractmethod
    def stop_container(self, name: str, timeout: Optional[int] = None):
        """Stop a running container."""

    def image_exists(self, ref: str) -> bool:
        """Check whether an image is present locally."""
        try:
            self.inspect_image(ref)
        except ImageNotFoundError:
            return False
        return True
