# -*- coding: utf-8 -*-
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import docker
from docker.utils import parse_repository_tag

from .base_client import BaseClient
from ..config import Settings, get_settings
from ..exception import EngineError, ImageNotFoundError
from ..model import ContainerDetails, ContainerObservation, ImageDetails


logger = logging.getLogger(__name__)


@contextmanager
def _engine_call(action: str):
    """Surface any docker SDK failure as an EngineError, verbatim."""
    try:
        yield
    except docker.errors.DockerException as e:
        logger.debug(f"Engine call failed while {action}: {e}")
        raise EngineError(str(e), {"action": action}) from e


class DockerClient(BaseClient):
    def __init__(self, config: Optional[Settings] = None, client=None):
        self.config = config or get_settings()

        if client is not None:
            self.client = client
            return

        kwargs = {}
        if self.config.ENGINE_TIMEOUT:
            kwargs["timeout"] = self.config.ENGINE_TIMEOUT
        try:
            self.client = docker.from_env(**kwargs)
        except docker.errors.DockerException as e:
            raise EngineError(
                f"Docker client initialization failed: {str(e)}\n"
                "Solutions:\n"
                "• Ensure Docker is running\n"
                "• Check Docker permissions\n"
                "• For Colima: "
                "export DOCKER_HOST=unix://$HOME/.colima/docker.sock",
            ) from e

    def list_containers(
        self,
        all_containers: bool = True,
    ) -> List[ContainerObservation]:
        with _engine_call("listing containers"):
            containers = self.client.api.containers(all=all_containers)
        return [
            ContainerObservation(
                names=c.get("Names") or [],
                state=c.get("State") or "",
                image_id=c.get("ImageID") or "",
            )
            for c in containers
        ]

    def inspect_container(self, name: str) -> ContainerDetails:
        with _engine_call(f"inspecting container {name}"):
            attrs = self.client.api.inspect_container(name)
        return ContainerDetails.from_attrs(attrs)

    def inspect_image(self, ref: str) -> ImageDetails:
        try:
            attrs = self.client.api.inspect_image(ref)
        except docker.errors.NotFound as e:
            raise ImageNotFoundError(ref) from e
        except docker.errors.DockerException as e:
            raise EngineError(str(e), {"image": ref}) from e
        return ImageDetails.from_attrs(attrs)

    def exec_in_container(self, name: str, cmd: List[str]) -> bytes:
        with _engine_call(f"running {' '.join(cmd)} in {name}"):
            exec_id = self.client.api.exec_create(
                name,
                cmd,
                stdout=True,
                stderr=True,
                tty=False,
            )
            output = self.client.api.exec_start(
                exec_id,
                detach=False,
                tty=False,
                stream=False,
            )
        return output or b""

    def container_logs(self, name: str) -> bytes:
        with _engine_call(f"reading logs of {name}"):
            return self.client.api.logs(name, stdout=True, stderr=True)

    def remove_container(
        self,
        name: str,
        force: bool = False,
        remove_volumes: bool = False,
        remove_links: bool = False,
    ) -> None:
        with _engine_call(f"removing container {name}"):
            self.client.api.remove_container(
                name,
                v=remove_volumes,
                link=remove_links,
                force=force,
            )

    def remove_image(
        self,
        ref: str,
        force: bool = False,
        prune_children: bool = True,
    ) -> None:
        with _engine_call(f"removing image {ref}"):
            self.client.api.remove_image(
                ref,
                force=force,
                noprune=not prune_children,
            )

    def pull_image(self, ref: str) -> Iterator[Dict[str, Any]]:
        repository, tag = parse_repository_tag(ref)
        logger.info(
            f"Attempting to pull: {ref}, it might take several minutes.",
        )
        with _engine_call(f"pulling image {ref}"):
            yield from self.client.api.pull(
                repository,
                tag=tag or "latest",
                stream=True,
                decode=True,
            )

    def create_container(
        self,
        name: str,
        image: str,
        environment: List[str],
        port: int,
        work_dir: str,
    ) -> str:
        with _engine_call(f"creating container {name}"):
            container = self.client.containers.run(
                image,
                name=name,
                detach=True,
                environment=environment,
                ports={f"{port}/tcp": ("0.0.0.0", port)},
                volumes={work_dir: {"bind": "/tmp", "mode": "rw"}},
            )
        logger.debug(f"Created container {name} ({container.id})")
        return container.id

    def start_container(self, name: str) -> None:
        with _engine_call(f"starting container {name}"):
            self.client.api.start(name)

    def stop_container(self, name: str, timeout: Optional[int] = None):
        with _engine_call(f"stopping container {name}"):
            self.client.api.stop(name, timeout=timeout)
