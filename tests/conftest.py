# -*- coding: utf-8 -*-
# pylint: disable=redefined-outer-name
from typing import Dict, List, Optional

import pytest

from ceph_nano.config import Settings, reset_settings
from ceph_nano.container_clients import BaseClient
from ceph_nano.exception import EngineError, ImageNotFoundError
from ceph_nano.model import (
    ContainerDetails,
    ContainerObservation,
    ImageDetails,
)


class FakeEngineClient(BaseClient):
    """In-memory engine recording every mutating call."""

    def __init__(self):
        self.containers: List[ContainerObservation] = []
        self.details: Dict[str, ContainerDetails] = {}
        self.images: Dict[str, ImageDetails] = {}
        self.logs: Dict[str, List[bytes]] = {}
        self.exec_outputs: Dict[str, bytes] = {}
        self.remove_container_error: Optional[Exception] = None
        self.remove_image_error: Optional[Exception] = None
        self.pull_messages: List[dict] = [{"status": "Downloading"}]
        self.calls: List[tuple] = []

    def add_container(self, name, state="running", image_id="sha256:abc"):
        self.containers.append(
            ContainerObservation(
                names=[f"/{name}"],
                state=state,
                image_id=image_id,
            ),
        )

    def list_containers(self, all_containers=True):
        if all_containers:
            return list(self.containers)
        return [c for c in self.containers if c.state == "running"]

    def inspect_container(self, name):
        if name not in self.details:
            raise EngineError(f"No such container: {name}")
        return self.details[name]

    def inspect_image(self, ref):
        if ref not in self.images:
            raise ImageNotFoundError(ref)
        return self.images[ref]

    def exec_in_container(self, name, cmd):
        self.calls.append(("exec", name, tuple(cmd)))
        return self.exec_outputs.get(" ".join(cmd), b"")

    def container_logs(self, name):
        # Each call pops the next log snapshot, the last one sticks
        snapshots = self.logs.get(name) or [b""]
        if len(snapshots) > 1:
            return snapshots.pop(0)
        return snapshots[0]

    def remove_container(
        self,
        name,
        force=False,
        remove_volumes=False,
        remove_links=False,
    ):
        self.calls.append(
            ("remove_container", name, force, remove_volumes, remove_links),
        )
        if self.remove_container_error:
            raise self.remove_container_error

    def remove_image(self, ref, force=False, prune_children=True):
        self.calls.append(("remove_image", ref, force, prune_children))
        if self.remove_image_error:
            raise self.remove_image_error

    def pull_image(self, ref):
        self.calls.append(("pull_image", ref))
        yield from self.pull_messages

    def create_container(self, name, image, environment, port, work_dir):
        self.calls.append(
            (
                "create_container",
                name,
                image,
                tuple(environment),
                port,
                work_dir,
            ),
        )
        return "container-id"

    def start_container(self, name):
        self.calls.append(("start_container", name))

    def stop_container(self, name, timeout=None):
        self.calls.append(("stop_container", name))

    def called(self, action):
        return [c for c in self.calls if c[0] == action]


@pytest.fixture
def fake_client():
    return FakeEngineClient()


@pytest.fixture
def settings():
    return Settings(
        CONTAINER_NAME_PREFIX="ceph-nano-",
        INTERNAL_HEALTH_TIMEOUT=60,
        EXTERNAL_HEALTH_TIMEOUT=30,
        POLL_INTERVAL=1.0,
    )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep the cached settings and CN_ environment out of every test."""
    monkeypatch.delenv("CN_CONTAINER_NAME_PREFIX", raising=False)
    reset_settings()
    yield
    reset_settings()
