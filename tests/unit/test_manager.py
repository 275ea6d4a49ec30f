# -*- coding: utf-8 -*-
# pylint: disable=redefined-outer-name, protected-access
"""
Unit tests for ClusterManager.
"""
import ipaddress
import json
from unittest.mock import MagicMock, patch

import pytest

from ceph_nano.config import Settings
from ceph_nano.enums import ReadinessPhase
from ceph_nano.exception import (
    ClusterAlreadyRunningError,
    ClusterNotFoundError,
    ClusterNotRunningError,
    ClusterUnhealthyError,
    CredentialsError,
    EngineError,
    PortAllocationError,
    PurgeNotConfirmedError,
)
from ceph_nano.manager import ClusterManager
from ceph_nano.model import (
    ContainerDetails,
    ImageDetails,
    PurgeOptions,
    ReadinessSuccess,
    ReadinessTimeout,
)

NAME = "ceph-nano-a"
USER_DETAILS = json.dumps(
    {"Keys": [{"Access_key": "AK1", "Secret_key": "SK1"}, {}]},
).encode()


@pytest.fixture
def orchestrator():
    orchestrator = MagicMock()
    orchestrator.run.return_value = ReadinessSuccess(
        container_name=NAME,
        endpoint="http://10.0.0.5:8001",
        internal_attempts=1,
        external_attempts=1,
    )
    return orchestrator


@pytest.fixture
def manager(fake_client, settings, orchestrator):
    return ClusterManager(fake_client, settings, orchestrator=orchestrator)


@pytest.fixture
def running_cluster(fake_client):
    fake_client.add_container(NAME, state="running")
    fake_client.details[NAME] = ContainerDetails(
        binds=["/srv/data:/tmp"],
        env=["RGW_CIVETWEB_PORT=8001"],
        image="img:v1",
    )
    fake_client.exec_outputs["cat /nano_user_details"] = USER_DETAILS
    fake_client.exec_outputs["ceph health"] = b"HEALTH_OK\n"


class TestListClusters:
    """Test ClusterManager.list_clusters()."""

    def test_filters_on_prefix(self, fake_client, orchestrator):
        fake_client.add_container("ns-a", image_id="sha256:abc")
        fake_client.add_container("other-b", image_id="sha256:abc")
        fake_client.images["abc"] = ImageDetails(
            repo_tags=["ceph/daemon:latest-nano"],
            created="2024-05-01",
            labels={"RELEASE": "v0.4"},
        )
        manager = ClusterManager(
            fake_client,
            Settings(CONTAINER_NAME_PREFIX="ns-"),
            orchestrator=orchestrator,
        )

        rows = manager.list_clusters()

        assert len(rows) == 1
        assert rows[0].name == "a"
        assert rows[0].state == "running"
        assert rows[0].image_tag == "ceph/daemon:latest-nano"
        assert rows[0].image_release == "v0.4"
        assert rows[0].image_created == "2024-05-01"

    def test_lists_stopped_clusters(self, fake_client, manager):
        fake_client.add_container(NAME, state="exited")

        rows = manager.list_clusters()

        assert [row.state for row in rows] == ["exited"]

    def test_missing_image_keeps_row(self, fake_client, manager):
        fake_client.add_container(NAME, image_id="sha256:gone")

        rows = manager.list_clusters()

        assert rows[0].image_tag.startswith("image is not present")


class TestStatus:
    """Test ClusterManager.status()."""

    @pytest.mark.usefixtures("running_cluster")
    def test_report(self, manager, orchestrator):
        report = manager.status("a")

        orchestrator.run.assert_called_once_with(NAME)
        assert report.cluster == "a"
        assert report.health == "HEALTH_OK"
        assert report.endpoint == "http://10.0.0.5:8001"
        assert report.user == "nano"
        assert report.access_key == "AK1"
        assert report.secret_key == "SK1"
        assert report.working_directory == "/srv/data"

    def test_render(self, manager, running_cluster):
        # pylint: disable=unused-argument
        rendered = manager.status("a").render()

        assert "HEALTH_OK is the Ceph status" in rendered
        assert "S3 object server address is: http://10.0.0.5:8001" in rendered
        assert "S3 access key is: AK1" in rendered
        assert "Your working directory is: /srv/data" in rendered

    def test_absent_cluster(self, manager, orchestrator):
        with pytest.raises(ClusterNotFoundError):
            manager.status("a")

        orchestrator.run.assert_not_called()

    def test_exited_cluster_never_polls(
        self,
        fake_client,
        manager,
        orchestrator,
    ):
        fake_client.add_container(NAME, state="exited")

        with pytest.raises(ClusterNotRunningError):
            manager.status("a")

        orchestrator.run.assert_not_called()
        assert not fake_client.called("exec")

    @pytest.mark.usefixtures("running_cluster")
    def test_readiness_timeout(self, fake_client, manager, orchestrator):
        timeout = ReadinessTimeout(
            container_name=NAME,
            phase=ReadinessPhase.INTERNAL,
            message="never reached a clean state",
            diagnostic_log="boot log",
            attempts=60,
        )
        orchestrator.run.return_value = timeout

        with pytest.raises(ClusterUnhealthyError) as exc_info:
            manager.status("a")

        assert exc_info.value.timeout is timeout
        assert exc_info.value.exit_code == 1
        assert not fake_client.called("exec")

    @pytest.mark.usefixtures("running_cluster")
    def test_malformed_credentials(self, fake_client, manager):
        fake_client.exec_outputs["cat /nano_user_details"] = b"{}"

        with pytest.raises(CredentialsError):
            manager.status("a")


class TestPurge:
    """Test ClusterManager.purge()."""

    @pytest.mark.usefixtures("running_cluster")
    def test_requires_confirmation(self, fake_client, manager):
        with pytest.raises(PurgeNotConfirmedError) as exc_info:
            manager.purge("a", PurgeOptions(delete_image=True))

        assert exc_info.value.exit_code == 1
        assert not fake_client.called("remove_container")
        assert not fake_client.called("remove_image")

    @pytest.mark.usefixtures("running_cluster")
    def test_removes_container_only(self, fake_client, manager):
        result = manager.purge("a", PurgeOptions(confirmed=True))

        assert fake_client.called("remove_container") == [
            ("remove_container", NAME, True, True, False),
        ]
        assert not fake_client.called("remove_image")
        assert result.cluster == "a"
        assert result.image is None

    @pytest.mark.usefixtures("running_cluster")
    def test_removes_image_despite_errors(self, fake_client, manager):
        fake_client.remove_container_error = EngineError("in use")
        fake_client.remove_image_error = EngineError("conflict")

        result = manager.purge(
            "a",
            PurgeOptions(confirmed=True, delete_image=True),
        )

        assert fake_client.called("remove_container")
        assert fake_client.called("remove_image") == [
            ("remove_image", "img:v1", True, True),
        ]
        assert result.image == "img:v1"

    def test_absent_cluster(self, fake_client, manager):
        with pytest.raises(ClusterNotFoundError):
            manager.purge("a", PurgeOptions(confirmed=True))

        assert not fake_client.called("remove_container")


class TestPullImage:
    """Test ClusterManager.pull_image()."""

    def test_skips_present_image(self, fake_client, manager):
        fake_client.images["ceph/daemon:latest-nano"] = ImageDetails()

        assert manager.pull_image() is False
        assert not fake_client.called("pull_image")

    def test_reports_progress(self, fake_client, manager):
        fake_client.pull_messages = [{"status": "a"}, {"status": "b"}]
        progress = MagicMock()

        assert manager.pull_image("img:v2", on_progress=progress) is True
        assert fake_client.called("pull_image") == [("pull_image", "img:v2")]
        assert progress.call_count == 2

    def test_error_message_raises(self, fake_client, manager):
        fake_client.pull_messages = [{"error": "manifest unknown"}]

        with pytest.raises(EngineError) as exc_info:
            manager.pull_image("img:v2")

        assert str(exc_info.value) == "manifest unknown"


class TestStartStop:
    """Test ClusterManager.start() and stop()."""

    @pytest.fixture(autouse=True)
    def network(self):
        with patch(
            "ceph_nano.manager.select_advertise_address",
            return_value=ipaddress.IPv4Address("10.0.0.5"),
        ):
            yield

    @pytest.mark.usefixtures("running_cluster")
    def test_already_running(self, fake_client, manager):
        with pytest.raises(ClusterAlreadyRunningError) as exc_info:
            manager.start("a")

        assert exc_info.value.exit_code == 0
        assert not fake_client.called("start_container")

    def test_restarts_exited_cluster(
        self,
        fake_client,
        manager,
        running_cluster,
    ):
        # pylint: disable=unused-argument
        fake_client.containers[0].state = "exited"

        report = manager.start("a")

        assert fake_client.called("start_container") == [
            ("start_container", NAME),
        ]
        assert not fake_client.called("create_container")
        assert report.access_key == "AK1"

    def test_creates_new_cluster(self, fake_client, manager):
        fake_client.images["ceph/daemon:latest-nano"] = ImageDetails()
        fake_client.details[NAME] = ContainerDetails(
            binds=["/usr/share/ceph-nano:/tmp"],
            env=["RGW_CIVETWEB_PORT=8000"],
        )
        fake_client.exec_outputs["cat /nano_user_details"] = USER_DETAILS

        with patch(
            "ceph_nano.manager.allocate_gateway_port",
            return_value="8000",
        ) as mock_allocate:
            report = manager.start("a")

        mock_allocate.assert_called_once_with(config=manager.config)

        (call,) = fake_client.called("create_container")
        _, name, image, environment, port, work_dir = call
        assert name == NAME
        assert image == "ceph/daemon:latest-nano"
        assert environment[0] == "RGW_CIVETWEB_PORT=8000"
        assert "EXPOSED_IP=10.0.0.5" in environment
        assert "CEPH_DEMO_UID=nano" in environment
        assert port == 8000
        assert work_dir == "/usr/share/ceph-nano"
        assert report.working_directory == "/usr/share/ceph-nano"

    def test_no_free_port(self, fake_client, manager):
        fake_client.images["ceph/daemon:latest-nano"] = ImageDetails()

        with patch(
            "ceph_nano.manager.allocate_gateway_port",
            return_value="notfound",
        ):
            with pytest.raises(PortAllocationError):
                manager.start("a")

        assert not fake_client.called("create_container")

    @pytest.mark.usefixtures("running_cluster")
    def test_stop(self, fake_client, manager):
        manager.stop("a")

        assert fake_client.called("stop_container") == [
            ("stop_container", NAME),
        ]

    def test_stop_exited_cluster(self, fake_client, manager):
        fake_client.add_container(NAME, state="exited")

        with pytest.raises(ClusterNotRunningError):
            manager.stop("a")

        assert not fake_client.called("stop_container")
