# -*- coding: utf-8 -*-
"""
Readiness orchestration of a freshly started cluster.

A cluster is up once two signals have been observed, in order:

1. internal: the readiness marker shows up in the container logs
2. external: the S3 gateway answers an HTTP GET on the advertised address

Each phase polls at a fixed interval up to a ceiling. Exhausting a ceiling
ends the orchestration in the UNHEALTHY state with a diagnostic log; the
orchestrator itself never terminates the process.
"""

import logging
import time
from typing import Callable, Optional, Tuple

import requests

from .config import Settings, get_settings
from .container_clients import BaseClient
from .enums import ReadinessPhase, ReadinessState
from .identity import IdentityResolver
from .model import ReadinessResult, ReadinessSuccess, ReadinessTimeout
from .utils.net_utils import select_advertise_address
from .utils.stream import decode_output

logger = logging.getLogger(__name__)


def probe_gateway(url: str, timeout: float = 5.0) -> bool:
    """
    Check that a URL answers and its body can be read in full.

    Any status code counts as an answer.
    """
    try:
        response = requests.get(url, timeout=timeout)
        _ = response.content
    except requests.exceptions.RequestException as e:
        logger.debug(f"Gateway probe of {url} failed: {e}")
        return False
    return True


class ReadinessOrchestrator:
    def __init__(
        self,
        client: BaseClient,
        config: Optional[Settings] = None,
        resolver: Optional[IdentityResolver] = None,
        address_selector: Callable = select_advertise_address,
        probe: Optional[Callable[[str], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.config = config or get_settings()
        self.resolver = resolver or IdentityResolver(client, self.config)
        self.address_selector = address_selector
        self.probe = probe or (
            lambda url: probe_gateway(
                url,
                timeout=self.config.GATEWAY_PROBE_TIMEOUT,
            )
        )
        self.sleep = sleep
        self.state = ReadinessState.STARTED

    def _transition(self, state: ReadinessState, container_name: str):
        logger.debug(f"{container_name}: {self.state.value} -> {state.value}")
        self.state = state

    def _poll(
        self,
        check: Callable[[], bool],
        ceiling: int,
    ) -> Tuple[bool, int]:
        """Run ``check`` until it passes, at most ``ceiling`` times."""
        for attempt in range(1, ceiling + 1):
            if check():
                return True, attempt
            if attempt < ceiling:
                self.sleep(self.config.POLL_INTERVAL)
        return False, ceiling

    def _footer(self) -> str:
        return (
            f"Please open an issue at: {self.config.ISSUE_TRACKER_URL} "
            "with the logs above."
        )

    def read_logs(self, container_name: str) -> str:
        return self.client.container_logs(container_name).decode(
            "utf-8",
            errors="replace",
        )

    def read_gateway_logs(self, container_name: str) -> str:
        output = self.client.exec_in_container(
            container_name,
            ["sh", "-c", f"cat {self.config.GATEWAY_LOG_PATH}"],
        )
        return decode_output(output)

    def is_internally_healthy(self, container_name: str) -> bool:
        return self.config.READINESS_MARKER in self.read_logs(container_name)

    def gateway_endpoint(self, container_name: str) -> str:
        port = self.resolver.gateway_port(container_name)
        address = self.address_selector()
        return f"http://{address}:{port}"

    def wait_internal_healthy(
        self,
        container_name: str,
    ) -> Tuple[bool, int]:
        logger.info(f"Waiting for {container_name} to reach a clean state")
        healthy, attempts = self._poll(
            lambda: self.is_internally_healthy(container_name),
            self.config.INTERNAL_HEALTH_TIMEOUT,
        )
        if healthy:
            self._transition(ReadinessState.INTERNAL_HEALTHY, container_name)
        return healthy, attempts

    def wait_external_healthy(
        self,
        container_name: str,
        endpoint: str,
    ) -> Tuple[bool, int]:
        logger.info(f"Waiting for the S3 gateway at {endpoint}")
        healthy, attempts = self._poll(
            lambda: self.probe(endpoint),
            self.config.EXTERNAL_HEALTH_TIMEOUT,
        )
        if healthy:
            self._transition(ReadinessState.EXTERNAL_HEALTHY, container_name)
        return healthy, attempts

    def run(self, container_name: str) -> ReadinessResult:
        """Drive a started container to EXTERNAL_HEALTHY or UNHEALTHY."""
        self.state = ReadinessState.STARTED

        healthy, internal_attempts = self.wait_internal_healthy(
            container_name,
        )
        if not healthy:
            self._transition(ReadinessState.UNHEALTHY, container_name)
            logger.error(
                f"{container_name} did not log "
                f"{self.config.READINESS_MARKER!r} after "
                f"{internal_attempts} attempts",
            )
            return ReadinessTimeout(
                container_name=container_name,
                phase=ReadinessPhase.INTERNAL,
                message=(
                    f"The container {container_name} never reached a "
                    "clean state. Showing the container logs now:"
                ),
                diagnostic_log=self.read_logs(container_name),
                attempts=internal_attempts,
                footer=self._footer(),
            )

        endpoint = self.gateway_endpoint(container_name)
        healthy, external_attempts = self.wait_external_healthy(
            container_name,
            endpoint,
        )
        if not healthy:
            self._transition(ReadinessState.UNHEALTHY, container_name)
            logger.error(
                f"S3 gateway {endpoint} did not answer after "
                f"{external_attempts} attempts",
            )
            return ReadinessTimeout(
                container_name=container_name,
                phase=ReadinessPhase.EXTERNAL,
                message=(
                    f"S3 gateway for cluster {container_name} is not "
                    "responding. Showing S3 logs:"
                ),
                diagnostic_log=self.read_gateway_logs(container_name),
                attempts=external_attempts,
                footer=self._footer(),
            )

        return ReadinessSuccess(
            container_name=container_name,
            endpoint=endpoint,
            internal_attempts=internal_attempts,
            external_attempts=external_attempts,
        )
