# -*- coding: utf-8 -*-
"""
Ceph Nano Exception Definitions
Provides a two-level exception structure:
Base Class -> Outcome Exceptions (exit status) -> Domain Exceptions
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .model.readiness import ReadinessTimeout


class CephNanoException(Exception):
    """
    Base class for every error raised by ceph_nano

    Attributes:
        exit_code: Process exit status the CLI should terminate with
        code: Error code, used to distinguish failures
        message: Error message
        details: Additional error details
    """

    exit_code: int = 1

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code='{self.code}', "
            f"message='{self.message}')"
        )


# ==================== Outcome Exceptions ====================


class PreconditionNotMet(CephNanoException):
    """Nothing to do. Reported to the user, exits successfully."""

    exit_code = 0


class FatalError(CephNanoException):
    """Unrecoverable within the current invocation."""

    exit_code = 1


# ==================== Precondition Exceptions ====================


class ClusterNotFoundError(PreconditionNotMet):
    def __init__(self, cluster: str):
        super().__init__(
            "CLUSTER_NOT_FOUND",
            f"Cluster {cluster} does not exist yet.",
            {"cluster": cluster},
        )


class ClusterNotRunningError(PreconditionNotMet):
    def __init__(self, cluster: str):
        super().__init__(
            "CLUSTER_NOT_RUNNING",
            f"Cluster {cluster} is not running.",
            {"cluster": cluster},
        )


class ClusterAlreadyRunningError(PreconditionNotMet):
    def __init__(self, cluster: str):
        super().__init__(
            "CLUSTER_ALREADY_RUNNING",
            f"Cluster {cluster} is already running!",
            {"cluster": cluster},
        )


# ==================== Fatal Exceptions ====================


class PurgeNotConfirmedError(FatalError):
    def __init__(self):
        super().__init__(
            "PURGE_NOT_CONFIRMED",
            "Purge option is too dangerous please set the right flag.",
        )


class EngineError(FatalError):
    """The container engine returned an unexpected error."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: str = "ENGINE_ERROR",
    ):
        super().__init__(code, message, details)


class ImageNotFoundError(EngineError):
    def __init__(self, image: str):
        super().__init__(
            f"No such image: {image}",
            {"image": image},
            code="IMAGE_NOT_FOUND",
        )


class ContainerInspectError(EngineError):
    def __init__(self, container: str, field: str):
        super().__init__(
            f"Container {container} has no {field} to report",
            {"container": container, "field": field},
            code="CONTAINER_INSPECT_ERROR",
        )


class NetworkEnumerationError(FatalError):
    def __init__(self, reason: str):
        super().__init__(
            "NETWORK_ENUMERATION_ERROR",
            f"Unable to determine network interface address. {reason}",
        )


class NoUsableAddressError(FatalError):
    def __init__(self):
        super().__init__(
            "NO_USABLE_ADDRESS",
            "No IPv4 address found on any network interface, cannot "
            "advertise the S3 gateway.",
        )


class PortAllocationError(FatalError):
    def __init__(self, start: int, end: int):
        super().__init__(
            "PORT_NOT_FOUND",
            f"No free port available in the range {start}-{end}",
            {"start": start, "end": end},
        )


class CredentialsError(FatalError):
    def __init__(self, cluster: str, reason: str):
        super().__init__(
            "CREDENTIALS_ERROR",
            f"Unable to read S3 keys of cluster {cluster}: {reason}",
            {"cluster": cluster},
        )


class RegistryError(FatalError):
    def __init__(self, url: str, reason: str):
        super().__init__(
            "REGISTRY_ERROR",
            f"URL {url} is unreachable. {reason}",
            {"url": url},
        )


class ClusterUnhealthyError(FatalError):
    """A readiness phase exhausted its poll ceiling."""

    def __init__(self, timeout: "ReadinessTimeout"):
        super().__init__(
            "CLUSTER_UNHEALTHY",
            timeout.message,
            {"phase": timeout.phase.value, "attempts": timeout.attempts},
        )
        self.timeout = timeout
