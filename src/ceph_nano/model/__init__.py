# -*- coding: utf-8 -*-
from .cluster import (
    ClusterIdentity,
    ClusterRow,
    ContainerDetails,
    ContainerObservation,
    PurgeOptions,
    PurgeResult,
    S3Credentials,
    StatusReport,
)
from .image import ImageDetails
from .readiness import ReadinessResult, ReadinessSuccess, ReadinessTimeout

__all__ = [
    "ClusterIdentity",
    "ClusterRow",
    "ContainerDetails",
    "ContainerObservation",
    "ImageDetails",
    "PurgeOptions",
    "PurgeResult",
    "ReadinessResult",
    "ReadinessSuccess",
    "ReadinessTimeout",
    "S3Credentials",
    "StatusReport",
]
