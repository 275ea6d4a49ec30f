# -*- coding: utf-8 -*-
from enum import Enum


class ImageField(str, Enum):
    """Image metadata fields reported for a cluster."""

    TAG = "tag"
    CREATED = "created"
    RELEASE = "release"


class InspectField(str, Enum):
    """Container inspection fields."""

    BINDS = "Binds"
    PORT_BINDINGS = "PortBindings"
    IMAGE = "Image"


class ReadinessState(str, Enum):
    """States of the readiness orchestration."""

    STARTED = "started"
    INTERNAL_HEALTHY = "internal_healthy"
    EXTERNAL_HEALTHY = "external_healthy"
    UNHEALTHY = "unhealthy"


class ReadinessPhase(str, Enum):
    """Polling phase a readiness timeout occurred in."""

    INTERNAL = "internal"
    EXTERNAL = "external"
