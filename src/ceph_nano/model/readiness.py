# -*- coding: utf-8 -*-
"""Terminal results of the readiness orchestration."""

from dataclasses import dataclass
from typing import Union

from ..enums import ReadinessPhase, ReadinessState


@dataclass(frozen=True)
class ReadinessSuccess:
    """Both the internal and the external health checks passed."""

    container_name: str
    endpoint: str
    internal_attempts: int
    external_attempts: int

    state = ReadinessState.EXTERNAL_HEALTHY
    ok = True


@dataclass(frozen=True)
class ReadinessTimeout:
    """A polling phase exhausted its ceiling without a healthy signal."""

    container_name: str
    phase: ReadinessPhase
    message: str
    diagnostic_log: str
    attempts: int
    footer: str = ""

    state = ReadinessState.UNHEALTHY
    ok = False


ReadinessResult = Union[ReadinessSuccess, ReadinessTimeout]
