# -*- coding: utf-8 -*-
"""Turning ceph_nano exceptions into terminal output and exit status."""

import sys

from ...exception import (
    CephNanoException,
    ClusterUnhealthyError,
    PreconditionNotMet,
)
from .console import echo_error, echo_info, echo_plain


def exit_on_error(error: CephNanoException) -> None:
    """
    Report a failed command and terminate with the error's exit status.

    Preconditions that are not met are informational and exit with 0. A
    readiness timeout dumps its diagnostic log before the issue footer.
    """
    if isinstance(error, ClusterUnhealthyError):
        echo_plain(error.timeout.message)
        echo_plain(error.timeout.diagnostic_log)
        echo_error(error.timeout.footer)
    elif isinstance(error, PreconditionNotMet):
        echo_info(str(error))
    else:
        echo_error(str(error))
    sys.exit(error.exit_code)
