"""
Core building blocks shared by every component: ids, clocks and errors.
"""

from lorekeep.core.errors import ErrorKind, ServiceError, STATUS_BY_KIND
from lorekeep.core.utils import MonotonicIdGenerator, utc_now

__all__ = [
    "ErrorKind",
    "ServiceError",
    "STATUS_BY_KIND",
    "MonotonicIdGenerator",
    "utc_now",
]
