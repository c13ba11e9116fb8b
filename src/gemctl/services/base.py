"""BaseService — foundation for gemctl services.

Every service receives the :class:`BundleEnvironment` it operates on.  A
service never resets the environment itself; callers that need a fresh
view build a new service from ``app.reset_environment()``.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from gemctl.services.result import ServiceResult

if TYPE_CHECKING:
    from gemctl.infrastructure.environment import BundleEnvironment

logger = logging.getLogger(__name__)


def timed(func: Callable[..., ServiceResult]) -> Callable[..., ServiceResult]:
    """Record how long a service operation took in ``result.meta``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ServiceResult:
        started = time.perf_counter()
        result = func(*args, **kwargs)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.debug("%s finished in %.2f ms (ok=%s)", result.op, duration_ms, result.ok)
        meta = {**(result.meta or {}), "duration_ms": duration_ms}
        return result.model_copy(update={"meta": meta})

    return wrapper


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, env: BundleEnvironment) -> None:
        self._env = env

    @property
    def env(self) -> BundleEnvironment:
        return self._env
