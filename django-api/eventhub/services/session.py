"""Resolve the acting user without letting a slow store hang the request."""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable

from eventhub.domain.errors import StoreError
from eventhub.domain.models import Actor

logger = logging.getLogger(__name__)

ActorLoader = Callable[[], Actor | None]

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="session-resolve")


def resolve_actor(loader: ActorLoader, timeout: float) -> Actor | None:
    """Run ``loader`` with a deadline; ``None`` means "no session".

    A timeout of 0 runs the loader inline with no deadline.
    """
    try:
        if timeout <= 0:
            return loader()
        future = _executor.submit(loader)
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning("Session resolution timed out after %.1fs", timeout)
        return None
    except StoreError as exc:
        logger.error("Session resolution failed: %s", exc)
        return None
