"""Retry helper for flaky network calls (price lookups)."""

import time
import logging

from cost_basis.utils.logger import get_run_context

logger = logging.getLogger("cost_basis")


class NetworkRetry:
    @staticmethod
    def run(func, retries=5, delay=2, backoff=2, context="Network", retry_on=(Exception,)):
        """
        Call `func` until it succeeds, sleeping delay * backoff**attempt between tries.

        Only exceptions listed in `retry_on` are retried; the last one is re-raised.
        Library imports and tests use short delays.
        """
        if get_run_context() in ('imported', 'test'):
            retries = min(retries, 2)
            delay = 0.1
            backoff = 1.5
        retries = max(retries, 1)
        for i in range(retries):
            try:
                return func()
            except retry_on as e:
                if i == retries - 1:
                    if isinstance(e, TimeoutError):
                        raise TimeoutError(f"{context} timeout: {e}") from e
                    raise
                logger.debug(f"{context} attempt {i + 1}/{retries} failed: {e}")
                time.sleep(delay * (backoff ** i))
