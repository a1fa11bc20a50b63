import logging
from typing import Any, Awaitable, Callable

import wrapt

from hamfest.exceptions import StoreError
from hamfest.metrics import METRIC_STORE_ERROR_COUNT, write_metric


def log_exceptions(logger: logging.Logger) -> Callable[..., Awaitable[Any]]:
    """
    A decorator that wraps the passed in coroutine function and logs any exceptions that occur.

    Store errors are also counted in metrics. The exception is always re-raised.
    """

    @wrapt.decorator
    async def wrapper(wrapped, instance, args, kwargs) -> Any:  # type: ignore
        try:
            return await wrapped(*args, **kwargs)
        except Exception as e:
            logger.exception(f"Exception caught in {wrapped.__name__}")
            if isinstance(e, StoreError):
                write_metric(METRIC_STORE_ERROR_COUNT, 1, labels={"operation": wrapped.__name__})
            raise

    return wrapper
