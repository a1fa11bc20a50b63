import logging
import time
from functools import cache
from threading import Lock

import httpx
from apscheduler.triggers.interval import IntervalTrigger

from hamfest.exceptions import MetricsWriteError
from hamfest.scheduler import get_threadpool_scheduler
from hamfest.settings import get_settings

_logger = logging.getLogger(__name__)

__buffer_lock = Lock()


METRIC_LISTING_PAGE_FETCH_COUNT = "hamfest_listing_page_fetch_count"
METRIC_RATING_FEED_FETCH_COUNT = "hamfest_rating_feed_fetch_count"
METRIC_STALE_RESPONSE_COUNT = "hamfest_stale_response_count"
METRIC_DUPLICATE_RATING_COUNT = "hamfest_duplicate_rating_count"
METRIC_STORE_ERROR_COUNT = "hamfest_store_error_count"


@cache
def __get_buffer() -> list[str]:
    return []


def start_metrics_write_task() -> None:
    settings = get_settings()
    if not settings.metrics_enabled:
        _logger.info("Metrics disabled, will not start metrics write task")
        return
    scheduler = get_threadpool_scheduler()
    scheduler.add_job(
        flush_buffer, trigger=IntervalTrigger(seconds=settings.metrics_flush_interval_seconds)
    )
    _logger.info("Scheduled metrics write task")


def flush_buffer() -> None:
    settings = get_settings()
    if not settings.metrics_enabled:
        return
    buffer = __get_buffer()
    if not buffer:
        return

    _logger.debug(f"Writing {len(buffer)} metrics")
    with __buffer_lock:
        content = "\n".join(buffer)
        try:
            r = httpx.post(
                f"{settings.victoria_metrics_host}/api/v1/import/prometheus", content=content
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise MetricsWriteError() from e

        buffer.clear()
    _logger.debug("Metrics written successfully")


def write_metric(
    metric_name: str, value: int | float, labels: dict[str, str] | None = None
) -> None:
    if not get_settings().metrics_enabled:
        return
    buffer = __get_buffer()

    label_data = ""
    if labels:
        label_parts = (f'{k}="{v}"' for k, v in labels.items())
        label_data = f"{{{','.join(label_parts)}}}"
    data = f"{metric_name}{label_data} {value} {int(time.time())}"
    with __buffer_lock:
        buffer.append(data)
    _logger.debug(f"Saved metric {metric_name}={value}, {labels=}")
