import httpx
import pytest
from pytest_mock import MockerFixture

from hamfest.exceptions import MetricsWriteError
from hamfest.metrics import METRIC_DUPLICATE_RATING_COUNT, flush_buffer, write_metric
from hamfest.settings import Settings


@pytest.fixture
def metrics_settings(mocker: MockerFixture) -> Settings:
    settings = Settings(metrics_enabled=True, victoria_metrics_host="http://vm:8428")
    mocker.patch("hamfest.metrics.get_settings", return_value=settings)
    return settings


def test_flush_buffer__metrics_written__posts_prometheus_lines_and_clears_buffer(
    mocker: MockerFixture, metrics_settings: Settings
) -> None:
    post = mocker.patch("hamfest.metrics.httpx.post")

    write_metric(METRIC_DUPLICATE_RATING_COUNT, 1, labels={"source": "test"})
    flush_buffer()
    flush_buffer()

    post.assert_called_once()
    url = post.call_args.args[0]
    content = post.call_args.kwargs["content"]
    assert url == "http://vm:8428/api/v1/import/prometheus"
    assert content.startswith('hamfest_duplicate_rating_count{source="test"} 1 ')


def test_flush_buffer__write_fails__raises_and_keeps_buffer(
    mocker: MockerFixture, metrics_settings: Settings
) -> None:
    post = mocker.patch("hamfest.metrics.httpx.post", side_effect=httpx.ConnectError("refused"))
    write_metric(METRIC_DUPLICATE_RATING_COUNT, 1)

    with pytest.raises(MetricsWriteError):
        flush_buffer()

    post.side_effect = None
    flush_buffer()
    assert post.call_count == 2


def test_write_metric__metrics_disabled__does_not_buffer(mocker: MockerFixture) -> None:
    mocker.patch("hamfest.metrics.get_settings", return_value=Settings(metrics_enabled=False))
    post = mocker.patch("hamfest.metrics.httpx.post")

    write_metric(METRIC_DUPLICATE_RATING_COUNT, 1)
    flush_buffer()

    post.assert_not_called()
