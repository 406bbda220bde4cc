import pytest
from starlette.requests import Request

from config import ApplicationConfig
from underneath.api.error import ClientError
from underneath.api.utils.rate_limit import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def request_from(ip: str) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "client": (ip, 5000)})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter("test", 2, 60, "Slow down", clock=clock)


@pytest.mark.asyncio
async def test_blocks_after_max_requests(limiter):
    await limiter(request_from("10.0.0.1"))
    await limiter(request_from("10.0.0.1"))

    with pytest.raises(ClientError) as exc_info:
        await limiter(request_from("10.0.0.1"))

    assert exc_info.value.status_code == 429
    assert exc_info.value.base_error.code == "RATE_LIMITED"
    assert exc_info.value.base_error.message == "Slow down"


@pytest.mark.asyncio
async def test_limits_are_per_ip(limiter):
    await limiter(request_from("10.0.0.1"))
    await limiter(request_from("10.0.0.1"))

    await limiter(request_from("10.0.0.2"))


@pytest.mark.asyncio
async def test_window_slides(limiter, clock):
    await limiter(request_from("10.0.0.1"))
    clock.now += 30
    await limiter(request_from("10.0.0.1"))

    clock.now += 31
    await limiter(request_from("10.0.0.1"))

    with pytest.raises(ClientError):
        await limiter(request_from("10.0.0.1"))


@pytest.mark.asyncio
async def test_reset_and_disable(limiter, monkeypatch):
    await limiter(request_from("10.0.0.1"))
    await limiter(request_from("10.0.0.1"))
    limiter.reset()
    await limiter(request_from("10.0.0.1"))

    monkeypatch.setattr(ApplicationConfig, "RATE_LIMIT_ENABLED", False)
    for _ in range(5):
        await limiter(request_from("10.0.0.1"))
