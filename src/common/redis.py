from fastapi import Request
from redis import Redis
from typing import TYPE_CHECKING


RedisClient = Redis
if TYPE_CHECKING:
    RedisClient = Redis[str]  # type: ignore


def create_redis_client(redis_url: str) -> RedisClient:
    # from_url only parses the URL, the connection is opened lazily on first command
    try:
        return Redis.from_url(redis_url, decode_responses=True)
    except ValueError as e:
        raise RuntimeError(f"Invalid Redis URL '{redis_url}'") from e


def get_redis_client(request: Request) -> RedisClient | None:
    return getattr(request.app.state, "redis_client", None)
