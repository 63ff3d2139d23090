from __future__ import annotations

import os
from collections.abc import Generator

import redis

from pebbles_game.random_source import RandomSource, random_source_from_env


def create_redis() -> redis.Redis:
    url = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    # decode_responses=True => strings in/out instead of bytes
    return redis.Redis.from_url(url, decode_responses=True)


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_random_source() -> RandomSource:
    return random_source_from_env()
