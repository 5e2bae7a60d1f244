import os
import re
import logging
from typing import List, Optional, Protocol

import redis

from rollout.errors import CorruptStateError, StorageUnavailableError

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
NAMESPACE = os.getenv("ROLLOUT_NAMESPACE", "feature")

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(value: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self, prefix: str) -> List[str]: ...


class RedisStore:
    """String-blob store over a redis client.

    Any redis failure is re-raised as StorageUnavailableError so callers
    never mistake an outage for an inactive feature.
    """

    def __init__(self, client: "redis.Redis"):
        self._redis = client

    @classmethod
    def from_url(cls, url: str = REDIS_URL) -> "RedisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> Optional[str]:
        try:
            return self._redis.get(key)
        except redis.exceptions.ResponseError as e:
            # WRONGTYPE: the key holds something other than a string record
            logger.error("redis get rejected key=%s: %s", key, e)
            raise CorruptStateError(key, str(e)) from e
        except redis.exceptions.RedisError as e:
            logger.error("redis get failed key=%s: %s", key, e)
            raise StorageUnavailableError("get", key, str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(key, value)
        except redis.exceptions.RedisError as e:
            logger.error("redis set failed key=%s: %s", key, e)
            raise StorageUnavailableError("set", key, str(e)) from e

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except redis.exceptions.RedisError as e:
            logger.error("redis delete failed key=%s: %s", key, e)
            raise StorageUnavailableError("delete", key, str(e)) from e

    def keys(self, prefix: str) -> List[str]:
        try:
            matched = self._redis.scan_iter(match=f"{escape_glob(prefix)}*")
            return [k for k in matched if k.startswith(prefix)]
        except redis.exceptions.RedisError as e:
            logger.error("redis scan failed prefix=%s: %s", prefix, e)
            raise StorageUnavailableError("scan", prefix, str(e)) from e
