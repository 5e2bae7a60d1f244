import re

import pytest

from rollout import GroupRegistry, Legacy, RedisStore


def redis_glob_to_regex(pattern):
    # redis MATCH semantics: * ? [...] and backslash escapes
    out, i = [], 0
    while i < len(pattern):
        c = pattern[i]
        if c == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if c == "*":
            out.append(".*")
        elif c == "?":
            out.append(".")
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                out.append("[" + pattern[i + 1:end].replace("\\", "\\\\") + "]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


class FakeRedis:
    def __init__(self):
        self._store = {}

    def get(self, key):
        return self._store.get(key)

    def set(self, key, val):
        self._store[key] = val

    def delete(self, key):
        self._store.pop(key, None)

    def scan_iter(self, match=None):
        regex = redis_glob_to_regex(match) if match is not None else None
        for key in list(self._store):
            if regex is None or regex.match(key):
                yield key


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def rollout(fake_redis):
    return Legacy(RedisStore(fake_redis), groups=GroupRegistry())
