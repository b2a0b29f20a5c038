"""
测试公共夹具
"""
import fnmatch

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings


def make_settings(**overrides) -> Settings:
    """隔离的测试配置：内存 SQLite，无密码，无 WebDAV"""
    values = {
        'PASSWORD': '',
        'STORAGE_BACKEND': 'sql',
        'DATABASE_URL': 'sqlite://',
        'REDIS_URL': '',
        'UPSTASH_URL': '',
        'WEBDAV_URL': '',
        'STATIC_DIR': '',
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client_factory():
    """按需创建测试客户端，启动事件会初始化数据表"""
    clients = []

    def _make(storage=None, webdav=None, **overrides):
        app = create_app(make_settings(**overrides), storage=storage, webdav=webdav)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(client_factory):
    return client_factory()


@pytest.fixture
def ctx(client):
    return client.app.state.ctx


class FakePipeline:
    """记录命令并在 execute 时依次执行"""

    def __init__(self, redis):
        self.redis = redis
        self.commands = []

    def __getattr__(self, name):
        def _queue(*args, **kwargs):
            self.commands.append((name, args, kwargs))
            return self
        return _queue

    def execute(self):
        results = [getattr(self.redis, name)(*args, **kwargs) for name, args, kwargs in self.commands]
        self.commands = []
        return results


class FakeRedis:
    """只实现存储层用到的 Redis 命令"""

    def __init__(self):
        self.data = {}

    def ping(self):
        return True

    def close(self):
        pass

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    # 字符串
    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True

    def mget(self, keys):
        return [self.data.get(key) for key in keys]

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if key in self.data:
                del self.data[key]
                removed += 1
        return removed

    def incr(self, key):
        self.data[key] = int(self.data.get(key, 0)) + 1
        return self.data[key]

    def keys(self, pattern='*'):
        return [key for key in self.data if fnmatch.fnmatch(key, pattern)]

    # 集合
    def sadd(self, key, *members):
        bucket = self.data.setdefault(key, set())
        before = len(bucket)
        bucket.update(members)
        return len(bucket) - before

    def srem(self, key, *members):
        bucket = self.data.get(key, set())
        removed = len(bucket & set(members))
        bucket.difference_update(members)
        return removed

    def smembers(self, key):
        return set(self.data.get(key, set()))

    # 列表
    def lpush(self, key, *values):
        bucket = self.data.setdefault(key, [])
        for value in values:
            bucket.insert(0, value)
        return len(bucket)

    def ltrim(self, key, start, end):
        bucket = self.data.get(key, [])
        self.data[key] = bucket[start:end + 1]
        return True

    def lrange(self, key, start, end):
        bucket = self.data.get(key, [])
        return bucket[start:end + 1] if end >= 0 else bucket[start:]

    def llen(self, key):
        return len(self.data.get(key, []))

    # 哈希
    def hget(self, key, field):
        return self.data.get(key, {}).get(field)

    def hset(self, key, field, value):
        self.data.setdefault(key, {})[field] = value
        return 1


@pytest.fixture
def fake_redis():
    return FakeRedis()
