"""
存储层包
笔记、日志、设置三类数据的统一存储接口及其 SQL / Redis 实现
"""
import logging

from .base import StorageBackend, StorageError
from .sql_storage import SqlStorage
from .redis_storage import RedisStorage

logger = logging.getLogger(__name__)


def build_storage(settings) -> StorageBackend:
    """根据配置创建存储后端"""
    backend = settings.storage_backend
    if backend == 'redis':
        url = settings.redis_url
        if not url:
            raise StorageError("未配置 REDIS_URL 或 UPSTASH_URL，无法使用 Redis 存储")
        logger.info("使用 Redis 存储")
        return RedisStorage.from_url(url)

    logger.info(f"使用 SQL 存储: {settings.sqlalchemy_url.split('@')[-1]}")
    return SqlStorage.from_url(settings.sqlalchemy_url)


__all__ = [
    'StorageBackend',
    'StorageError',
    'SqlStorage',
    'RedisStorage',
    'build_storage',
]
