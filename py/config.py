"""
项目配置管理模块
统一管理所有配置项，从环境变量读取
"""
import os
from typing import Optional
from pathlib import Path
from urllib.parse import urlparse
from dotenv import load_dotenv

# 加载环境变量
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_FILE = BASE_DIR / '.env'
load_dotenv(dotenv_path=ENV_FILE)


def _env_bool(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).lower() == 'true'


def normalize_database_url(url: str) -> str:
    """
    将 Postgres 连接串规范化为 SQLAlchemy psycopg2 URL

    postgres://... 与 postgresql://... 都会转换为 postgresql+psycopg2://...
    """
    if url.startswith('postgres://'):
        return url.replace('postgres://', 'postgresql+psycopg2://', 1)
    if url.startswith('postgresql://'):
        return url.replace('postgresql://', 'postgresql+psycopg2://', 1)
    return url


class Settings:
    """应用配置类"""

    def __init__(self, **overrides):
        # ============ 认证配置 ============
        self.PASSWORD: str = os.getenv('PASSWORD', '')

        # ============ 存储配置 ============
        # sql / redis / auto
        self.STORAGE_BACKEND: str = os.getenv('STORAGE_BACKEND', 'auto').lower()
        self.DATABASE_URL: str = os.getenv('DATABASE_URL', '')
        self.REDIS_URL: str = os.getenv('REDIS_URL', '')
        self.UPSTASH_URL: str = os.getenv('UPSTASH_URL', '')
        self.UPSTASH_TOKEN: str = os.getenv('UPSTASH_TOKEN', '')

        # ============ WebDAV 备份配置 ============
        self.WEBDAV_URL: str = os.getenv('WEBDAV_URL', '')
        self.WEBDAV_USER: str = os.getenv('WEBDAV_USER', '')
        self.WEBDAV_PASS: str = os.getenv('WEBDAV_PASS', '')
        self.WEBDAV_TIMEOUT: float = float(os.getenv('WEBDAV_TIMEOUT', '30'))
        self.BACKUP_FILE_NAME: str = os.getenv('BACKUP_FILE_NAME', 'notes-latest.md')

        # ============ 日志配置 ============
        self.LOG_QUERY_LIMIT: int = int(os.getenv('LOG_QUERY_LIMIT', '200'))
        self.LOG_RETENTION: int = int(os.getenv('LOG_RETENTION', '1000'))
        self.LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO').upper()

        # ============ 服务器配置 ============
        self.HOST: str = os.getenv('HOST', '0.0.0.0')
        self.PORT: int = int(os.getenv('PORT', '3000'))
        self.DEBUG: bool = _env_bool('DEBUG')
        # 前端构建产物目录（可选）
        self.STATIC_DIR: str = os.getenv('STATIC_DIR', str(BASE_DIR / 'dist'))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"未知配置项: {key}")
            setattr(self, key, value)

    # ============ 应用配置 ============
    APP_NAME: str = 'Markdown 笔记'
    APP_VERSION: str = '1.0.0'
    APP_DESCRIPTION: str = '个人 Markdown 笔记服务：笔记存储、操作日志与 WebDAV 备份'

    @property
    def sqlalchemy_url(self) -> str:
        """SQL 存储使用的连接串，未配置时使用项目目录下的 SQLite 文件"""
        if self.DATABASE_URL:
            return normalize_database_url(self.DATABASE_URL)
        return f"sqlite:///{BASE_DIR / 'notes.db'}"

    @property
    def redis_url(self) -> Optional[str]:
        """
        Redis 连接串

        优先使用 REDIS_URL；否则由 UPSTASH_URL/UPSTASH_TOKEN 推导。
        Upstash 的 REST 地址 (https://host) 转换为同一主机的 TLS Redis 端点。
        """
        if self.REDIS_URL:
            return self.REDIS_URL
        if not self.UPSTASH_URL:
            return None
        if self.UPSTASH_URL.startswith(('redis://', 'rediss://')):
            return self.UPSTASH_URL
        # 假定 REST 令牌同时是 Redis 密码（Upstash 默认如此，重置令牌后可能不一致），
        # 无法连接时请直接使用控制台提供的 rediss:// 地址作为 REDIS_URL
        host = urlparse(self.UPSTASH_URL).hostname or self.UPSTASH_URL
        return f"rediss://default:{self.UPSTASH_TOKEN}@{host}:6379"

    @property
    def storage_backend(self) -> str:
        """实际使用的存储后端: sql 或 redis"""
        if self.STORAGE_BACKEND in ('sql', 'redis'):
            return self.STORAGE_BACKEND
        if self.redis_url and not self.DATABASE_URL:
            return 'redis'
        return 'sql'

    @property
    def webdav_enabled(self) -> bool:
        return bool(self.WEBDAV_URL)

    def validate(self) -> list:
        """
        验证配置是否完整
        返回警告信息列表
        """
        missing = []

        if not self.PASSWORD:
            missing.append('未设置 PASSWORD，除非数据库中设置了密码，否则所有请求均无需认证')

        if not self.WEBDAV_URL:
            missing.append('未配置 WEBDAV_URL，备份将保存在存储后端的 settings 中')

        if not self.REDIS_URL and self.UPSTASH_URL.startswith('https://'):
            missing.append('REDIS_URL 由 UPSTASH_URL/UPSTASH_TOKEN 推导，假定 REST 令牌即 Redis 密码；建议直接配置 REDIS_URL')

        if self.STORAGE_BACKEND == 'redis' and not self.redis_url:
            missing.append('STORAGE_BACKEND=redis 但未配置 REDIS_URL 或 UPSTASH_URL')

        return missing


# 创建全局配置实例
settings = Settings()

# 验证配置
if __name__ == '__main__':
    missing_configs = settings.validate()
    if missing_configs:
        print("配置验证警告:")
        for config in missing_configs:
            print(f"  - {config}")
    else:
        print("配置验证通过 ✓")
