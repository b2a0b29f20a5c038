"""
应用上下文
启动时创建一次，持有配置、存储后端和 WebDAV 客户端，通过依赖注入传给路由和服务
"""
from dataclasses import dataclass
from typing import Optional
import logging

from config import Settings
from storage import StorageBackend, build_storage
from utils.webdav import WebDAVClient, build_webdav_client

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    storage: StorageBackend
    webdav: Optional[WebDAVClient] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        storage: Optional[StorageBackend] = None,
        webdav: Optional[WebDAVClient] = None
    ) -> 'AppContext':
        return cls(
            settings=settings,
            storage=storage or build_storage(settings),
            webdav=webdav or build_webdav_client(settings)
        )

    async def close(self):
        if self.webdav is not None:
            await self.webdav.aclose()
        try:
            self.storage.close()
        except Exception as e:
            logger.warning(f"关闭存储连接失败: {str(e)}")
