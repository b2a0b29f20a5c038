"""
WebDAV 工具模块
把 WebDAV 目录当作远程文件存储，读写单个 Markdown 文件
"""
from typing import Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class WebDAVError(Exception):
    """WebDAV 请求失败"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ''):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class WebDAVClient:
    """基于 httpx 的 WebDAV 客户端（HTTP Basic 认证）"""

    def __init__(
        self,
        base_url: str,
        username: str = '',
        password: str = '',
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip('/')
        auth = (username, password) if (username or password) else None
        self._client = httpx.AsyncClient(auth=auth, timeout=timeout, transport=transport)

    def file_url(self, name: str) -> str:
        """拼接文件完整地址"""
        return f"{self.base_url}/{name.lstrip('/')}"

    async def put_text(self, name: str, text: str) -> str:
        """上传文本文件，覆盖同名文件，返回文件地址"""
        url = self.file_url(name)
        try:
            response = await self._client.put(
                url,
                content=text.encode('utf-8'),
                headers={'Content-Type': 'text/markdown; charset=utf-8'}
            )
        except httpx.HTTPError as e:
            raise WebDAVError(f"WebDAV 上传异常: {str(e)}") from e

        if not response.is_success:
            logger.error(f"WebDAV 上传失败: {response.status_code} {response.text[:200]}")
            raise WebDAVError(
                f"WebDAV 上传失败: HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text
            )
        return url

    async def get_text(self, name: str) -> str:
        """下载文本文件"""
        url = self.file_url(name)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise WebDAVError(f"WebDAV 下载异常: {str(e)}") from e

        if not response.is_success:
            logger.error(f"WebDAV 下载失败: {response.status_code} {response.text[:200]}")
            raise WebDAVError(
                f"WebDAV 下载失败: HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text
            )
        return response.text

    async def aclose(self):
        await self._client.aclose()


def build_webdav_client(settings) -> Optional[WebDAVClient]:
    """未配置 WEBDAV_URL 时返回 None"""
    if not settings.webdav_enabled:
        return None
    return WebDAVClient(
        settings.WEBDAV_URL,
        settings.WEBDAV_USER,
        settings.WEBDAV_PASS,
        timeout=settings.WEBDAV_TIMEOUT
    )
