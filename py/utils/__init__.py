"""
工具模块
包含时间工具、Markdown 备份格式、WebDAV 客户端等
"""
from .time_utils import utc_now, epoch_millis, to_iso, parse_iso
from .markdown_backup import serialize_notes, parse_notes, NOTE_SEPARATOR
from .webdav import WebDAVClient, WebDAVError, build_webdav_client

__all__ = [
    'utc_now',
    'epoch_millis',
    'to_iso',
    'parse_iso',
    'serialize_notes',
    'parse_notes',
    'NOTE_SEPARATOR',
    'WebDAVClient',
    'WebDAVError',
    'build_webdav_client',
]
