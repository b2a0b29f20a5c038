"""
服务层包
负责封装业务逻辑，路由只做参数解析和响应组装
"""
from .auth_service import AuthService, auth_service
from .note_service import NoteService, note_service
from .log_service import LogService, log_service
from .backup_service import BackupService, backup_service

__all__ = [
    'AuthService', 'auth_service',
    'NoteService', 'note_service',
    'LogService', 'log_service',
    'BackupService', 'backup_service',
]
