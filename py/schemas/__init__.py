"""
Pydantic模型包
用于数据验证和序列化
"""
from .note import (
    NoteCreate, NoteImportItem, NoteUpdate, NoteResponse,
    NoteSavedResponse, NoteUpdatedResponse, ImportResponse
)
from .auth import (
    LoginRequest, LoginResponse, PasswordChange, PasswordStatusResponse
)
from .log import LogLevel, LogEntryResponse, LogListResponse
from .backup import BackupUploadResponse, BackupRestoreResponse
from .common import SuccessResponse, ErrorResponse

__all__ = [
    # 笔记相关
    'NoteCreate', 'NoteImportItem', 'NoteUpdate', 'NoteResponse',
    'NoteSavedResponse', 'NoteUpdatedResponse', 'ImportResponse',
    # 认证相关
    'LoginRequest', 'LoginResponse', 'PasswordChange', 'PasswordStatusResponse',
    # 日志相关
    'LogLevel', 'LogEntryResponse', 'LogListResponse',
    # 备份相关
    'BackupUploadResponse', 'BackupRestoreResponse',
    # 通用
    'SuccessResponse', 'ErrorResponse'
]
