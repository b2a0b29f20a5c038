"""
数据库模型包
"""
# 导入所有模型，以便在database.py中统一初始化
from .note import Note
from .log import LogEntry
from .setting import Setting

__all__ = [
    # 笔记相关
    'Note',
    # 日志相关
    'LogEntry',
    # 设置相关
    'Setting'
]
