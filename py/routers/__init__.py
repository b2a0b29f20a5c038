"""
API路由模块
提供所有HTTP接口的路由定义
"""

from fastapi import APIRouter

# 导入各个模块的路由
from .auth import router as auth_router
from .notes import router as notes_router
from .logs import router as logs_router
from .backup import router as backup_router
from .system import router as system_router

# 创建主路由实例
api_router = APIRouter()

# 注册子路由
api_router.include_router(auth_router, tags=["认证"])
api_router.include_router(notes_router, tags=["笔记"])
api_router.include_router(logs_router, prefix="/logs", tags=["日志"])
api_router.include_router(backup_router, prefix="/backup", tags=["备份"])
api_router.include_router(system_router, tags=["系统"])

__all__ = ["api_router"]
