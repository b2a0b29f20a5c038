"""
系统路由
健康检查与配置诊断
"""
from fastapi import APIRouter, Depends
import logging

from context import AppContext
from dependencies import get_context, require_auth

logger = logging.getLogger(__name__)

# 创建路由实例
router = APIRouter()


@router.get("/health")
async def health_check(ctx: AppContext = Depends(get_context)):
    """健康检查，同时检测存储后端连通性"""
    try:
        ctx.storage.ping()
        storage_status = "ok"
    except Exception as e:
        logger.warning(f"存储后端连接失败: {str(e)}")
        storage_status = "down"
    return {
        "status": "ok" if storage_status == "ok" else "degraded",
        "storage": ctx.storage.name,
        "storageStatus": storage_status,
        "version": ctx.settings.APP_VERSION
    }


@router.get("/debug/env", dependencies=[Depends(require_auth)])
async def debug_env(ctx: AppContext = Depends(get_context)):
    """检查配置项是否存在（不返回具体值）"""
    settings = ctx.settings
    return {
        "hasPassword": bool(settings.PASSWORD),
        "passwordLength": len(settings.PASSWORD or ''),
        "hasDatabaseUrl": bool(settings.DATABASE_URL),
        "hasRedisUrl": bool(settings.redis_url),
        "hasWebdavUrl": bool(settings.WEBDAV_URL),
        "storageBackend": ctx.storage.name
    }
