"""
日志路由
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from context import AppContext
from dependencies import get_context, require_auth
from schemas.log import LogListResponse
from schemas.common import SuccessResponse, ErrorResponse
from services.log_service import log_service

# 创建路由实例
router = APIRouter(
    dependencies=[Depends(require_auth)],
    responses={401: {"model": ErrorResponse}}
)


@router.get("", response_model=LogListResponse)
async def list_logs(
    limit: Optional[int] = Query(None, ge=1, description="返回条数，最多200"),
    ctx: AppContext = Depends(get_context)
):
    """获取最近的操作日志（最新的在前）"""
    items = log_service.list_logs(ctx, limit)
    return {"success": True, "count": len(items), "items": items}


@router.delete("", response_model=SuccessResponse)
async def clear_logs(ctx: AppContext = Depends(get_context)):
    """清空日志"""
    log_service.clear_logs(ctx)
    return {"success": True}
