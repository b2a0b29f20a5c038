"""
备份路由
POST 上传备份，GET 下载并恢复（整体覆盖现有笔记）
"""
from fastapi import APIRouter, Depends

from context import AppContext
from dependencies import get_context, require_auth
from schemas.backup import BackupUploadResponse, BackupRestoreResponse
from schemas.common import ErrorResponse
from services.backup_service import backup_service

# 创建路由实例
router = APIRouter(
    dependencies=[Depends(require_auth)],
    responses={401: {"model": ErrorResponse}}
)


@router.post("", response_model=BackupUploadResponse, responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def upload_backup(ctx: AppContext = Depends(get_context)):
    """将全部笔记导出为 Markdown 并上传到 WebDAV（未配置时保存在存储后端）"""
    return await backup_service.upload(ctx)


@router.get("", response_model=BackupRestoreResponse, responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def restore_backup(ctx: AppContext = Depends(get_context)):
    """下载备份并恢复，现有笔记会被全部替换"""
    return await backup_service.restore(ctx)
