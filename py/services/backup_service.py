"""
备份服务
将全部笔记导出为 Markdown 文档并上传到 WebDAV；恢复时整体覆盖本地笔记
"""
from typing import Any, Dict
from fastapi import HTTPException, status
import logging

from context import AppContext
from services.log_service import log_service
from utils.markdown_backup import serialize_notes, parse_notes
from utils.time_utils import utc_now, to_iso
from utils.webdav import WebDAVError

logger = logging.getLogger(__name__)

# 未配置 WebDAV 时，备份文档保存在该设置项中
FALLBACK_BACKUP_KEY = 'backup_latest_md'


class BackupService:
    """备份服务类"""

    async def upload(self, ctx: AppContext) -> Dict[str, Any]:
        """导出并上传备份"""
        notes = ctx.storage.list_notes()
        if not notes:
            log_service.append(ctx, 'warn', 'backup.upload.no_notes')
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="没有可导出的笔记"
            )

        document = serialize_notes(notes)
        file_name = ctx.settings.BACKUP_FILE_NAME
        result = {
            "success": True,
            "fileName": file_name,
            "totalNotes": len(notes),
            "url": None,
            "uploadTime": to_iso(utc_now()),
        }

        if ctx.webdav is not None:
            try:
                result["url"] = await ctx.webdav.put_text(file_name, document)
            except WebDAVError as e:
                log_service.append(ctx, 'error', 'backup.upload.failed', {
                    'status': e.status_code, 'message': str(e)
                })
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=str(e)
                )
            result["target"] = "webdav"
        else:
            ctx.storage.set_setting(FALLBACK_BACKUP_KEY, document)
            result["target"] = "storage"

        log_service.append(ctx, 'info', 'backup.upload.success', {
            'fileName': file_name, 'totalNotes': len(notes), 'target': result["target"]
        })
        return result

    async def _fetch_document(self, ctx: AppContext) -> str:
        if ctx.webdav is not None:
            try:
                return await ctx.webdav.get_text(ctx.settings.BACKUP_FILE_NAME)
            except WebDAVError as e:
                log_service.append(ctx, 'error', 'backup.download.failed', {
                    'status': e.status_code, 'message': str(e)
                })
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=str(e)
                )

        document = ctx.storage.get_setting(FALLBACK_BACKUP_KEY)
        if document is None:
            log_service.append(ctx, 'warn', 'backup.download.not_found')
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="没有找到备份"
            )
        return document

    async def restore(self, ctx: AppContext) -> Dict[str, Any]:
        """
        下载备份并恢复

        解析成功后清空现有笔记并写入备份中的全部笔记（整体覆盖，不合并）；
        备份中没有笔记时不做任何修改。
        """
        document = await self._fetch_document(ctx)
        notes = parse_notes(document)
        if not notes:
            log_service.append(ctx, 'warn', 'backup.download.empty')
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="备份文件中没有找到笔记内容"
            )

        imported = ctx.storage.replace_all_notes(notes)
        source = "webdav" if ctx.webdav is not None else "storage"
        log_service.append(ctx, 'info', 'backup.download.success', {
            'fileName': ctx.settings.BACKUP_FILE_NAME, 'importedCount': imported, 'source': source
        })
        return {
            "success": True,
            "fileName": ctx.settings.BACKUP_FILE_NAME,
            "importedCount": imported,
            "updatedCount": 0,
            "totalNotes": len(notes),
            "source": source,
        }


# 创建全局的备份服务实例
backup_service = BackupService()
