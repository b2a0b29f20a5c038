"""
笔记服务
处理笔记增删改查与批量导入
"""
from typing import Any, Dict, List, Optional, Tuple
from fastapi import HTTPException, status
from pydantic import ValidationError
import logging

from context import AppContext
from schemas.note import NoteCreate, NoteImportItem, NoteUpdate
from services.log_service import log_service
from utils.time_utils import epoch_millis, parse_iso

logger = logging.getLogger(__name__)


class NoteService:
    """笔记服务类"""

    def _new_note_id(self, ctx: AppContext) -> str:
        """以毫秒时间戳生成ID，冲突时顺延"""
        candidate = epoch_millis()
        while ctx.storage.get_note(str(candidate)) is not None:
            candidate += 1
        return str(candidate)

    def _to_record(
        self,
        ctx: AppContext,
        note: NoteCreate,
        created_at: Optional[str] = None,
        note_id: Optional[str] = None
    ) -> Dict[str, Any]:
        return {
            'id': note_id or note.id or self._new_note_id(ctx),
            'title': note.title,
            'content': note.content,
            'tags': note.tags or [],
            'createdAt': parse_iso(created_at or note.createdAt),
        }

    def list_notes(self, ctx: AppContext) -> List[Dict[str, Any]]:
        """获取全部笔记（按更新时间倒序）"""
        return ctx.storage.list_notes()

    def get_note(self, ctx: AppContext, note_id: str) -> Dict[str, Any]:
        """根据ID获取笔记"""
        note = ctx.storage.get_note(note_id)
        if note is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Note not found"
            )
        return note

    def save_note(self, ctx: AppContext, note_data: NoteCreate) -> Dict[str, Any]:
        """创建或覆盖笔记"""
        saved = ctx.storage.upsert_note(self._to_record(ctx, note_data))
        log_service.append(ctx, 'info', 'note.upsert', {'id': saved['id']})
        return saved

    def update_note(self, ctx: AppContext, note_id: str, note_update: NoteUpdate) -> Dict[str, Any]:
        """更新笔记的标题、正文或标签"""
        update_data = note_update.model_dump(exclude_unset=True, exclude_none=True)
        note = ctx.storage.update_note(note_id, update_data)
        if note is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Note not found"
            )
        log_service.append(ctx, 'info', 'note.update', {'id': note_id, 'fields': sorted(update_data)})
        return note

    def delete_note(self, ctx: AppContext, note_id: str) -> bool:
        """删除笔记"""
        if not ctx.storage.delete_note(note_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Note not found"
            )
        log_service.append(ctx, 'info', 'note.delete', {'id': note_id})
        return True

    def import_notes(self, ctx: AppContext, payload: Any) -> Tuple[int, int]:
        """
        批量导入笔记

        支持 {"notes": [...]} 或直接传入数组；缺失的可选字段使用默认值，
        不是对象或标题不是字符串的条目跳过并计数。
        返回 (导入数量, 跳过数量)
        """
        if isinstance(payload, dict):
            items = payload.get('notes')
        else:
            items = payload
        if not isinstance(items, list):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="notes must be an array"
            )

        imported = 0
        skipped = 0
        base_id = epoch_millis()
        for index, item in enumerate(items):
            try:
                note = NoteImportItem.model_validate(item)
            except ValidationError as e:
                skipped += 1
                logger.warning(f"跳过无效的导入条目 #{index}: {e.errors()[0].get('msg') if e.errors() else e}")
                continue

            record = self._to_record(
                ctx, note, note.createdAt or note.created_at,
                note_id=note.id or f"{base_id}-{index}"
            )
            ctx.storage.upsert_note(record)
            imported += 1

        log_service.append(ctx, 'info', 'notes.import', {'count': imported, 'skipped': skipped})
        return imported, skipped


# 创建全局的笔记服务实例
note_service = NoteService()
