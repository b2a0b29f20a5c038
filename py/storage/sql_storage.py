"""
SQL 存储实现
基于 SQLAlchemy，支持 PostgreSQL 与 SQLite（与 D1 的表结构一致）
"""
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import select, delete, func

from database import Database
from models import Note, LogEntry, Setting
from utils.time_utils import utc_now
from .base import StorageBackend

logger = logging.getLogger(__name__)


class SqlStorage(StorageBackend):
    """SQL 存储后端"""

    name = 'sql'

    def __init__(self, database: Database):
        self.database = database

    @classmethod
    def from_url(cls, database_url: str) -> 'SqlStorage':
        return cls(Database(database_url))

    def init(self) -> None:
        self.database.init_db()

    def ping(self) -> bool:
        return self.database.ping()

    def close(self) -> None:
        self.database.dispose()

    # ============ 笔记 ============
    def list_notes(self) -> List[Dict[str, Any]]:
        with self.database.session() as db:
            rows = db.execute(
                select(Note).order_by(Note.updated_at.desc(), Note.id)
            ).scalars().all()
            return [row.to_dict() for row in rows]

    def get_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        with self.database.session() as db:
            note = db.get(Note, note_id)
            return note.to_dict() if note else None

    def upsert_note(self, note: Dict[str, Any]) -> Dict[str, Any]:
        now = utc_now()
        with self.database.session() as db:
            db_note = db.get(Note, note['id'])
            if db_note is None:
                db_note = Note(id=note['id'], created_at=note.get('createdAt') or now)
                db.add(db_note)
            db_note.title = note['title']
            db_note.content = note.get('content') or ''
            db_note.tags = Note.dump_tags(note.get('tags'))
            db_note.updated_at = note.get('updatedAt') or now
            db.flush()
            return db_note.to_dict()

    def update_note(self, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.database.session() as db:
            db_note = db.get(Note, note_id)
            if db_note is None:
                return None
            if fields.get('title') is not None:
                db_note.title = fields['title']
            if fields.get('content') is not None:
                db_note.content = fields['content']
            if fields.get('tags') is not None:
                db_note.tags = Note.dump_tags(fields['tags'])
            db_note.updated_at = utc_now()
            db.flush()
            return db_note.to_dict()

    def delete_note(self, note_id: str) -> bool:
        with self.database.session() as db:
            db_note = db.get(Note, note_id)
            if db_note is None:
                return False
            db.delete(db_note)
            return True

    def replace_all_notes(self, notes: List[Dict[str, Any]]) -> int:
        now = utc_now()
        # 删除与重新写入在同一事务中完成
        with self.database.session() as db:
            removed = db.execute(delete(Note)).rowcount
            for note in notes:
                db.add(Note(
                    id=note['id'],
                    title=note['title'],
                    content=note.get('content') or '',
                    tags=Note.dump_tags(note.get('tags')),
                    created_at=note.get('createdAt') or now,
                    updated_at=note.get('updatedAt') or now,
                ))
            logger.info(f"已清空 {removed} 条旧笔记，写入 {len(notes)} 条新笔记")
        return len(notes)

    # ============ 日志 ============
    def append_log(self, level: str, message: str, meta: Optional[str], retention: int) -> None:
        with self.database.session() as db:
            db.add(LogEntry(level=level, message=message, meta=meta, created_at=utc_now()))
            db.flush()
            total = db.execute(select(func.count(LogEntry.id))).scalar_one()
            if retention > 0 and total > retention:
                keep_ids = select(LogEntry.id).order_by(
                    LogEntry.created_at.desc(), LogEntry.id.desc()
                ).limit(retention)
                db.execute(
                    delete(LogEntry).where(LogEntry.id.not_in(keep_ids.scalar_subquery()))
                    .execution_options(synchronize_session=False)
                )

    def list_logs(self, limit: int) -> List[Dict[str, Any]]:
        with self.database.session() as db:
            rows = db.execute(
                select(LogEntry).order_by(LogEntry.created_at.desc(), LogEntry.id.desc()).limit(limit)
            ).scalars().all()
            return [row.to_dict() for row in rows]

    def clear_logs(self) -> int:
        with self.database.session() as db:
            return db.execute(delete(LogEntry)).rowcount

    # ============ 设置 ============
    def get_setting(self, key: str) -> Optional[str]:
        with self.database.session() as db:
            row = db.get(Setting, key)
            return row.value if row else None

    def set_setting(self, key: str, value: str) -> None:
        with self.database.session() as db:
            row = db.get(Setting, key)
            if row is None:
                db.add(Setting(key=key, value=value, updated_at=utc_now()))
            else:
                row.value = value
                row.updated_at = utc_now()
