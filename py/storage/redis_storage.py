"""
Redis 存储实现
兼容 Upstash Redis，键约定:
    notes:list          笔记 id 集合
    notes:item:<id>     单条笔记 JSON
    notes:logs          日志列表（最新的在前）
    notes:settings      设置哈希
"""
from typing import Any, Dict, List, Optional
import json
import logging

import redis

from utils.time_utils import utc_now, to_iso, parse_iso
from .base import StorageBackend

logger = logging.getLogger(__name__)

NOTES_KEY = 'notes:list'
LOGS_KEY = 'notes:logs'
LOG_SEQ_KEY = 'notes:logs:seq'
SETTINGS_KEY = 'notes:settings'


def note_key(note_id: str) -> str:
    return f'notes:item:{note_id}'


def _decode(raw) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8')
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning(f"无法解析的 Redis 数据: {str(raw)[:100]}")
        return None
    return value if isinstance(value, dict) else None


def _serialize_note(note: Dict[str, Any], created_at, updated_at) -> str:
    return json.dumps({
        'id': note['id'],
        'title': note['title'],
        'content': note.get('content') or '',
        'tags': list(note.get('tags') or []),
        'createdAt': to_iso(created_at),
        'updatedAt': to_iso(updated_at),
    }, ensure_ascii=False)


class RedisStorage(StorageBackend):
    """Redis 存储后端"""

    name = 'redis'

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> 'RedisStorage':
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def init(self) -> None:
        self.ping()
        logger.info("Redis 连接成功")

    def ping(self) -> bool:
        return bool(self.client.ping())

    def close(self) -> None:
        self.client.close()

    # ============ 笔记 ============
    def list_notes(self) -> List[Dict[str, Any]]:
        ids = self.client.smembers(NOTES_KEY)
        if not ids:
            return []
        values = self.client.mget([note_key(note_id) for note_id in ids])
        notes = [note for note in (_decode(v) for v in values) if note]
        notes.sort(key=lambda n: n.get('updatedAt') or '', reverse=True)
        return notes

    def get_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        return _decode(self.client.get(note_key(note_id)))

    def upsert_note(self, note: Dict[str, Any]) -> Dict[str, Any]:
        now = utc_now()
        existing = self.get_note(note['id'])
        if existing:
            created_at = parse_iso(existing.get('createdAt'), now)
        else:
            created_at = note.get('createdAt') or now
        payload = _serialize_note(note, created_at, note.get('updatedAt') or now)

        pipe = self.client.pipeline()
        pipe.set(note_key(note['id']), payload)
        pipe.sadd(NOTES_KEY, note['id'])
        pipe.execute()
        return json.loads(payload)

    def update_note(self, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        existing = self.get_note(note_id)
        if existing is None:
            return None
        merged = dict(existing)
        for field in ('title', 'content', 'tags'):
            if fields.get(field) is not None:
                merged[field] = fields[field]
        payload = _serialize_note(merged, parse_iso(existing.get('createdAt'), utc_now()), utc_now())
        self.client.set(note_key(note_id), payload)
        return json.loads(payload)

    def delete_note(self, note_id: str) -> bool:
        pipe = self.client.pipeline()
        pipe.delete(note_key(note_id))
        pipe.srem(NOTES_KEY, note_id)
        deleted, _ = pipe.execute()
        return bool(deleted)

    def replace_all_notes(self, notes: List[Dict[str, Any]]) -> int:
        now = utc_now()
        old_ids = self.client.smembers(NOTES_KEY) or set()

        # MULTI/EXEC 中完成清空与写入
        pipe = self.client.pipeline(transaction=True)
        for old_id in old_ids:
            pipe.delete(note_key(old_id))
        pipe.delete(NOTES_KEY)
        for note in notes:
            pipe.set(
                note_key(note['id']),
                _serialize_note(note, note.get('createdAt') or now, note.get('updatedAt') or now)
            )
            pipe.sadd(NOTES_KEY, note['id'])
        pipe.execute()
        logger.info(f"已清空 {len(old_ids)} 条旧笔记，写入 {len(notes)} 条新笔记")
        return len(notes)

    # ============ 日志 ============
    def append_log(self, level: str, message: str, meta: Optional[str], retention: int) -> None:
        entry = {
            'id': int(self.client.incr(LOG_SEQ_KEY)),
            'level': level,
            'message': message,
            'meta': meta,
            'created_at': to_iso(utc_now()),
        }
        pipe = self.client.pipeline()
        pipe.lpush(LOGS_KEY, json.dumps(entry, ensure_ascii=False))
        if retention > 0:
            pipe.ltrim(LOGS_KEY, 0, retention - 1)
        pipe.execute()

    def list_logs(self, limit: int) -> List[Dict[str, Any]]:
        raw = self.client.lrange(LOGS_KEY, 0, limit - 1) if limit > 0 else []
        items = []
        for value in raw:
            entry = _decode(value)
            if entry is None:
                entry = {
                    'id': None,
                    'level': 'error',
                    'message': 'Invalid log entry',
                    'meta': None,
                    'created_at': None,
                }
            items.append(entry)
        return items

    def clear_logs(self) -> int:
        count = self.client.llen(LOGS_KEY)
        self.client.delete(LOGS_KEY)
        return int(count or 0)

    # ============ 设置 ============
    def get_setting(self, key: str) -> Optional[str]:
        value = self.client.hget(SETTINGS_KEY, key)
        if isinstance(value, bytes):
            return value.decode('utf-8')
        return value

    def set_setting(self, key: str, value: str) -> None:
        self.client.hset(SETTINGS_KEY, key, value)
