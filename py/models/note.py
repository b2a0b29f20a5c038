"""
笔记相关数据库模型
"""
from sqlalchemy import Column, String, DateTime, Text, Index
import json

from database import Base
from utils.time_utils import utc_now, to_iso


class Note(Base):
    """笔记表模型"""
    __tablename__ = 'notes'

    id = Column(String(255), primary_key=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False, default='')
    # 标签以 JSON 数组字符串存储
    tags = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    __table_args__ = (
        Index('notes_updated_at_idx', 'updated_at'),
    )

    @staticmethod
    def dump_tags(tags) -> str:
        return json.dumps(list(tags or []), ensure_ascii=False)

    @property
    def tag_list(self) -> list:
        """解析标签字段，损坏的数据按空列表处理"""
        if not self.tags:
            return []
        try:
            value = json.loads(self.tags)
        except ValueError:
            return []
        return [str(tag) for tag in value] if isinstance(value, list) else []

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content or '',
            'tags': self.tag_list,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at)
        }
