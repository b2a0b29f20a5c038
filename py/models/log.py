"""
操作日志数据库模型
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, Index

from database import Base
from utils.time_utils import utc_now, to_iso


class LogEntry(Base):
    """日志表模型（只追加）"""
    __tablename__ = 'logs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(String(16), nullable=False, default='info')
    message = Column(Text, nullable=False)
    meta = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    __table_args__ = (
        Index('logs_created_at_idx', 'created_at'),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'level': self.level,
            'message': self.message,
            'meta': self.meta,
            'created_at': to_iso(self.created_at)
        }
