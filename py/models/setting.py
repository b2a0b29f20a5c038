"""
键值设置表模型
用于保存数据库密码、密码启用标志以及备份兜底内容
"""
from sqlalchemy import Column, String, DateTime, Text

from database import Base
from utils.time_utils import utc_now


class Setting(Base):
    """设置表模型"""
    __tablename__ = 'settings'

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
