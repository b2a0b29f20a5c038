"""
日志相关Pydantic模型
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Union
from enum import Enum


class LogLevel(str, Enum):
    """日志级别"""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LogEntryResponse(BaseModel):
    id: Optional[Union[int, str]] = Field(None, description="日志ID")
    level: str = Field(..., description="日志级别")
    message: str = Field(..., description="日志内容")
    meta: Optional[str] = Field(None, description="附加信息（JSON字符串）")
    created_at: Optional[str] = Field(None, description="记录时间")


class LogListResponse(BaseModel):
    success: bool = True
    count: int = Field(..., description="返回条数")
    items: List[LogEntryResponse] = Field(default_factory=list)
