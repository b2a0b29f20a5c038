"""
笔记相关Pydantic模型
"""
from datetime import datetime, UTC
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional, List

from utils.time_utils import to_iso, parse_iso


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [tag.strip() for tag in tags if tag and tag.strip()]


class NoteBase(BaseModel):
    """笔记基础模型"""
    title: str = Field(..., description="笔记标题")
    content: str = Field(..., description="Markdown 正文")
    tags: Optional[List[str]] = Field(default=None, description="标签列表")

    @field_validator('title')
    def title_validator(cls, v: str) -> str:
        """标题不能为空"""
        if not v or not v.strip():
            raise ValueError('标题不能为空')
        return v.strip()

    @field_validator('tags')
    def tags_validator(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)


class NoteCreate(NoteBase):
    """笔记创建/覆盖模型，未提供 id 时由服务端生成"""
    id: Optional[str] = Field(default=None, description="笔记ID")
    createdAt: Optional[str] = Field(default=None, description="创建时间（导入时保留）")

    @field_validator('id')
    def id_validator(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


IMPORT_DEFAULT_TITLE = '导入的笔记'


def _import_timestamp(v: Any) -> Optional[str]:
    """数字按毫秒时间戳处理，无法识别的值返回 None（由存储层使用当前时间）"""
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        try:
            return to_iso(datetime.fromtimestamp(v / 1000, UTC))
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(v, str):
        return to_iso(parse_iso(v))
    return None


class NoteImportItem(NoteCreate):
    """
    批量导入条目，兼容 created_at 字段

    导入比直接保存宽松：缺少正文视为空字符串，tags 不是数组时忽略，
    时间无法解析时使用当前时间，缺少标题时使用默认标题。
    只有标题不是字符串的条目会被拒绝。
    """
    title: str = Field(default=IMPORT_DEFAULT_TITLE, description="笔记标题")
    content: str = Field(default='', description="Markdown 正文")
    tags: Optional[List[str]] = Field(default_factory=list, description="标签列表")
    created_at: Optional[str] = Field(default=None, description="创建时间（兼容字段）")

    @field_validator('title', mode='before')
    def import_title_validator(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return IMPORT_DEFAULT_TITLE
        return v

    @field_validator('content', mode='before')
    def import_content_validator(cls, v: Any) -> str:
        if v is None:
            return ''
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v if isinstance(v, str) else ''

    @field_validator('tags', mode='before')
    def import_tags_validator(cls, v: Any) -> List[str]:
        if not isinstance(v, list):
            return []
        return [str(tag) for tag in v if isinstance(tag, (str, int, float)) and not isinstance(tag, bool)]

    @field_validator('id', mode='before')
    def import_id_validator(cls, v: Any) -> Optional[str]:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v if isinstance(v, str) else None

    @field_validator('createdAt', 'created_at', mode='before')
    def import_timestamp_validator(cls, v: Any) -> Optional[str]:
        return _import_timestamp(v)


class NoteUpdate(BaseModel):
    """笔记更新模型（只更新提供的字段）"""
    title: Optional[str] = Field(None, description="标题")
    content: Optional[str] = Field(None, description="正文")
    tags: Optional[List[str]] = Field(None, description="标签列表")

    @field_validator('title')
    def title_validator(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError('标题不能为空')
        return v.strip() if v is not None else None

    @field_validator('tags')
    def tags_validator(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)


class NoteResponse(BaseModel):
    """笔记响应模型"""
    id: str = Field(..., description="笔记ID")
    title: str = Field(..., description="标题")
    content: str = Field(..., description="正文")
    tags: List[str] = Field(default_factory=list, description="标签列表")
    createdAt: Optional[str] = Field(None, description="创建时间")
    updatedAt: Optional[str] = Field(None, description="更新时间")


class NoteSavedResponse(BaseModel):
    success: bool = True
    id: str


class NoteUpdatedResponse(BaseModel):
    success: bool = True
    note: NoteResponse


class ImportResponse(BaseModel):
    """批量导入结果"""
    success: bool = True
    imported: int = Field(..., description="成功导入数量")
    skipped: int = Field(0, description="跳过的无效条目数量")
