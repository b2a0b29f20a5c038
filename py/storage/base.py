"""
存储接口定义

所有实现以字典形式交换笔记数据：
    {id, title, content, tags, createdAt, updatedAt}
写入时 createdAt/updatedAt 为 datetime，读出时为 ISO 字符串。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class StorageError(Exception):
    """存储后端错误"""


class StorageBackend(ABC):
    """存储后端抽象基类"""

    name: str = 'abstract'

    # ============ 生命周期 ============
    def init(self) -> None:
        """初始化表结构或检查连接"""

    @abstractmethod
    def ping(self) -> bool:
        ...

    def close(self) -> None:
        """释放连接"""

    # ============ 笔记 ============
    @abstractmethod
    def list_notes(self) -> List[Dict[str, Any]]:
        """按更新时间倒序返回全部笔记"""

    @abstractmethod
    def get_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def upsert_note(self, note: Dict[str, Any]) -> Dict[str, Any]:
        """按 id 插入或覆盖；覆盖时保留原有的创建时间"""

    @abstractmethod
    def update_note(self, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """更新 title/content/tags 中给出的字段；笔记不存在时返回 None"""

    @abstractmethod
    def delete_note(self, note_id: str) -> bool:
        ...

    @abstractmethod
    def replace_all_notes(self, notes: List[Dict[str, Any]]) -> int:
        """清空全部笔记并写入给定列表，返回写入数量"""

    # ============ 日志 ============
    @abstractmethod
    def append_log(self, level: str, message: str, meta: Optional[str], retention: int) -> None:
        ...

    @abstractmethod
    def list_logs(self, limit: int) -> List[Dict[str, Any]]:
        """最新的在前"""

    @abstractmethod
    def clear_logs(self) -> int:
        ...

    # ============ 设置 ============
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        ...
