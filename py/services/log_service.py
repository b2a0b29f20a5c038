"""
日志服务
操作日志只追加写入，读取时最新的在前并限制条数
"""
from typing import Any, Dict, List, Optional, Union
import json
import logging

from context import AppContext
from schemas.log import LogLevel

logger = logging.getLogger(__name__)

_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def dump_meta(meta: Union[str, Dict[str, Any], None]) -> Optional[str]:
    """附加信息统一保存为字符串"""
    if meta is None or isinstance(meta, str):
        return meta
    return json.dumps(meta, ensure_ascii=False, default=str)


class LogService:
    """日志服务类"""

    def append(
        self,
        ctx: AppContext,
        level: Union[LogLevel, str],
        message: str,
        meta: Union[str, Dict[str, Any], None] = None
    ) -> None:
        """写入一条日志；写入失败只记录到应用日志，不影响调用方"""
        try:
            level = LogLevel(level)
        except ValueError:
            level = LogLevel.INFO
        meta_text = dump_meta(meta)
        logger.log(_LEVELS[level], f"[{level.value.upper()}] {message}" + (f" {meta_text}" if meta_text else ""))

        try:
            ctx.storage.append_log(level.value, message, meta_text, ctx.settings.LOG_RETENTION)
        except Exception:
            logger.exception(f"写入日志失败: {message}")

    def list_logs(self, ctx: AppContext, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """获取最近的日志"""
        max_items = ctx.settings.LOG_QUERY_LIMIT
        if limit is None or limit <= 0 or limit > max_items:
            limit = max_items
        return ctx.storage.list_logs(limit)

    def clear_logs(self, ctx: AppContext) -> int:
        """清空全部日志"""
        removed = ctx.storage.clear_logs()
        logger.info(f"已清空 {removed} 条日志")
        return removed


# 创建全局的日志服务实例
log_service = LogService()
