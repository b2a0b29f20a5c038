"""
时间工具模块
统一使用 UTC 时间，对外输出 ISO-8601 字符串（毫秒精度，Z 结尾）
"""
from datetime import datetime, UTC
from typing import Optional, Union


def utc_now() -> datetime:
    """当前 UTC 时间（带时区）"""
    return datetime.now(UTC)


def epoch_millis() -> int:
    """当前时间的毫秒时间戳"""
    return int(utc_now().timestamp() * 1000)


def ensure_utc(value: datetime) -> datetime:
    """无时区信息的时间按 UTC 处理（SQLite 不保存时区）"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """
    转换为 ISO 字符串

    示例: 2026-01-02T03:04:05.678Z
    """
    if value is None:
        return None
    value = ensure_utc(value)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: Union[str, datetime, None], default: Optional[datetime] = None) -> Optional[datetime]:
    """
    解析 ISO 时间字符串

    支持 Z 结尾、带偏移量以及 `YYYY-MM-DD HH:MM:SS` 形式；
    无法解析时返回 default。
    """
    if value is None:
        return default
    if isinstance(value, datetime):
        return ensure_utc(value)

    text = str(value).strip()
    if not text:
        return default
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return default
