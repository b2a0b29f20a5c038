"""
Markdown 备份格式

每条笔记序列化为:

    # <标题>
    标签: <逗号分隔的标签>
    创建时间: <ISO 时间>
    更新时间: <ISO 时间>

    <正文>

笔记之间以 "\\n\\n---\\n\\n" 分隔。正文中出现相同的分隔序列时无法正确还原。
"""
from typing import Any, Dict, Iterable, List, Optional

from utils.time_utils import utc_now, to_iso, parse_iso, epoch_millis

NOTE_SEPARATOR = '\n\n---\n\n'
TAGS_PREFIX = '标签: '
CREATED_PREFIX = '创建时间: '
UPDATED_PREFIX = '更新时间: '
DEFAULT_TITLE = '无标题'
IMPORTED_TITLE = '导入笔记 {index}'

_META_PREFIXES = (TAGS_PREFIX, CREATED_PREFIX, UPDATED_PREFIX)


def _format_timestamp(value) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return to_iso(value) or ''


def serialize_note(note: Dict[str, Any]) -> str:
    """序列化单条笔记"""
    title = note.get('title') or DEFAULT_TITLE
    tags = note.get('tags')
    tags_text = ', '.join(str(tag) for tag in tags) if isinstance(tags, list) else ''
    return (
        f"# {title}\n"
        f"{TAGS_PREFIX}{tags_text}\n"
        f"{CREATED_PREFIX}{_format_timestamp(note.get('createdAt'))}\n"
        f"{UPDATED_PREFIX}{_format_timestamp(note.get('updatedAt'))}\n"
        f"\n"
        f"{note.get('content') or ''}"
    )


def serialize_notes(notes: Iterable[Dict[str, Any]]) -> str:
    """将笔记列表序列化为一个 Markdown 文档"""
    return NOTE_SEPARATOR.join(serialize_note(note) for note in notes if isinstance(note, dict))


def _parse_tags(text: str) -> List[str]:
    return [tag.strip() for tag in text.split(',') if tag.strip()]


def parse_block(block: str, index: int, id_prefix: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    解析单个笔记块

    第一行（去掉 "# " 前缀）为标题；随后扫描元数据行，
    第一个空行之后的内容为正文。
    """
    block = block.strip()
    if not block:
        return None

    lines = block.split('\n')
    title = lines[0]
    if title.startswith('# '):
        title = title[2:]
    title = title.strip() or IMPORTED_TITLE.format(index=index + 1)

    now = utc_now()
    tags: List[str] = []
    created_at = now
    updated_at = now
    body_lines: Optional[List[str]] = None
    loose_lines: List[str] = []

    for position in range(1, len(lines)):
        line = lines[position]
        if line.startswith(TAGS_PREFIX):
            tags = _parse_tags(line[len(TAGS_PREFIX):])
        elif line.startswith(CREATED_PREFIX):
            created_at = parse_iso(line[len(CREATED_PREFIX):], now)
        elif line.startswith(UPDATED_PREFIX):
            updated_at = parse_iso(line[len(UPDATED_PREFIX):], now)
        elif line == '':
            body_lines = lines[position + 1:]
            break
        else:
            loose_lines.append(line)

    # 没有空行分隔时，非元数据行即为正文
    if body_lines is None:
        body_lines = loose_lines

    prefix = id_prefix or f'imported-{epoch_millis()}'
    return {
        'id': f'{prefix}-{index}',
        'title': title,
        'content': '\n'.join(body_lines),
        'tags': tags,
        'createdAt': created_at,
        'updatedAt': updated_at,
    }


def parse_notes(document: Optional[str]) -> List[Dict[str, Any]]:
    """
    将 Markdown 备份文档解析为笔记列表

    空白块会被跳过；返回的 createdAt/updatedAt 为 datetime。
    """
    if not document or not isinstance(document, str):
        return []

    document = document.replace('\r\n', '\n')
    id_prefix = f'imported-{epoch_millis()}'
    notes = []
    blocks = [part for part in document.split(NOTE_SEPARATOR) if part.strip()]
    for index, block in enumerate(blocks):
        note = parse_block(block, index, id_prefix)
        if note is not None:
            notes.append(note)
    return notes
