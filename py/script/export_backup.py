"""
本地备份脚本
将全部笔记导出为 Markdown 备份文件，或从本地备份文件恢复笔记

用法:
    python py/script/export_backup.py notes-latest.md
    python py/script/export_backup.py notes-latest.md --restore --force
"""
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Settings
from storage import build_storage
from utils.markdown_backup import serialize_notes, parse_notes


def export_notes(storage, target: Path) -> int:
    """导出到本地文件，返回笔记数量"""
    notes = storage.list_notes()
    target.write_text(serialize_notes(notes), encoding='utf-8')
    print(f"✓ 已导出 {len(notes)} 条笔记到 {target}")
    return len(notes)


def restore_notes(storage, source: Path, force: bool = False) -> int:
    """从本地文件恢复，现有笔记会被全部替换"""
    notes = parse_notes(source.read_text(encoding='utf-8'))
    if not notes:
        print(f"✗ {source} 中没有找到笔记内容")
        return 0

    if not force:
        answer = input(f"将用 {len(notes)} 条笔记替换现有全部笔记，确认继续？(yes/no): ")
        if answer.strip().lower() != 'yes':
            print("已取消")
            return 0

    count = storage.replace_all_notes(notes)
    print(f"✓ 已从 {source} 恢复 {count} 条笔记")
    return count


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='导出或恢复 Markdown 笔记备份')
    parser.add_argument('path', help='备份文件路径')
    parser.add_argument('--restore', action='store_true', help='从备份文件恢复（覆盖现有笔记）')
    parser.add_argument('--force', action='store_true', help='恢复时不询问确认')

    args = parser.parse_args()

    storage = build_storage(Settings())
    storage.init()
    try:
        if args.restore:
            restore_notes(storage, Path(args.path), force=args.force)
        else:
            export_notes(storage, Path(args.path))
    finally:
        storage.close()
