"""
ID 生成器

提供故事的唯一 ID 生成功能
"""

import ulid


def generate_ulid() -> str:
    """
    生成 ULID（Universally Unique Lexicographically Sortable Identifier）

    Returns:
        ULID 字符串
    """
    return str(ulid.new())


def generate_story_id() -> str:
    """
    生成故事 ID

    格式：story_<ulid>
    示例：story_01ARZ3NDEKTSV4RRFFQ69G5FAV

    Returns:
        故事 ID
    """
    return f"story_{generate_ulid()}"
