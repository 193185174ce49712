"""
Engine 包

互动故事的核心组件：
- models: 故事图数据模型与结构查询
- editor: 故事图编辑器
- reader: 阅读引擎（导航状态机）
- errors: 异常体系
"""

# 数据模型
from .models import (
    ENTRY_SCENE_ID,
    Choice,
    Scene,
    StoryGraph,
    new_story_graph,
    find_scene,
    is_terminal,
    is_entry,
    scene_display_name,
    scene_preview,
    ensure_well_formed,
)

# 编辑器
from .editor import (
    StoryEditor,
    create_scene,
    update_scene_text,
    select_scene,
    add_choice,
    update_choice,
    delete_choice,
)

# 阅读引擎
from .reader import ReaderSession

# 异常
from .errors import (
    StoryGraphError,
    DuplicateIdError,
    NotFoundError,
    ValidationError,
    ChoiceIndexError,
    MissingEntryPointError,
    BrokenLinkError,
)

__all__ = [
    # Models
    "ENTRY_SCENE_ID",
    "Choice",
    "Scene",
    "StoryGraph",
    "new_story_graph",
    "find_scene",
    "is_terminal",
    "is_entry",
    "scene_display_name",
    "scene_preview",
    "ensure_well_formed",
    # Editor
    "StoryEditor",
    "create_scene",
    "update_scene_text",
    "select_scene",
    "add_choice",
    "update_choice",
    "delete_choice",
    # Reader
    "ReaderSession",
    # Errors
    "StoryGraphError",
    "DuplicateIdError",
    "NotFoundError",
    "ValidationError",
    "ChoiceIndexError",
    "MissingEntryPointError",
    "BrokenLinkError",
]
