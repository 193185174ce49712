"""
终端阅读演示

用法：python demo.py story.json
story.json 可以是场景列表，也可以是包含 scenes 字段的故事记录
"""

import json
import sys
from typing import Callable

from engine import ReaderSession, StoryGraph, StoryGraphError


def load_graph(path: str) -> StoryGraph:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    scenes = data.get("scenes", []) if isinstance(data, dict) else data
    return StoryGraph.from_record(scenes)


def play(graph: StoryGraph,
         read_input: Callable[[str], str] = input,
         write: Callable[[str], None] = print) -> ReaderSession:
    """在终端里阅读故事：数字选择选项，b 返回，r 重来，q 退出"""
    session = ReaderSession(graph)

    while True:
        scene = session.current_scene
        write(f"\n📖 [{scene.id}] {scene.text}")
        if session.is_terminal:
            write("🏁 The End")
        for index, choice in enumerate(scene.choices):
            write(f"  {index + 1}. {choice.text}")

        command = read_input("> ").strip().lower()
        if command == "q":
            return session
        if command == "b":
            session.go_back()
        elif command == "r":
            session.restart()
        elif command.isdigit():
            try:
                session.select_choice(int(command) - 1)
            except IndexError:
                write("⚠️  No such choice")
        else:
            write("⚠️  Enter a choice number, b, r or q")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    try:
        play(load_graph(sys.argv[1]))
    except StoryGraphError as e:
        print(f"❌ {e.message}")
        sys.exit(2)
