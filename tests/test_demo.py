import json

from demo import load_graph, play


def scripted(commands):
    queue = list(commands)
    return lambda prompt: queue.pop(0)


def test_load_graph_accepts_story_record(tmp_path, branching_graph):
    path = tmp_path / "story.json"
    path.write_text(json.dumps({"title": "Cave", "scenes": branching_graph.to_record()}), encoding="utf-8")
    assert load_graph(str(path)) == branching_graph

    path.write_text(json.dumps(branching_graph.to_record()), encoding="utf-8")
    assert load_graph(str(path)).scene_ids() == ["start", "cave", "forest", "treasure"]


def test_play_reads_to_an_ending(branching_graph):
    output = []
    session = play(branching_graph, scripted(["1", "1", "q"]), output.append)

    assert session.current_scene.id == "treasure"
    assert session.history_ids == ["start", "cave"]
    assert "🏁 The End" in output


def test_play_back_restart_and_bad_input(branching_graph):
    output = []
    session = play(branching_graph, scripted(["9", "x", "1", "b", "2", "r", "q"]), output.append)

    assert session.current_scene.id == "start"
    assert session.history == []
    assert "⚠️  No such choice" in output
    assert "⚠️  Enter a choice number, b, r or q" in output
