import json

import pytest

from engine import (
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
from engine.errors import DuplicateIdError, MissingEntryPointError, ValidationError


def test_new_story_graph_has_single_start_scene():
    graph = new_story_graph()
    assert graph.scene_ids() == ["start"]
    start = graph.scenes[0]
    assert start.text == "Your story begins here..."
    assert start.choices == []


def test_find_scene_exact_match(branching_graph):
    assert find_scene(branching_graph, "cave").text == "It is dark. Something moves."
    assert find_scene(branching_graph, "Cave") is None
    assert find_scene(branching_graph, "missing") is None


def test_terminal_and_entry(branching_graph):
    assert is_terminal(find_scene(branching_graph, "forest"))
    assert not is_terminal(find_scene(branching_graph, "start"))
    assert is_entry(find_scene(branching_graph, "start"))
    assert not is_entry(find_scene(branching_graph, "cave"))


def test_choice_uses_stored_field_name():
    choice = Choice(text="Go", target_scene_id="cave")
    assert choice.to_dict() == {"text": "Go", "targetSceneId": "cave"}
    assert Choice.from_dict({"text": "Go", "targetSceneId": "cave"}).target_scene_id == "cave"


def test_record_round_trip_keeps_order(branching_graph):
    record = branching_graph.to_record()
    assert record[0]["choices"][1] == {"text": "Walk into the forest", "targetSceneId": "forest"}

    rebuilt = StoryGraph.from_record(json.loads(json.dumps(record)))
    assert rebuilt == branching_graph


def test_from_record_tolerates_missing_scenes():
    assert StoryGraph.from_record(None).scenes == []


def test_copy_graph_is_independent(branching_graph):
    copy = branching_graph.copy_graph()
    copy.scenes[0].choices.pop()
    assert len(branching_graph.scenes[0].choices) == 2


def test_display_name_and_preview(branching_graph):
    assert scene_display_name("start") == "Start Scene"
    assert scene_display_name("cave") == "cave"
    assert scene_preview(branching_graph, "forest") == "Birdsong and tall pines."
    assert scene_preview(branching_graph, "treasure") == "Gold glitters everywhere. You ..."
    assert scene_preview(branching_graph, "nowhere") == "Unknown scene"


def test_well_formed_graph_passes(cycle_graph):
    assert ensure_well_formed(cycle_graph) is cycle_graph


def test_orphans_and_dead_ends_are_well_formed(branching_graph):
    branching_graph.scenes.append(Scene(id="orphan", text="Nobody comes here."))
    ensure_well_formed(branching_graph)


def test_missing_start_is_rejected():
    graph = StoryGraph(scenes=[Scene(id="intro", text="Hello")])
    with pytest.raises(MissingEntryPointError):
        ensure_well_formed(graph)


def test_duplicate_start_is_rejected():
    graph = StoryGraph(scenes=[Scene(id="start", text="One"), Scene(id="start", text="Two")])
    with pytest.raises(DuplicateIdError) as exc_info:
        ensure_well_formed(graph)
    assert exc_info.value.scene_id == "start"


@pytest.mark.parametrize("choice", [
    Choice(text="  ", target_scene_id="start"),
    Choice(text="Jump", target_scene_id="void"),
])
def test_invalid_choices_are_rejected(choice):
    graph = StoryGraph(scenes=[Scene(id="start", text="Edge", choices=[choice])])
    with pytest.raises(ValidationError):
        ensure_well_formed(graph)
