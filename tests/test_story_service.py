import sys

from engine import Scene
from backend.models import ReadingState, ChoiceSelect, StoryCreate, StoryUpdate, StorySort
from backend.services.reader_service import reader_service
from backend.services.story_service import story_service


def story_payload(graph, title="The Cave") -> dict:
    return {"title": title, "scenes": graph.to_record()}


async def test_publish_story_inserts_whole_graph(store, branching_graph):
    result = await story_service.publish_story(None, "user_alice", StoryCreate(**story_payload(branching_graph)))

    assert result.success
    assert store.writes == 1
    row = store.rows[result.data["id"]]
    assert [scene["id"] for scene in row.scenes] == ["start", "cave", "forest", "treasure"]
    assert row.scenes[0]["choices"][0] == {"text": "Enter the cave", "targetSceneId": "cave"}


async def test_publish_default_story_has_start_scene(store):
    result = await story_service.publish_story(None, "user_alice", StoryCreate(title="Blank"))

    assert result.success
    assert result.data["scenes"][0]["id"] == "start"


async def test_publish_rejects_story_without_start(store):
    data = StoryCreate(title="Broken", scenes=[Scene(id="intro", text="Hi")])
    result = await story_service.publish_story(None, "user_alice", data)

    assert not result.success
    assert result.error["code"] == "MISSING_ENTRY_POINT"
    assert store.writes == 0


async def test_publish_rejects_dangling_choice(store):
    data = StoryCreate(title="Broken", scenes=[
        Scene(id="start", text="Hi", choices=[{"text": "Go", "targetSceneId": "nowhere"}]),
    ])
    result = await story_service.publish_story(None, "user_alice", data)

    assert not result.success
    assert result.error["code"] == "INVALID_GRAPH"
    assert store.writes == 0


async def test_save_story_replaces_graph(store, branching_graph, cycle_graph):
    row = store.add_row("user_alice", "Old", branching_graph.to_record())
    result = await story_service.save_story(None, row.id, "user_alice", StoryUpdate(**story_payload(cycle_graph, "New")))

    assert result.success
    assert row.title == "New"
    assert [scene["id"] for scene in row.scenes] == ["start", "A"]


async def test_save_story_only_by_author(store, branching_graph):
    row = store.add_row("user_alice", "Mine", branching_graph.to_record())
    result = await story_service.save_story(None, row.id, "user_bob", StoryUpdate(title="Stolen"))

    assert not result.success
    assert result.error["code"] == "PERMISSION_DENIED"
    assert row.title == "Mine"


async def test_save_invalid_graph_keeps_previous_version(store, branching_graph):
    row = store.add_row("user_alice", "Mine", branching_graph.to_record())
    data = StoryUpdate(title="Mine", scenes=[
        Scene(id="start", text="One"),
        Scene(id="start", text="Two"),
    ])
    result = await story_service.save_story(None, row.id, "user_alice", data)

    assert result.error["code"] == "DUPLICATE_SCENE_ID"
    assert len(row.scenes) == 4
    assert store.writes == 0


async def test_get_and_delete_story(store, branching_graph):
    row = store.add_row("user_alice", "Mine", branching_graph.to_record())

    assert (await story_service.get_story(None, row.id)).data["title"] == "Mine"
    assert (await story_service.delete_story(None, row.id, "user_bob")).error["code"] == "PERMISSION_DENIED"
    assert (await story_service.delete_story(None, row.id, "user_alice")).success
    assert (await story_service.get_story(None, row.id)).error["code"] == "STORY_NOT_FOUND"


async def test_list_stories_search_and_sort(store, branching_graph):
    store.add_row("user_alice", "Zebra Island", branching_graph.to_record())
    store.add_row("user_bob", "Apple Orchard", branching_graph.to_record())
    store.add_row("user_bob", "Island of Fog", [])

    result = await story_service.list_stories(None, keyword="island", sort=StorySort.TITLE)
    titles = [story["title"] for story in result.data["stories"]]
    assert titles == ["Island of Fog", "Zebra Island"]
    assert result.data["pagination"]["total"] == 2

    latest = await story_service.list_stories(None, page=1, limit=2)
    assert [story["title"] for story in latest.data["stories"]] == ["Island of Fog", "Apple Orchard"]
    assert latest.data["stories"][0]["scene_count"] == 0
    assert latest.data["pagination"] == {"page": 1, "limit": 2, "total": 3}


async def test_list_user_stories(store, branching_graph):
    store.add_row("user_alice", "One", branching_graph.to_record())
    store.add_row("user_bob", "Two", branching_graph.to_record())

    result = await story_service.list_user_stories(None, "user_bob")
    assert [story["title"] for story in result.data["stories"]] == ["Two"]


# ==================== 阅读 ====================

async def test_reading_cycle_through_service(store, cycle_graph):
    row = store.add_row("user_alice", "Loop", cycle_graph.to_record())

    started = await reader_service.start_reading(None, row.id)
    assert started.data["current_scene"]["id"] == "start"
    assert started.data["history"] == []

    state = await reader_service.select_choice(None, row.id, ChoiceSelect(choice_index=0))
    state = await reader_service.select_choice(None, row.id, ChoiceSelect(
        current_scene_id=state.data["current_scene"]["id"],
        history=state.data["history"],
        choice_index=0,
    ))
    assert state.data["current_scene"]["id"] == "start"
    assert state.data["history"] == ["start", "A"]

    back = await reader_service.go_back(None, row.id, ReadingState(
        current_scene_id="start", history=state.data["history"]
    ))
    assert back.data["current_scene"]["id"] == "A"
    assert back.data["history"] == ["start"]

    restarted = await reader_service.restart(None, row.id, ReadingState(current_scene_id="A", history=["start"]))
    assert restarted.data["current_scene"]["id"] == "start"
    assert restarted.data["can_go_back"] is False
    assert store.writes == 0


async def test_reading_broken_story_is_unrecoverable(store):
    row = store.add_row("user_alice", "Broken", [
        {"id": "start", "text": "Hi", "choices": [{"text": "Jump", "targetSceneId": "void"}]},
    ])

    result = await reader_service.select_choice(None, row.id, ChoiceSelect(choice_index=0))
    assert result.error["code"] == "BROKEN_LINK"
    assert result.error["recoverable"] is False

    bad_index = await reader_service.select_choice(None, row.id, ChoiceSelect(choice_index=3))
    assert bad_index.error["code"] == "CHOICE_INDEX_OUT_OF_RANGE"
    assert bad_index.error["recoverable"] is True


async def test_reading_story_without_start(store):
    row = store.add_row("user_alice", "No start", [{"id": "intro", "text": "Hi", "choices": []}])
    result = await reader_service.start_reading(None, row.id)
    assert result.error["code"] == "MISSING_ENTRY_POINT"


async def test_reading_missing_story(store):
    result = await reader_service.start_reading(None, "story_missing")
    assert result.error["code"] == "STORY_NOT_FOUND"


async def test_store_replaces_dao_in_service_modules(store):
    assert sys.modules["backend.services.story_service"].StoryDAO is store
    assert sys.modules["backend.services.reader_service"].StoryDAO is store
