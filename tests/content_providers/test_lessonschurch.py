import asyncio
import logging

import httpx
import pytest

from content_providers.base.models import AuthData, ContentFile, ContentFolder
from content_providers.formats.resolver import FormatResolver
from content_providers.lessonschurch import LessonsChurchProvider
from content_providers.lessonschurch.converters import get_embed_url, normalize_item_type

VENUE_PATH = "/lessons/p1/s1/l1/v1"

VENUE_FEED = {
    "id": "v1",
    "lessonName": "Lesson One",
    "lessonDescription": "Intro lesson",
    "lessonImage": "https://cdn/lesson.png",
    "sections": [
        {
            "id": "sec1",
            "name": "Opening",
            "actions": [
                {
                    "id": "act1",
                    "actionType": "Play",
                    "content": "Intro Video",
                    "files": [{"id": "file1", "name": "Intro", "url": "https://cdn/intro.mp4", "seconds": 90}],
                },
                {"id": "act2", "actionType": "say", "content": "Say hi", "files": []},
            ],
        },
        {"id": "sec2", "name": "Discussion", "actions": [{"id": "act3", "actionType": "say"}]},
    ],
}

PLAYLIST = {
    "lessonImage": "https://cdn/lesson.png",
    "messages": [
        {
            "name": "Countdown",
            "files": [
                {"id": "a", "name": "Clip", "url": "https://cdn/a.mp4", "seconds": 10, "loopVideo": True},
                {"url": "https://cdn/b.png", "fileType": "image/png"},
                {"id": "skip", "name": "No url"},
            ],
        }
    ],
}

PLAN_ITEMS = {
    "venueName": "Main Venue",
    "items": [
        {
            "id": "h1",
            "itemType": "header",
            "label": "Opening",
            "children": [{"id": "c1", "itemType": "lessonSection", "relatedId": "sec1", "label": "Welcome"}],
        }
    ],
}

ACTIONS = {
    "sections": [
        {
            "id": "sec1",
            "actions": [
                {"id": "act1", "name": "Intro Video", "actionType": "play", "seconds": 90},
                {"id": "act2", "name": "Title Slide", "actionType": "play"},
            ],
        },
        {"id": "sec2", "actions": []},
    ]
}

ROUTES = {
    "/venues/public/feed/v1": VENUE_FEED,
    "/venues/playlist/v1": PLAYLIST,
    "/venues/public/planItems/v1": PLAN_ITEMS,
    "/venues/public/actions/v1": ACTIONS,
    "/programs/public": [{"id": "p1", "name": "Elementary", "image": "https://cdn/p1.png"}],
    "/venues/public/lesson/l1": [{"id": "v1", "name": "Main"}, {"id": "v2", "name": "Small Group"}],
    "/lessons/public/l1": {"id": "l1", "image": "https://cdn/lesson.png"},
    "/addOns/public": [
        {"id": "ad1", "category": "Games", "name": "Game Time", "image": "https://cdn/game.png"},
        {"id": "ad2", "category": "Music", "name": "Song", "seconds": 120},
        {"id": "ad3", "category": "Games", "name": "Broken"},
    ],
    "/addOns/public/ad1": {"video": {"id": "vid1", "seconds": 30, "loopVideo": True}},
    "/addOns/public/ad2": {"file": {"contentPath": "https://cdn/song.mp4", "fileType": "video/mp4"}},
    "/addOns/public/ad3": {},
}


def make_provider(routes=None, seen=None, **kwargs):
    routes = ROUTES if routes is None else routes

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        payload = routes.get(request.url.path)
        if payload is None:
            return httpx.Response(404)
        return httpx.Response(200, json=payload)

    return LessonsChurchProvider(transport=httpx.MockTransport(handler), **kwargs)


def run(coro):
    return asyncio.run(coro)


def test_capabilities_and_info() -> None:
    provider = make_provider()
    caps = provider.get_capabilities()
    assert (caps.presentations, caps.playlist, caps.instructions) == (True, True, True)
    assert provider.info().to_dict()["requiresAuth"] is False


def test_presentations_from_venue_feed() -> None:
    plan = run(make_provider().get_presentations(VENUE_PATH))
    assert plan.id == "v1"
    assert plan.name == "Lesson One"
    assert plan.description == "Intro lesson"
    assert [s.id for s in plan.sections] == ["sec1"]
    (presentation,) = plan.sections[0].presentations
    assert presentation.action_type == "play"
    assert presentation.name == "Intro Video"
    (file,) = presentation.files
    assert file.media_type == "video"
    assert file.embed_url == "https://lessons.church/embed/action/act1"
    assert file.image == "https://cdn/lesson.png"
    assert plan.all_files == [file]


def test_presentations_need_a_venue_segment() -> None:
    seen = []
    assert run(make_provider(seen=seen).get_presentations("/lessons/p1/s1")) is None
    assert seen == []


def test_playlist_files_and_resolution_query() -> None:
    seen = []
    files = run(make_provider(seen=seen).get_playlist(VENUE_PATH, resolution=720))
    assert seen[0].url.params["resolution"] == "720"
    assert [f.id for f in files] == ["a", "playlist-0"]
    clip, slide = files
    assert clip.provider_data == {"loop": None, "loopVideo": True}
    assert slide.media_type == "image"
    assert slide.title == "Countdown"


def test_instructions_from_plan_items() -> None:
    instructions = run(make_provider().get_instructions(VENUE_PATH))
    assert instructions.name == "Main Venue"
    (header,) = instructions.items
    assert header.item_type == "header"
    assert header.embed_url is None
    (child,) = header.children
    assert child.item_type == "section"
    assert child.related_id == "sec1"
    assert child.embed_url == "https://lessons.church/embed/section/sec1"
    assert child.children is None


def test_expanded_instructions_attach_section_actions() -> None:
    instructions = run(make_provider().get_expanded_instructions(VENUE_PATH))
    section = instructions.items[0].children[0]
    assert [a.id for a in section.children] == ["act1", "act2"]
    intro, slide = section.children
    assert intro.download_url == "https://lessons.church/embed/action/act1"
    assert intro.children[0].id == "act1-file"
    assert intro.children[0].item_type == "file"
    assert slide.seconds == 15


def test_expanded_instructions_survive_missing_actions() -> None:
    routes = {k: v for k, v in ROUTES.items() if k != "/venues/public/actions/v1"}
    instructions = run(make_provider(routes).get_expanded_instructions(VENUE_PATH))
    assert instructions.items[0].children[0].children is None


def test_browse_root_and_lessons_tree() -> None:
    provider = make_provider()
    root = run(provider.browse("/"))
    assert [f.path for f in root] == ["/lessons", "/addons"]

    programs = run(provider.browse("/lessons"))
    assert programs == [ContentFolder(id="p1", title="Elementary", path="/lessons/p1", image="https://cdn/p1.png")]

    venues = run(provider.browse("/lessons/p1/s1/l1"))
    assert [v.path for v in venues] == ["/lessons/p1/s1/l1/v1", "/lessons/p1/s1/l1/v2"]
    assert all(v.is_leaf and v.image == "https://cdn/lesson.png" for v in venues)

    files = run(provider.browse(VENUE_PATH))
    assert all(isinstance(f, ContentFile) for f in files)
    assert run(provider.browse("/unknown")) == []


def test_browse_add_ons() -> None:
    provider = make_provider()
    categories = run(provider.browse("/addons"))
    assert [c.title for c in categories] == ["Games", "Music"]
    assert categories[0].path == "/addons/Games"

    games = run(provider.browse("/addons/Games"))
    (game,) = games
    assert game.url == "https://api.lessons.church/externalVideos/download/vid1"
    assert game.embed_url == "https://lessons.church/embed/addon/ad1"
    assert game.seconds == 30
    assert game.provider_data == {"loopVideo": True}

    (song,) = run(provider.browse("/addons/Music"))
    assert song.url == "https://cdn/song.mp4"
    assert song.media_type == "video"
    assert song.seconds == 120


def test_browse_skips_entries_without_ids() -> None:
    routes = dict(ROUTES)
    routes["/programs/public"] = [{"name": "No id"}, "junk", {"id": "p1", "name": "Elementary"}]
    routes["/venues/public/lesson/l1"] = [{"name": "Orphan venue"}, {"id": "v1", "name": "Main"}]
    routes["/addOns/public"] = [
        {"category": "Games", "name": "Missing id"},
        {"id": "ad1", "category": "Games", "name": "Game Time"},
        {"id": "ad4", "category": "Games", "name": "Video without id"},
    ]
    routes["/addOns/public/ad4"] = {"video": {"seconds": 12}}
    provider = make_provider(routes)

    assert [p.id for p in run(provider.browse("/lessons"))] == ["p1"]
    assert [v.path for v in run(provider.browse("/lessons/p1/s1/l1"))] == ["/lessons/p1/s1/l1/v1"]
    assert [c.title for c in run(provider.browse("/addons"))] == ["Games"]
    assert [g.id for g in run(provider.browse("/addons/Games"))] == ["ad1"]


def test_http_errors_become_none_and_are_logged(caplog) -> None:
    caplog.set_level(logging.WARNING)
    provider = make_provider(routes={})
    assert run(provider.get_presentations(VENUE_PATH)) is None
    assert '"event": "http.error"' in caplog.text
    assert '"code": "not_found"' in caplog.text
    assert '"status": 404' in caplog.text


def test_transport_failure_becomes_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = LessonsChurchProvider(transport=httpx.MockTransport(handler))
    assert run(provider.get_playlist(VENUE_PATH)) is None
    assert run(provider.browse("/lessons")) == []


def test_invalid_json_becomes_none() -> None:
    provider = LessonsChurchProvider(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")))
    assert run(provider.api_request("/programs/public")) is None


def test_api_request_sends_auth_header_and_custom_base() -> None:
    seen = []
    provider = make_provider(seen=seen, api_base="https://staging.example/")
    auth = AuthData(access_token="tok")
    run(provider.api_request("/programs/public", auth=auth))
    assert str(seen[0].url) == "https://staging.example/programs/public"
    assert seen[0].headers["Authorization"] == "Bearer tok"


def test_resolver_serves_native_views() -> None:
    provider = make_provider()
    resolver = FormatResolver()
    playlist = run(resolver.get_playlist_with_meta(provider, VENUE_PATH))
    assert playlist.meta.is_native is True
    assert len(playlist.data) == 2


def test_resolver_falls_back_when_feed_missing() -> None:
    routes = {k: v for k, v in ROUTES.items() if k != "/venues/public/feed/v1"}
    result = run(FormatResolver().get_presentations_with_meta(make_provider(routes), VENUE_PATH))
    assert result.meta.source_format == "instructions"
    assert result.data.id == "v1"
    assert result.data.name == "Main Venue"


@pytest.mark.parametrize(
    "raw, expected",
    [("lessonSection", "section"), ("lessonAction", "action"), ("lessonAddOn", "addon"), ("header", "header"), (None, None)],
)
def test_normalize_item_type(raw, expected) -> None:
    assert normalize_item_type(raw) == expected


def test_get_embed_url() -> None:
    assert get_embed_url("addon", "x1") == "https://lessons.church/embed/addon/x1"
    assert get_embed_url("header", "x1") is None
    assert get_embed_url("action", None) is None
