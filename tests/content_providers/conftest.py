"""Shared fixtures: an in-memory provider that counts accessor calls, and sample views."""

from collections import Counter

import pytest

from content_providers.base.capabilities import ProviderCapabilities
from content_providers.base.interfaces import ContentProvider
from content_providers.base.models import (
    ContentFile,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
)


class FakeProvider(ContentProvider):
    id = "fake"
    name = "Fake Provider"

    def __init__(self, capabilities=None, presentations=None, playlist=None, instructions=None, expanded=None, failing=()):
        self.capabilities = capabilities or ProviderCapabilities()
        self._views = {
            "presentations": presentations,
            "playlist": playlist,
            "instructions": instructions,
            "expandedInstructions": expanded,
        }
        self._failing = set(failing)
        self.calls = Counter()

    def _answer(self, view):
        self.calls[view] += 1
        if view in self._failing:
            raise RuntimeError(f"{view} exploded")
        return self._views[view]

    async def browse(self, path=None, auth=None):
        return []

    async def get_presentations(self, path, auth=None):
        return self._answer("presentations")

    async def get_playlist(self, path, auth=None, resolution=None):
        return self._answer("playlist")

    async def get_instructions(self, path, auth=None):
        return self._answer("instructions")

    async def get_expanded_instructions(self, path, auth=None):
        return self._answer("expandedInstructions")


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def song_file():
    return ContentFile(id="f1", title="Song A", media_type="video", url="https://x/a.mp4")


@pytest.fixture
def sample_plan():
    """Two sections; the second holds a multi-file action and an informational item."""
    f1 = ContentFile(id="f1", title="Song A", media_type="video", url="https://x/a.mp4", seconds=200)
    f2 = ContentFile(id="f2", title="Slide 1", media_type="image", url="https://x/1.png", embed_url="https://x/embed/1", seconds=15)
    f3 = ContentFile(id="f3", title="Slide 2", media_type="image", url="https://x/2.png", seconds=15)
    return Plan.build(
        id="plan-1",
        name="Sunday Service",
        sections=[
            PlanSection(
                id="s1",
                name="Worship",
                presentations=[PlanPresentation(id="p1", name="Song A", action_type="play", files=[f1])],
            ),
            PlanSection(
                id="s2",
                name="Message",
                presentations=[
                    PlanPresentation(id="p2", name="Slides", action_type="add-on", files=[f2, f3]),
                    PlanPresentation(id="p3", name="Prayer", action_type="other"),
                ],
            ),
        ],
    )


@pytest.fixture
def sample_instructions():
    return Instructions(
        name="Lesson 1",
        items=[
            InstructionItem(
                id="sec-1",
                item_type="section",
                label="Opening",
                children=[
                    InstructionItem(
                        id="a1",
                        item_type="action",
                        label="Welcome Video",
                        description="play",
                        children=[InstructionItem(id="a1-file", item_type="file", label="Welcome", embed_url="https://x/welcome.mp4", seconds=60)],
                    ),
                    InstructionItem(id="a2", item_type="action", label="Say hello", description="other", children=[]),
                ],
            ),
            InstructionItem(id="note", item_type="header", label="Leader notes"),
        ],
    )
