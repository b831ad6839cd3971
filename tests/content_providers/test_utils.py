from content_providers.base.models import InstructionItem, Instructions
from content_providers.base.utils.durations import (
    DurationEstimationConfig,
    count_words,
    estimate_duration,
    estimate_image_duration,
    estimate_text_duration,
)
from content_providers.base.utils.instruction_paths import generate_path, navigate_to_path
from content_providers.base.utils.media import create_file, create_folder, detect_media_type
from content_providers.base.utils.paths import append_to_path, build_path, get_segment, parse_path


def test_parse_path_segments_and_depth() -> None:
    parsed = parse_path("/lessons/p1/s1/")
    assert parsed.segments == ["lessons", "p1", "s1"]
    assert parsed.depth == 3
    assert parse_path("/").depth == 0
    assert parse_path(None).segments == []


def test_get_segment_bounds() -> None:
    path = "/lessons/p1/s1/l1/v1"
    assert get_segment(path, 4) == "v1"
    assert get_segment(path, 5) is None
    assert get_segment(path, -1) is None
    assert get_segment("/", 0) is None


def test_build_and_append_path() -> None:
    assert build_path(["a", "b"]) == "/a/b"
    assert build_path([]) == ""
    assert append_to_path("/", "x") == "/x"
    assert append_to_path(None, "x") == "/x"
    assert append_to_path("/a/", "b") == "/a/b"


def test_navigate_to_path(sample_instructions) -> None:
    assert navigate_to_path(sample_instructions, "0").id == "sec-1"
    assert navigate_to_path(sample_instructions, "0.0.0").id == "a1-file"
    assert navigate_to_path(sample_instructions, "0.1").label == "Say hello"
    assert navigate_to_path(sample_instructions, "0.1.0") is None
    assert navigate_to_path(sample_instructions, "1.0") is None
    assert navigate_to_path(sample_instructions, "9") is None
    assert navigate_to_path(sample_instructions, "a.b") is None
    assert navigate_to_path(sample_instructions, "") is None
    assert navigate_to_path(None, "0") is None


def test_generate_path_round_trip() -> None:
    instructions = Instructions(items=[InstructionItem(id="root", children=[InstructionItem(id="x"), InstructionItem(id="y")])])
    path = generate_path([0, 1])
    assert path == "0.1"
    assert navigate_to_path(instructions, path).id == "y"


def test_detect_media_type() -> None:
    assert detect_media_type("https://cdn/x.MP4") == "video"
    assert detect_media_type("https://stream.mux.com/abc.m3u8") == "video"
    assert detect_media_type("https://cdn/x.jpg") == "image"
    assert detect_media_type("https://cdn/x", "video/mp4") == "video"
    assert detect_media_type("https://cdn/x.mp4", "image/png") == "image"
    assert detect_media_type("https://cdn/x.mp4", "application/octet-stream") == "video"


def test_create_helpers() -> None:
    folder = create_folder("f", "Folder", "/f", is_leaf=True)
    assert folder.is_leaf is True
    file = create_file("v", "Video", "https://cdn/v.webm", seconds=12)
    assert file.media_type == "video"
    assert file.seconds == 12
    assert create_file("i", "Image", "https://cdn/i", media_type="image").media_type == "image"


def test_duration_estimates() -> None:
    assert count_words("  one two   three ") == 3
    assert count_words("") == 0
    assert estimate_image_duration() == 15
    assert estimate_text_duration("word " * 150) == 60
    assert estimate_text_duration("just four short words") == 2
    assert estimate_duration("image") == 15
    assert estimate_duration("video") == 0
    assert estimate_duration("text", word_count=300) == 120
    assert estimate_duration("text", text="a b c") == 2
    assert estimate_duration("text") == 0


def test_duration_custom_config() -> None:
    config = DurationEstimationConfig(seconds_per_image=5, words_per_minute=60)
    assert estimate_image_duration(config) == 5
    assert estimate_duration("text", word_count=30, config=config) == 30
