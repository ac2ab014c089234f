from __future__ import annotations

import pytest

from sigmaSettings.banner.catalog import (
    BuiltinEntry,
    CustomEntry,
    add_custom,
    add_url,
    all_entries,
    display_name,
    generate_short_id,
    key_for_index,
    key_for_index_or_default,
    position_key,
    remove_custom,
    resolve_by_key,
    resolve_selection,
)
from sigmaSettings.banner.manifest import BannerMedia
from sigmaSettings.media_classifier import MediaKind


def _custom(count: int) -> list[dict[str, str]]:
    return [{"path": f"/media/custom-{i}.jpg", "id": f"c{i:07x}"} for i in range(count)]


def test_all_entries_lists_custom_before_builtin(builtin) -> None:
    custom = [{"path": "C:\\Users\\me\\clip.MP4", "id": "abc12345"}]
    entries = all_entries(custom, builtin)

    assert [entry.kind for entry in entries] == ["custom", "builtin", "builtin", "builtin"]
    first = entries[0]
    assert isinstance(first, CustomEntry)
    assert first.file_name == "clip.MP4"
    assert first.type is MediaKind.VIDEO
    assert isinstance(entries[1], BuiltinEntry)
    assert entries[1].index == 0
    assert [position_key(entry) for entry in entries] == [
        "abc12345",
        "builtin1.jpg",
        "builtin2.jpg",
        "builtin3.mp4",
    ]
    assert display_name(first) == "clip.MP4"
    assert display_name(entries[1]) == "Builtin one"


@pytest.mark.parametrize("custom_count", [0, 1, 3])
def test_index_to_key_round_trip(builtin, custom_count: int) -> None:
    custom = _custom(custom_count)
    ids = [item["id"] for item in custom]
    entries = all_entries(custom, builtin)

    for index in range(custom_count + len(builtin)):
        expected = ids[index] if index < custom_count else builtin[index - custom_count].file_name
        assert key_for_index(ids, builtin, index) == expected
        assert position_key(entries[index]) == expected

    assert key_for_index(ids, builtin, custom_count + len(builtin)) is None
    assert key_for_index(ids, builtin, -1) is None


def test_key_for_index_or_default_falls_back(builtin) -> None:
    assert key_for_index_or_default([], builtin, 10) == "a-clear-sky-above-the-mountains.jpg"
    assert key_for_index_or_default([None], builtin, 0, "fallback.jpg") == "fallback.jpg"
    assert key_for_index_or_default([], (), 0, "fallback.jpg") == "fallback.jpg"


def test_resolve_selection_fallback_chain(builtin) -> None:
    entries = all_entries(_custom(2), builtin)

    assert resolve_selection(entries, "builtin2.jpg") == 3
    assert resolve_by_key(entries, "c0000001").path == "/media/custom-1.jpg"
    assert resolve_by_key(entries, "missing") is None
    # Stale id: default builtin when present, otherwise the first entry.
    assert resolve_selection(entries, "stale", default_file_name="builtin3.mp4") == 4
    assert resolve_selection(entries, "stale", default_file_name="not-shipped.jpg") == 0
    assert resolve_selection(entries, None, default_file_name="builtin1.jpg") == 2
    assert resolve_selection([], "anything") is None


def test_generate_short_id_shape() -> None:
    ids = {generate_short_id() for _ in range(200)}
    assert len(ids) == 200
    for value in ids:
        assert len(value) == 8
        assert int(value, 16) >= 0
        assert not value.isdigit()
        assert value == value.lower()


def test_add_custom_appends_in_order_without_touching_existing(id_factory) -> None:
    current = [{"path": "/a.jpg", "id": "aaaaaaaa"}]
    updated, added = add_custom(current, ["/b.jpg", "/a.jpg"], id_factory)

    assert added == [{"path": "/b.jpg", "id": "c0000001"}, {"path": "/a.jpg", "id": "c0000002"}]
    assert updated == current + added
    assert current == [{"path": "/a.jpg", "id": "aaaaaaaa"}]


@pytest.mark.parametrize("url", ["", "   ", "ftp://host/x.jpg", "/local/file.jpg"])
def test_add_url_rejects_non_http(url: str, id_factory) -> None:
    updated, added = add_url([], url, id_factory)
    assert added is None
    assert updated == []


def test_add_url_is_noop_for_known_url(id_factory) -> None:
    current = [{"path": "https://example.com/a.jpg", "id": "aaaaaaaa"}]
    updated, added = add_url(current, "  https://example.com/a.jpg ", id_factory)
    assert added is None
    assert updated == current

    updated, added = add_url(current, "https://example.com/b.webm", id_factory)
    assert added == {"path": "https://example.com/b.webm", "id": "c0000001"}
    assert updated[-1] == added


@pytest.mark.parametrize(
    ("selected", "removed", "expected"),
    [
        (3, 1, 2),
        (1, 1, 0),
        (2, 0, 1),
        (0, 0, 0),
        (0, 1, 0),
        (4, 2, 3),
    ],
)
def test_removal_reanchors_selection(builtin, selected: int, removed: int, expected: int) -> None:
    custom = _custom(3)
    total = len(custom) + len(builtin)
    result = remove_custom(
        custom,
        custom[removed]["path"],
        positions={},
        selected_index=selected,
        builtin=builtin,
    )

    assert result.selected_index == expected
    assert 0 <= result.selected_index <= total - 2
    remaining_ids = [item["id"] for item in result.custom]
    assert result.selected_key == key_for_index(remaining_ids, builtin, expected)
    assert result.removed == custom[removed]


def test_removal_after_selection_keeps_index(builtin) -> None:
    custom = _custom(3)
    result = remove_custom(custom, custom[2]["path"], positions={}, selected_index=1, builtin=builtin)
    assert result.selected_index == 1
    assert result.selected_key == custom[1]["id"]


def test_removal_drops_position_of_removed_entry(builtin) -> None:
    custom = _custom(2)
    positions = {
        custom[0]["id"]: {"positionX": 1, "positionY": 2, "zoom": 100},
        "builtin1.jpg": {"positionX": 3, "positionY": 4, "zoom": 100},
    }
    result = remove_custom(custom, custom[0]["path"], positions=positions, selected_index=0, builtin=builtin)

    assert result.positions == {"builtin1.jpg": {"positionX": 3, "positionY": 4, "zoom": 100}}
    assert custom[0]["id"] in positions


def test_removal_removes_only_first_match(builtin) -> None:
    custom = [{"path": "/dup.jpg", "id": "aaaaaaaa"}, {"path": "/dup.jpg", "id": "bbbbbbbb"}]
    result = remove_custom(custom, "/dup.jpg", positions={}, selected_index=0, builtin=builtin)
    assert result.custom == [{"path": "/dup.jpg", "id": "bbbbbbbb"}]


def test_scenario_c_removing_only_selected_custom(builtin) -> None:
    custom = [{"path": "/only.jpg", "id": "aaaaaaaa"}]
    result = remove_custom(
        custom,
        "/only.jpg",
        positions={},
        selected_index=0,
        builtin=builtin,
        default_file_name="builtin1.jpg",
    )

    assert result.custom == []
    assert result.selected_index == 0
    assert result.selected_key == "builtin1.jpg"


def test_removal_from_empty_catalog_uses_default() -> None:
    custom = [{"path": "/only.jpg", "id": "aaaaaaaa"}]
    result = remove_custom(
        custom,
        "/only.jpg",
        positions={},
        selected_index=0,
        builtin=(),
        default_file_name="fallback.jpg",
    )
    assert result.selected_index == 0
    assert result.selected_key == "fallback.jpg"


def test_removal_of_unknown_path_only_clamps(builtin) -> None:
    custom = _custom(1)
    result = remove_custom(custom, "/nope.jpg", positions={}, selected_index=9, builtin=builtin)
    assert result.removed is None
    assert result.custom == custom
    assert result.selected_index == 3
    assert result.selected_key == "builtin3.mp4"


def test_builtin_entry_type_follows_manifest() -> None:
    entry = BuiltinEntry(0, BannerMedia("loop.mp4", "Loop", MediaKind.VIDEO))
    assert entry.type is MediaKind.VIDEO
    assert entry.kind == "builtin"
