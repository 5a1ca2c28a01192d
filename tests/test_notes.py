import json

import pytest

from teamdash.services.notes_service import NoteNotFoundError
from teamdash.services.notes_service import NoteReadError
from teamdash.services.notes_service import NoteStore
from teamdash.services.notes_service import NoteUserNotFoundError
from teamdash.services.notes_service import NoteValidationError


@pytest.fixture
def store(tmp_path) -> NoteStore:
    return NoteStore(tmp_path)


def test_save_note_writes_file_and_index(store: NoteStore, tmp_path) -> None:
    store.save_note("octocat", "2026-10-19.md", "# Standup\n")
    store.save_note("octocat", "2026-10-12.md", "# Earlier\n")

    user_dir = tmp_path / "octocat"
    assert (user_dir / "2026-10-19.md").read_text(encoding="utf-8") == "# Standup\n"
    assert json.loads((user_dir / "index.json").read_text(encoding="utf-8")) == [
        "2026-10-12.md",
        "2026-10-19.md",
    ]


@pytest.mark.parametrize(
    "filename",
    [
        "notes.md",
        "2026-10-19.txt",
        "2026-1-19.md",
        "../2026-10-19.md",
        "2026-10-19.md.bak",
        "2026-10-19.md\n",
    ],
)
def test_save_note_rejects_bad_filenames(store: NoteStore, filename: str) -> None:
    with pytest.raises(NoteValidationError):
        store.save_note("octocat", filename, "content")


def test_save_note_requires_all_fields(store: NoteStore) -> None:
    with pytest.raises(NoteValidationError, match="Missing required fields"):
        store.save_note("octocat", "2026-10-19.md", "")


def test_save_note_rejects_path_like_usernames(store: NoteStore) -> None:
    with pytest.raises(NoteValidationError):
        store.save_note("../etc", "2026-10-19.md", "content")


def test_list_notes_filters_and_orders_newest_first(store: NoteStore, tmp_path) -> None:
    store.save_note("octocat", "2026-09-01.md", "a")
    store.save_note("octocat", "2026-10-01.md", "b")
    (tmp_path / "octocat" / "draft.md").write_text("x", encoding="utf-8")

    assert store.list_notes("octocat") == ["2026-10-01.md", "2026-09-01.md"]


def test_list_notes_for_unknown_user(store: NoteStore) -> None:
    with pytest.raises(NoteUserNotFoundError):
        store.list_notes("ghost")


def test_read_and_latest_note(store: NoteStore) -> None:
    store.save_note("octocat", "2026-09-01.md", "old")
    store.save_note("octocat", "2026-10-01.md", "new")

    note = store.read_note("octocat", "2026-09-01.md")
    latest = store.latest_note("octocat")

    assert note.content == "old"
    assert latest is not None
    assert latest.date == "2026-10-01"
    assert latest.content == "new"


def test_latest_note_for_user_without_notes(store: NoteStore) -> None:
    assert store.latest_note("ghost") is None


def test_read_missing_note(store: NoteStore) -> None:
    store.save_note("octocat", "2026-09-01.md", "old")

    with pytest.raises(NoteNotFoundError):
        store.read_note("octocat", "2026-09-02.md")


def test_read_note_that_is_not_utf8(store: NoteStore, tmp_path) -> None:
    (tmp_path / "bob").mkdir()
    (tmp_path / "bob" / "2026-10-01.md").write_bytes(b"\xff\xfe# Retro")

    with pytest.raises(NoteReadError):
        store.read_note("bob", "2026-10-01.md")
