import json
import re
from dataclasses import dataclass
from pathlib import Path

from teamdash.core.logging import get_logger

logger = get_logger(__name__)

NOTE_FILENAME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}\.md$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,99}$")
INDEX_FILENAME = "index.json"


class NoteValidationError(Exception):
    """Raised when a note request is missing fields or has a bad shape."""


class NoteUserNotFoundError(Exception):
    """Raised when a user has no notes directory."""


class NoteNotFoundError(Exception):
    """Raised when a specific note file does not exist."""


class NoteReadError(Exception):
    """Raised when a note file exists but cannot be read as UTF-8 text."""


@dataclass(frozen=True)
class Note:
    username: str
    filename: str
    content: str

    @property
    def date(self) -> str:
        return self.filename.removesuffix(".md")


class NoteStore:
    """Markdown meeting notes stored as `<root>/<username>/YYYY-MM-DD.md`."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _user_dir(self, username: str) -> Path:
        if not isinstance(username, str) or not USERNAME_RE.fullmatch(username):
            raise NoteValidationError("Invalid username")
        return self.root / username

    @staticmethod
    def _check_filename(filename: str) -> None:
        if not isinstance(filename, str) or not NOTE_FILENAME_RE.fullmatch(filename):
            raise NoteValidationError(
                "Filename must be in format yyyy-MM-dd.md"
            )

    def list_notes(self, username: str) -> list[str]:
        """Return note filenames for a user, newest first."""

        user_dir = self._user_dir(username)
        if not user_dir.is_dir():
            raise NoteUserNotFoundError(f"User {username} not found")

        return sorted(
            (
                entry.name
                for entry in user_dir.iterdir()
                if entry.is_file() and NOTE_FILENAME_RE.fullmatch(entry.name)
            ),
            reverse=True,
        )

    def read_note(self, username: str, filename: str) -> Note:
        self._check_filename(filename)
        path = self._user_dir(username) / filename
        if not path.is_file():
            raise NoteNotFoundError(f"Note {filename} not found for {username}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteReadError(f"Note {filename} could not be read") from exc
        return Note(username=username, filename=filename, content=content)

    def latest_note(self, username: str) -> Note | None:
        try:
            filenames = self.list_notes(username)
        except NoteUserNotFoundError:
            return None
        if not filenames:
            return None
        return self.read_note(username, filenames[0])

    def save_note(self, username: str, filename: str, content: str) -> Note:
        """Write a note and refresh the user's `index.json` listing."""

        if not username or not filename or not content:
            raise NoteValidationError("Missing required fields")
        self._check_filename(filename)
        user_dir = self._user_dir(username)

        user_dir.mkdir(parents=True, exist_ok=True)
        (user_dir / filename).write_text(content, encoding="utf-8")

        markdown_files = sorted(
            entry.name for entry in user_dir.iterdir() if entry.name.endswith(".md")
        )
        (user_dir / INDEX_FILENAME).write_text(
            json.dumps(markdown_files), encoding="utf-8"
        )

        logger.info(
            "note_saved", username=username, filename=filename, length=len(content)
        )
        return Note(username=username, filename=filename, content=content)
