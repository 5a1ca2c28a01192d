from teamdash.services.notes_service import NoteStore
from teamdash.settings import Settings


def get_settings() -> Settings:
    return Settings()


def get_note_store() -> NoteStore:
    return NoteStore(get_settings().notes_dir)
