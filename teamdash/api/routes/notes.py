from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from teamdash.api.dependencies import get_note_store
from teamdash.api.schemas.notes import MessageResponse
from teamdash.api.schemas.notes import NoteResponse
from teamdash.api.schemas.notes import SaveMarkdownRequest
from teamdash.services.notes_service import NoteNotFoundError
from teamdash.services.notes_service import NoteReadError
from teamdash.services.notes_service import NoteStore
from teamdash.services.notes_service import NoteUserNotFoundError
from teamdash.services.notes_service import NoteValidationError

router = APIRouter(prefix="/api")


@router.get("/posts/{username}")
def list_posts(username: str, store: NoteStore = Depends(get_note_store)) -> list[str]:
    """Return a user's note filenames, newest first."""

    try:
        return store.list_notes(username)
    except NoteValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NoteUserNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/posts/{username}/{filename}", response_model=NoteResponse)
def read_post(
    username: str, filename: str, store: NoteStore = Depends(get_note_store)
) -> NoteResponse:
    try:
        note = store.read_note(username, filename)
    except NoteValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NoteNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NoteReadError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return NoteResponse.model_validate(note)


@router.post("/save-markdown", response_model=MessageResponse)
def save_markdown(
    payload: SaveMarkdownRequest, store: NoteStore = Depends(get_note_store)
) -> MessageResponse:
    """Write a `yyyy-MM-dd.md` meeting note for a user."""

    try:
        store.save_note(payload.username, payload.file_name, payload.content)
    except NoteValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return MessageResponse(message="Markdown saved successfully")
