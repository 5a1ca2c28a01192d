from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from teamdash.api.schemas.base import Schema


class SaveMarkdownRequest(BaseModel):
    """Body of POST /api/save-markdown; blanks are rejected by the store."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = ""
    file_name: str = Field(default="", alias="fileName")
    content: str = ""


class NoteResponse(Schema):
    username: str
    filename: str
    date: str
    content: str


class MessageResponse(BaseModel):
    message: str
