from teamdash.api.schemas.base import Schema
from teamdash.api.schemas.notes import NoteResponse


class TeamMemberReportSchema(Schema):
    username: str
    corporate_username: str | None
    personal_contributions: int
    corporate_contributions: int
    latest_note: NoteResponse | None
    fetch_succeeded: bool
    error_message: str | None


class TeamReportResponse(Schema):
    year: int
    members: list[TeamMemberReportSchema]
