from datetime import date

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query

from teamdash.api.dependencies import get_note_store
from teamdash.api.dependencies import get_settings
from teamdash.api.schemas.report import TeamMemberReportSchema
from teamdash.api.schemas.report import TeamReportResponse
from teamdash.services.notes_service import NoteStore
from teamdash.services.report_service import build_team_report
from teamdash.settings import Settings

router = APIRouter()


@router.get("/report", response_model=TeamReportResponse)
def get_team_report(
    year: int | None = Query(default=None, ge=2008, le=9999),
    settings: Settings = Depends(get_settings),
    store: NoteStore = Depends(get_note_store),
) -> TeamReportResponse:
    """Return per-user year contributions alongside each latest meeting note."""

    report_year = year or date.today().year
    members = build_team_report(
        roster=settings.roster(), year=report_year, settings=settings, store=store
    )
    return TeamReportResponse(
        year=report_year,
        members=[TeamMemberReportSchema.model_validate(member) for member in members],
    )
