from datetime import date

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query

from teamdash.analytics.ranking import RankingMode
from teamdash.api.dependencies import get_settings
from teamdash.api.schemas.ranking import RankingResponse
from teamdash.api.schemas.ranking import RankingSortRequest
from teamdash.services.ranking_service import fetch_rankings
from teamdash.services.ranking_service import rerank
from teamdash.settings import Settings

router = APIRouter()


@router.get("/ranking", response_model=RankingResponse)
def get_ranking(
    year: int | None = Query(default=None, ge=2008, le=9999),
    mode: RankingMode = Query(default=RankingMode.COMBINED),
    include_private: bool = Query(default=True),
    settings: Settings = Depends(get_settings),
) -> RankingResponse:
    """Fetch the configured roster's contributions for a year and rank them.

    Users whose fetch fails are still listed, with zero contributions.
    """

    result = fetch_rankings(
        roster=settings.roster(),
        year=year or date.today().year,
        mode=mode,
        include_private=include_private,
        settings=settings,
    )
    return RankingResponse.from_result(result)


@router.post("/ranking/sort", response_model=RankingResponse)
def sort_ranking(payload: RankingSortRequest) -> RankingResponse:
    """Re-rank previously fetched entries without calling GitHub."""

    result = rerank(
        [entry.to_entry() for entry in payload.entries],
        year=payload.year,
        mode=payload.mode,
        include_private=payload.include_private,
    )
    return RankingResponse.from_result(result)
