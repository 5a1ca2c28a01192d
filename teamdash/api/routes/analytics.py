from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query

from teamdash.api.dependencies import get_settings
from teamdash.api.schemas.analytics import ActivityInsightsResponse
from teamdash.api.schemas.analytics import ContributionAnalyticsResponse
from teamdash.services.analytics_service import ContributionSource
from teamdash.services.analytics_service import GitHubAPIError
from teamdash.services.analytics_service import InvalidGitHubTokenError
from teamdash.services.analytics_service import get_activity_insights
from teamdash.services.analytics_service import get_contribution_analytics
from teamdash.settings import Settings

router = APIRouter()


@router.get("/analytics/{username}", response_model=ContributionAnalyticsResponse)
def get_user_analytics(
    username: str,
    source: ContributionSource = Query(default=ContributionSource.PERSONAL),
    settings: Settings = Depends(get_settings),
) -> ContributionAnalyticsResponse:
    """Return streak, trend and intensity analytics for one account."""

    try:
        analytics = get_contribution_analytics(
            username=username, source=source, settings=settings
        )
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc

    return ContributionAnalyticsResponse.model_validate(analytics)


@router.get("/activity/{username}", response_model=ActivityInsightsResponse)
def get_user_activity(
    username: str, settings: Settings = Depends(get_settings)
) -> ActivityInsightsResponse:
    """Return repository, language, commit and branch insights from events."""

    try:
        insights = get_activity_insights(username=username, settings=settings)
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc

    return ActivityInsightsResponse.model_validate(
        {"username": username, **vars(insights)}
    )
