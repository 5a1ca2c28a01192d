from pydantic import BaseModel
from pydantic import Field

from teamdash.analytics.ranking import ContributionTotals
from teamdash.analytics.ranking import RankingEntry
from teamdash.analytics.ranking import RankingMode
from teamdash.analytics.ranking import ranking_value
from teamdash.api.schemas.base import Schema
from teamdash.services.ranking_service import RankingResult


class ContributionTotalsSchema(Schema):
    total: int
    public: int
    private: int


class RankedUser(Schema):
    """One roster user at a ranking position."""

    position: int
    value: int
    username: str
    corporate_username: str | None
    personal: ContributionTotalsSchema
    corporate: ContributionTotalsSchema
    fetch_succeeded: bool
    error_message: str | None


class RankingSummarySchema(Schema):
    total_contributions: int
    average_per_user: int
    top_performer: str | None
    top_value: int
    loaded_users: int
    total_users: int


class RankingResponse(Schema):
    year: int
    mode: RankingMode
    include_private: bool
    entries: list[RankedUser]
    summary: RankingSummarySchema

    @classmethod
    def from_result(cls, result: RankingResult) -> "RankingResponse":
        entries = [
            RankedUser(
                position=index + 1,
                value=ranking_value(entry, result.mode, result.include_private),
                username=entry.username,
                corporate_username=entry.corporate_username,
                personal=ContributionTotalsSchema.model_validate(entry.personal),
                corporate=ContributionTotalsSchema.model_validate(entry.corporate),
                fetch_succeeded=entry.fetch_succeeded,
                error_message=entry.error_message,
            )
            for index, entry in enumerate(result.entries)
        ]
        return cls(
            year=result.year,
            mode=result.mode,
            include_private=result.include_private,
            entries=entries,
            summary=RankingSummarySchema.model_validate(result.summary),
        )


class ContributionTotalsIn(BaseModel):
    total: int = Field(default=0, ge=0)
    private: int = Field(default=0, ge=0)

    def to_totals(self) -> ContributionTotals:
        return ContributionTotals.from_counts(self.total, self.private)


class RankingEntryIn(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    corporate_username: str | None = None
    personal: ContributionTotalsIn = ContributionTotalsIn()
    corporate: ContributionTotalsIn = ContributionTotalsIn()
    fetch_succeeded: bool = True
    error_message: str | None = None

    def to_entry(self) -> RankingEntry:
        return RankingEntry(
            username=self.username,
            corporate_username=self.corporate_username,
            personal=self.personal.to_totals(),
            corporate=self.corporate.to_totals(),
            fetch_succeeded=self.fetch_succeeded,
            error_message=self.error_message,
        )


class RankingSortRequest(BaseModel):
    """Already-fetched entries to re-rank under a new mode or visibility."""

    year: int
    mode: RankingMode = RankingMode.COMBINED
    include_private: bool = True
    entries: list[RankingEntryIn]
