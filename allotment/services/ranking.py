"""
Batch ranking — advisory ordering of candidate batches for a request.

Ranking never picks a batch and never writes anything; the operator
chooses and calls approve() with an explicit batch.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from allotment.conf import allotment_settings
from allotment.demand import DEFAULT_DEMAND_KEYWORDS, build_keyword_table
from allotment.models.batch import InventoryBatch
from allotment.scoring import MatchScore, risk_tier, score_batch
from allotment.services.queries import AllocationQueries


@dataclass(frozen=True)
class RankedBatch:
    """A candidate batch with its score."""

    batch: InventoryBatch
    score: MatchScore
    risk_tier: str

    @property
    def match_score(self) -> int:
        return self.score.composite

    def as_dict(self) -> dict:
        return {
            'batch': self.batch.as_dict(),
            'match_score': self.match_score,
            'risk_tier': str(self.risk_tier),
            'breakdown': self.score.as_dict(),
        }


def rank_batches(batches: Iterable, request, now: datetime | None = None,
                 keywords: tuple = DEFAULT_DEMAND_KEYWORDS) -> list[RankedBatch]:
    """
    Score batches against request and sort by score, highest first.

    The sort is stable: batches with equal scores keep their input order
    (FIFO when fed from candidate_batches()).
    """
    ranked = [
        RankedBatch(
            batch=batch,
            score=score_batch(batch, request, now=now, keywords=keywords),
            risk_tier=risk_tier(batch.risk_score),
        )
        for batch in batches
    ]
    return sorted(ranked, key=lambda r: r.match_score, reverse=True)


class Ranking:
    """Ranking methods."""

    @classmethod
    def rank(cls, request_id, now: datetime | None = None) -> list[RankedBatch]:
        """
        Rank eligible batches for a request.

        Raises:
            NotFoundError('REQUEST_NOT_FOUND'): If request doesn't exist
        """
        request = AllocationQueries.get_request(request_id)
        keywords = build_keyword_table(allotment_settings.DEMAND_KEYWORDS)
        return rank_batches(
            AllocationQueries.candidate_batches(request),
            request,
            now=now,
            keywords=keywords,
        )
