"""
Batch scoring — how well one batch fits one allocation request.

The composite (0-100) blends four sub-scores:

    risk priority       40%   near-spoilage stock should leave first
    demand match        25%   batch freshness vs what the buyer needs
    deadline proximity  20%   urgent requests push scores up
    utilization         15%   lots sized close to the request

Scores are advisory. Nothing here reads or writes the database; batch and
request only need the attributes used below.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from allotment.demand import DEFAULT_DEMAND_KEYWORDS, classify_demand
from allotment.models.enums import DemandTier


WEIGHTS = {
    'risk_priority': Decimal('0.40'),
    'demand_match': Decimal('0.25'),
    'deadline_proximity': Decimal('0.20'),
    'utilization': Decimal('0.15'),
}

NEUTRAL = 50

_TIER_RANK = {
    DemandTier.FRESH: 0,
    DemandTier.MODERATE: 1,
    DemandTier.HIGH: 2,
}


@dataclass(frozen=True)
class MatchScore:
    """Sub-scores for one (batch, request) pair. Always recomputed."""

    risk_priority: int
    demand_match: int
    deadline_proximity: int
    utilization: Decimal

    @property
    def composite(self) -> int:
        """Weighted sum, rounded half-up and clamped to [0, 100]."""
        total = sum(
            Decimal(getattr(self, name)) * weight
            for name, weight in WEIGHTS.items()
        )
        rounded = int(total.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
        return min(100, max(0, rounded))

    def as_dict(self) -> dict:
        return {
            'risk_priority': self.risk_priority,
            'demand_match': self.demand_match,
            'deadline_proximity': self.deadline_proximity,
            'utilization': str(self.utilization),
            'composite': self.composite,
        }


def risk_tier(risk_score) -> DemandTier:
    """Map a 0-100 risk score to a freshness tier."""
    if risk_score <= 30:
        return DemandTier.FRESH
    if risk_score <= 70:
        return DemandTier.MODERATE
    return DemandTier.HIGH


def risk_priority(risk_score) -> int:
    if risk_score > 70:
        return 100
    if risk_score > 50:
        return 70
    if risk_score > 30:
        return 40
    return 20


def demand_match(batch_tier: str, demand_tier: str) -> int:
    """
    Compare what the batch offers with what the buyer needs.

    Same tier → 100, adjacent tiers → 40, opposite ends → 10,
    unknown demand → neutral.
    """
    if demand_tier == DemandTier.UNKNOWN:
        return NEUTRAL
    distance = abs(_TIER_RANK[DemandTier(batch_tier)] - _TIER_RANK[DemandTier(demand_tier)])
    return {0: 100, 1: 40}.get(distance, 10)


def deadline_proximity(deadline: datetime | None, now: datetime | None = None) -> int:
    """Urgency from days left until the deadline (overdue counts as urgent)."""
    if deadline is None:
        return NEUTRAL
    now = now or timezone.now()
    days_left = (deadline - now).total_seconds() / 86400
    if days_left <= 1:
        return 100
    if days_left <= 3:
        return 85
    if days_left <= 7:
        return 60
    return 30


def utilization(requested, remaining) -> Decimal:
    """
    min(requested / remaining, 1) x 100.

    Saturates at 100 when the batch is smaller than the request; rankings
    drop such batches unless RANK_UNDERSIZED_BATCHES is set.
    """
    requested = Decimal(str(requested))
    remaining = Decimal(str(remaining))
    if remaining <= 0:
        remaining = Decimal('1')
    return min(requested / remaining, Decimal('1')) * 100


def score_batch(batch, request, now: datetime | None = None,
                keywords: tuple = DEFAULT_DEMAND_KEYWORDS) -> MatchScore:
    """
    Compute all sub-scores for a (batch, request) pair.

    Args:
        batch: Needs .risk_score and .remaining_quantity
        request: Needs .destination, .notes, .deadline and .quantity
        now: Reference time for the deadline (None = timezone.now())
        keywords: Demand classifier table

    Returns:
        MatchScore
    """
    demand = classify_demand(f"{request.destination or ''} {request.notes or ''}", keywords)
    return MatchScore(
        risk_priority=risk_priority(batch.risk_score),
        demand_match=demand_match(risk_tier(batch.risk_score), demand),
        deadline_proximity=deadline_proximity(request.deadline, now),
        utilization=utilization(request.quantity, batch.remaining_quantity),
    )


def score(batch, request, now: datetime | None = None,
          keywords: tuple = DEFAULT_DEMAND_KEYWORDS) -> int:
    """Composite 0-100 match score (higher = better fit)."""
    return score_batch(batch, request, now=now, keywords=keywords).composite
