"""
Demand classification — isolated, testable, reusable.

Infers what kind of buyer a request is destined for from its free text,
so stock of the right freshness can be preferred:

    - "Reliance Retail, Pune"     → fresh     (retail wants fresh stock)
    - "Taj Hotel kitchen"         → moderate  (hotels can use it soon)
    - "Pune juice processing unit"→ high      (processing takes risky stock)
    - "Warehouse 4"               → unknown   (no penalty either way)
"""

from collections.abc import Iterable

from allotment.models.enums import DemandTier


# Ordered: the first keyword found in the text decides the tier.
DEFAULT_DEMAND_KEYWORDS: tuple[tuple[str, str], ...] = (
    ('retail', DemandTier.FRESH),
    ('supermarket', DemandTier.FRESH),
    ('hotel', DemandTier.MODERATE),
    ('restaurant', DemandTier.MODERATE),
    ('catering', DemandTier.MODERATE),
    ('processing', DemandTier.HIGH),
    ('factory', DemandTier.HIGH),
    ('industrial', DemandTier.HIGH),
    ('export', DemandTier.FRESH),
    ('wholesale', DemandTier.MODERATE),
)


def build_keyword_table(pairs: Iterable | None) -> tuple[tuple[str, str], ...]:
    """
    Normalize a (keyword, tier) sequence into an immutable lookup table.

    Args:
        pairs: Iterable of (keyword, tier) pairs, or None for the default

    Returns:
        Tuple of (lowercased keyword, DemandTier) pairs, order preserved
    """
    if pairs is None:
        return DEFAULT_DEMAND_KEYWORDS
    return tuple((str(keyword).lower(), DemandTier(tier)) for keyword, tier in pairs)


def classify_demand(text: str | None,
                    keywords: tuple[tuple[str, str], ...] = DEFAULT_DEMAND_KEYWORDS) -> DemandTier:
    """
    Classify buyer demand from free text.

    Args:
        text: Destination and notes, concatenated
        keywords: Ordered (keyword, tier) table

    Returns:
        Tier of the first keyword (in table order) found in text,
        or DemandTier.UNKNOWN
    """
    haystack = (text or '').lower()
    for keyword, tier in keywords:
        if keyword in haystack:
            return DemandTier(tier)
    return DemandTier.UNKNOWN
