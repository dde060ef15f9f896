"""
Provider rating aggregation

Always a full recomputation over every completed, reviewed booking of the
provider; never an incremental running average.
"""

from decimal import Decimal
from typing import Iterable

from shared.domain.value_objects import round2


def recompute(provider_id: int, ratings: Iterable[int]) -> Decimal | None:
    """Mean of ``ratings`` rounded half-up to 2 places, ``None`` when empty."""
    values = [int(rating) for rating in ratings]
    if not values:
        return None
    return round2(Decimal(sum(values)) / Decimal(len(values)))
