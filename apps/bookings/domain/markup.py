"""
Markup Resolution

Effective markup for a (hotel policy, category, provider override) triple.
Sources are tried in a fixed order and the first one configured wins:

1. provider override   - replaces the hotel policy entirely
2. hotel category rate - the hotel's percentage for this category
3. hotel default rate
4. platform default    - 15% when the hotel has no policy at all
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping

from shared.domain.base import ValueObject
from shared.domain.value_objects import to_decimal

PLATFORM_DEFAULT_MARKUP = Decimal('15')
# Widest value the DecimalField(max_digits=5, decimal_places=2) columns hold.
MAX_MARKUP_PERCENTAGE = Decimal('999.99')


def _percentage(value) -> Decimal:
    pct = to_decimal(value)
    if not pct.is_finite() or pct < 0:
        raise ValueError(f"Markup percentage must be a non-negative number, got {value!r}")
    if pct > MAX_MARKUP_PERCENTAGE:
        raise ValueError(f"Markup percentage must not exceed {MAX_MARKUP_PERCENTAGE}, got {value!r}")
    return pct


class MarkupSource(Enum):
    PROVIDER_OVERRIDE = 'provider_override'
    HOTEL_CATEGORY = 'hotel_category'
    HOTEL_DEFAULT = 'hotel_default'
    PLATFORM_DEFAULT = 'platform_default'


@dataclass(frozen=True)
class MarkupPolicy(ValueObject):
    """A hotel's markup: default percentage plus per-category overrides."""
    default_percentage: Decimal = PLATFORM_DEFAULT_MARKUP
    category_percentages: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'default_percentage', _percentage(self.default_percentage))
        object.__setattr__(
            self,
            'category_percentages',
            {category: _percentage(pct) for category, pct in (self.category_percentages or {}).items()},
        )

    def for_category(self, category: str) -> Decimal | None:
        return self.category_percentages.get(category)


@dataclass(frozen=True)
class ProviderMarkupOverride(ValueObject):
    percentage: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'percentage', _percentage(self.percentage))


@dataclass(frozen=True)
class ResolvedMarkup(ValueObject):
    percentage: Decimal
    source: MarkupSource


def resolve_markup(
    hotel_policy: MarkupPolicy | None,
    category: str,
    provider_override: ProviderMarkupOverride | None = None,
) -> ResolvedMarkup:
    if provider_override is not None:
        return ResolvedMarkup(provider_override.percentage, MarkupSource.PROVIDER_OVERRIDE)

    if hotel_policy is None:
        return ResolvedMarkup(PLATFORM_DEFAULT_MARKUP, MarkupSource.PLATFORM_DEFAULT)

    category_pct = hotel_policy.for_category(category)
    if category_pct is not None:
        return ResolvedMarkup(category_pct, MarkupSource.HOTEL_CATEGORY)

    return ResolvedMarkup(hotel_policy.default_percentage, MarkupSource.HOTEL_DEFAULT)
