"""
Price Calculator

Turns a base price, a quantity, an optional express surcharge and a
resolved markup into the pricing breakdown embedded in every booking.

    subtotal          = base_price * quantity + express_surcharge
    markup_amount     = round2(subtotal * markup / 100)
    total_amount      = round2(subtotal + markup_amount)
    provider_earnings = round2(subtotal)
    hotel_earnings    = markup_amount
    platform_fee      = round2(total_amount * 5%)

The platform fee is informational: it is not added to the guest total and
not deducted from either party, so provider + hotel earnings always equal
the total amount.
"""

from dataclasses import dataclass
from decimal import Decimal

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidInput
from shared.domain.value_objects import round2, to_decimal

from .markup import MarkupSource

PLATFORM_FEE_RATE = Decimal('0.05')


@dataclass(frozen=True)
class PricingBreakdown(ValueObject):
    base_price: Decimal
    quantity: int
    express_surcharge: Decimal
    subtotal: Decimal
    markup_percentage: Decimal
    markup_amount: Decimal
    total_amount: Decimal
    provider_earnings: Decimal
    hotel_earnings: Decimal
    platform_fee: Decimal
    currency: str
    markup_source: MarkupSource | None = None


def _amount(name: str, value) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError as exc:
        raise InvalidInput(f"{name} is not a number", field=name) from exc
    if not amount.is_finite():
        raise InvalidInput(f"{name} must be finite", field=name)
    return amount


def compute_pricing(
    base_price,
    quantity: int,
    express_surcharge=Decimal('0'),
    markup_pct=Decimal('0'),
    currency: str = 'USD',
    markup_source: MarkupSource | None = None,
) -> PricingBreakdown:
    base = _amount('base_price', base_price)
    surcharge = _amount('express_surcharge', express_surcharge or 0)
    markup = _amount('markup_percentage', markup_pct)

    if base <= 0:
        raise InvalidInput("Base price must be positive", field='base_price')
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidInput("Quantity must be a positive integer", field='quantity')
    if surcharge < 0:
        raise InvalidInput("Express surcharge cannot be negative", field='express_surcharge')
    if markup < 0:
        raise InvalidInput("Markup percentage cannot be negative", field='markup_percentage')

    subtotal = base * quantity + surcharge
    markup_amount = round2(subtotal * markup / 100)
    total_amount = round2(subtotal + markup_amount)
    provider_earnings = round2(subtotal)
    platform_fee = round2(total_amount * PLATFORM_FEE_RATE)

    for name, value in (
        ('subtotal', subtotal),
        ('total_amount', total_amount),
        ('provider_earnings', provider_earnings),
        ('platform_fee', platform_fee),
    ):
        if not value.is_finite() or value <= 0:
            raise InvalidInput(f"Computed {name} is not a positive amount", field=name)

    return PricingBreakdown(
        base_price=round2(base),
        quantity=quantity,
        express_surcharge=round2(surcharge),
        subtotal=round2(subtotal),
        markup_percentage=markup,
        markup_amount=markup_amount,
        total_amount=total_amount,
        provider_earnings=provider_earnings,
        hotel_earnings=markup_amount,
        platform_fee=platform_fee,
        currency=currency.upper(),
        markup_source=markup_source,
    )
