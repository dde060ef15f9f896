"""
Booking Variants

Every booking shares one envelope (guest, schedule, pricing, status); what
differs per category lives in exactly one details variant:

- GenericDetails:        base price x quantity (housekeeping, spa, tours...)
- LaundryDetails:        priced garment lines plus an express flag
- TransportationDetails: vehicle, pickup/drop-off and passenger count
- DiningDetails:         priced menu lines

Line prices always come from the service's item catalog, never from the
request.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping, Tuple

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import round2, to_decimal


class BookingKind(Enum):
    GENERIC = 'generic'
    LAUNDRY = 'laundry'
    TRANSPORTATION = 'transportation'
    DINING = 'dining'


CATEGORY_KINDS = {
    'laundry': BookingKind.LAUNDRY,
    'transportation': BookingKind.TRANSPORTATION,
    'dining': BookingKind.DINING,
    'restaurant': BookingKind.DINING,
}


def kind_for_category(category: str) -> BookingKind:
    return CATEGORY_KINDS.get(category, BookingKind.GENERIC)


@dataclass(frozen=True)
class LineItem(ValueObject):
    item_id: str
    name: str
    quantity: int
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return round2(self.unit_price * self.quantity)

    def to_dict(self) -> dict:
        return {
            'item_id': self.item_id,
            'name': self.name,
            'quantity': self.quantity,
            'unit_price': str(self.unit_price),
            'total': str(self.total),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> 'LineItem':
        return cls(
            item_id=str(data['item_id']),
            name=data.get('name', ''),
            quantity=int(data['quantity']),
            unit_price=to_decimal(data['unit_price']),
        )


def price_lines(requested, catalog: Mapping[str, Mapping]) -> Tuple[LineItem, ...]:
    """Resolve ``[{"item_id", "quantity"}]`` against the service catalog."""
    if requested is None:
        requested = ()
    if not isinstance(requested, (list, tuple)):
        raise ValidationError("Items must be a list", field='items')
    lines = []
    for entry in requested:
        if not isinstance(entry, Mapping):
            raise ValidationError(f"Each item must be an object, got {entry!r}", field='items')
        item_id = str(entry.get('item_id', ''))
        if item_id not in catalog:
            raise ValidationError(f"Unknown item: {item_id!r}", field='items')
        quantity = entry.get('quantity', 1)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError(f"Invalid quantity for item {item_id!r}", field='items')
        catalog_entry = catalog[item_id]
        lines.append(LineItem(
            item_id=item_id,
            name=catalog_entry.get('name', item_id),
            quantity=quantity,
            unit_price=round2(catalog_entry['price']),
        ))
    if not lines:
        raise ValidationError("At least one item is required", field='items')
    return tuple(lines)


@dataclass(frozen=True)
class GenericDetails(ValueObject):
    kind = BookingKind.GENERIC
    special_requests: str = ''

    def pricing_basis(self, base_price: Decimal, quantity: int) -> Tuple[Decimal, int]:
        return base_price, quantity

    def to_dict(self) -> dict:
        return {'special_requests': self.special_requests}

    @classmethod
    def from_dict(cls, data: Mapping) -> 'GenericDetails':
        return cls(special_requests=data.get('special_requests', ''))


@dataclass(frozen=True)
class LaundryDetails(ValueObject):
    kind = BookingKind.LAUNDRY
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    is_express: bool = False

    @property
    def items_total(self) -> Decimal:
        return sum((item.total for item in self.items), Decimal('0'))

    def pricing_basis(self, base_price: Decimal, quantity: int) -> Tuple[Decimal, int]:
        return self.items_total, 1

    def to_dict(self) -> dict:
        return {
            'items': [item.to_dict() for item in self.items],
            'is_express': self.is_express,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> 'LaundryDetails':
        return cls(
            items=tuple(LineItem.from_dict(item) for item in data.get('items', ())),
            is_express=bool(data.get('is_express', False)),
        )


@dataclass(frozen=True)
class TransportationDetails(ValueObject):
    kind = BookingKind.TRANSPORTATION
    vehicle_type: str = ''
    pickup: str = ''
    dropoff: str = ''
    passengers: int = 1

    def __post_init__(self):
        if self.passengers < 1:
            raise ValidationError("Passengers must be at least 1", field='passengers')

    def pricing_basis(self, base_price: Decimal, quantity: int) -> Tuple[Decimal, int]:
        return base_price, quantity

    def to_dict(self) -> dict:
        return {
            'vehicle_type': self.vehicle_type,
            'pickup': self.pickup,
            'dropoff': self.dropoff,
            'passengers': self.passengers,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> 'TransportationDetails':
        return cls(
            vehicle_type=data.get('vehicle_type', ''),
            pickup=data.get('pickup', ''),
            dropoff=data.get('dropoff', ''),
            passengers=int(data.get('passengers', 1)),
        )


@dataclass(frozen=True)
class DiningDetails(ValueObject):
    kind = BookingKind.DINING
    items: Tuple[LineItem, ...] = field(default_factory=tuple)

    def pricing_basis(self, base_price: Decimal, quantity: int) -> Tuple[Decimal, int]:
        return sum((item.total for item in self.items), Decimal('0')), 1

    def to_dict(self) -> dict:
        return {'items': [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, data: Mapping) -> 'DiningDetails':
        return cls(items=tuple(LineItem.from_dict(item) for item in data.get('items', ())))


BookingDetails = GenericDetails | LaundryDetails | TransportationDetails | DiningDetails

_VARIANTS = {
    BookingKind.GENERIC: GenericDetails,
    BookingKind.LAUNDRY: LaundryDetails,
    BookingKind.TRANSPORTATION: TransportationDetails,
    BookingKind.DINING: DiningDetails,
}


def details_from_dict(kind: BookingKind, data: Mapping | None) -> BookingDetails:
    return _VARIANTS[kind].from_dict(data or {})


def build_details(kind: BookingKind, payload: Mapping, catalog: Mapping[str, Mapping]) -> BookingDetails:
    """Build request details for ``kind``, pricing any item lines from ``catalog``."""
    if not isinstance(payload, Mapping):
        raise ValidationError("Details must be an object", field='details')
    if kind is BookingKind.LAUNDRY:
        return LaundryDetails(
            items=price_lines(payload.get('items'), catalog),
            is_express=bool(payload.get('is_express', False)),
        )
    if kind is BookingKind.DINING:
        return DiningDetails(items=price_lines(payload.get('items'), catalog))
    if kind is BookingKind.TRANSPORTATION:
        passengers = payload.get('passengers', 1)
        if isinstance(passengers, bool) or not isinstance(passengers, int):
            raise ValidationError("Passengers must be an integer", field='passengers')
        return TransportationDetails(
            vehicle_type=payload.get('vehicle_type', ''),
            pickup=payload.get('pickup', ''),
            dropoff=payload.get('dropoff', ''),
            passengers=passengers,
        )
    return GenericDetails(special_requests=payload.get('special_requests', ''))
