"""
Vehicle Manager Module - In-memory vehicle registry with validated CRUD operations
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional
import logging

from .errors import NotFoundError, ValidationError

# Year of the first automobile
FIRST_AUTOMOBILE_YEAR = 1886

# Longest make or model accepted
MAX_TEXT_LENGTH = 100

UPDATABLE_FIELDS = ('year', 'make', 'model', 'price', 'is_automatic')


def validate_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise ValidationError('year', 'must be a whole number')
    if year < FIRST_AUTOMOBILE_YEAR:
        raise ValidationError('year', f'must be {FIRST_AUTOMOBILE_YEAR} or later')
    return year


def validate_text(field: str, value) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, 'must be text')
    if not value.strip():
        raise ValidationError(field, 'must not be empty')
    if len(value) > MAX_TEXT_LENGTH:
        raise ValidationError(field, f'must be at most {MAX_TEXT_LENGTH} characters')
    return value


def validate_price(price) -> Decimal:
    """Coerce a price to Decimal and check it is a finite, non-negative amount"""
    if isinstance(price, bool):
        raise ValidationError('price', 'must be a decimal number')
    try:
        if isinstance(price, float):
            # str() keeps 25000.1 from turning into 25000.1000000000014551...
            value = Decimal(str(price))
        else:
            value = Decimal(price)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError('price', 'must be a decimal number')
    if not value.is_finite():
        raise ValidationError('price', 'must be a finite number')
    if value < 0:
        raise ValidationError('price', 'must not be negative')
    return value


def validate_is_automatic(is_automatic) -> Optional[bool]:
    if is_automatic is not None and not isinstance(is_automatic, bool):
        raise ValidationError('is_automatic', 'must be true, false or unknown')
    return is_automatic


class Vehicle:
    """Represents a vehicle with its attributes"""

    def __init__(self, vehicle_id: int, year: int, make: str, model: str, price,
                 is_automatic: Optional[bool] = None):
        if isinstance(vehicle_id, bool) or not isinstance(vehicle_id, int) or vehicle_id < 1:
            raise ValidationError('id', 'must be a positive whole number')
        self.id = vehicle_id
        self.year = validate_year(year)
        self.make = validate_text('make', make)
        self.model = validate_text('model', model)
        self.price = validate_price(price)
        self.is_automatic = validate_is_automatic(is_automatic)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'year': self.year,
            'make': self.make,
            'model': self.model,
            'price': self.price,
            'is_automatic': self.is_automatic,
        }

    def copy(self) -> 'Vehicle':
        return Vehicle(self.id, self.year, self.make, self.model, self.price, self.is_automatic)

    def transmission_label(self) -> str:
        """Human readable transmission, 'unknown' when not recorded"""
        if self.is_automatic is None:
            return 'unknown'
        return 'automatic' if self.is_automatic else 'manual'

    def __eq__(self, other):
        if not isinstance(other, Vehicle):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Vehicle(#{self.id} {self.year} {self.make} {self.model})"


class VehicleRegistry:
    """Owns every live vehicle and hands out copies, never the stored records"""

    def __init__(self):
        self._vehicles: Dict[int, Vehicle] = {}
        self._next_id = 1

    def add_vehicle(self, year: int, make: str, model: str, price,
                    is_automatic: Optional[bool] = None) -> int:
        """Validate and store a new vehicle, returning its id"""
        vehicle = Vehicle(self._next_id, year, make, model, price, is_automatic)
        self._vehicles[vehicle.id] = vehicle
        self._next_id += 1
        logging.info(f"Vehicle added: #{vehicle.id} {vehicle.year} {vehicle.make} {vehicle.model}")
        return vehicle.id

    def list_vehicles(self) -> List[Vehicle]:
        """Return copies of all vehicles in insertion order"""
        return [v.copy() for v in self._vehicles.values()]

    def get_vehicle(self, vehicle_id: int) -> Vehicle:
        return self._lookup(vehicle_id).copy()

    def update_vehicle(self, vehicle_id: int, **changes) -> None:
        """Replace some fields of a vehicle; nothing is applied unless the result is valid"""
        current = self._lookup(vehicle_id)
        for field in changes:
            if field not in UPDATABLE_FIELDS:
                raise ValidationError(field, 'is not an updatable field')

        merged = current.to_dict()
        merged.update(changes)
        updated = Vehicle(
            current.id,
            merged['year'],
            merged['make'],
            merged['model'],
            merged['price'],
            merged['is_automatic'],
        )
        self._vehicles[vehicle_id] = updated
        logging.info(f"Vehicle updated: #{vehicle_id} ({', '.join(sorted(changes)) or 'no changes'})")

    def remove_vehicle(self, vehicle_id: int) -> None:
        self._lookup(vehicle_id)
        del self._vehicles[vehicle_id]
        logging.info(f"Vehicle removed: #{vehicle_id}")

    def replace_all(self, vehicles: Iterable[Vehicle]) -> None:
        """Swap the whole inventory for loaded vehicles, keeping their ids.

        The id counter only ever moves forward, so ids handed out earlier in
        this process are not issued again after a load.
        """
        loaded: Dict[int, Vehicle] = {}
        for vehicle in vehicles:
            if vehicle.id in loaded:
                raise ValidationError('id', f'duplicate id {vehicle.id}')
            loaded[vehicle.id] = vehicle.copy()

        self._vehicles = loaded
        if loaded:
            self._next_id = max(self._next_id, max(loaded) + 1)
        logging.info(f"Inventory replaced with {len(loaded)} vehicle(s), next id {self._next_id}")

    def count(self) -> int:
        """Return total number of vehicles"""
        return len(self._vehicles)

    def __len__(self):
        return self.count()

    def _lookup(self, vehicle_id: int) -> Vehicle:
        try:
            return self._vehicles[vehicle_id]
        except (KeyError, TypeError):
            raise NotFoundError(vehicle_id)
