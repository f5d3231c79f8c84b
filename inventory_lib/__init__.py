"""
Inventory Library - In-memory vehicle registry with file persistence
"""

from .errors import InventoryError, ValidationError, NotFoundError, StorageError, ParseError
from .vehicle_manager import Vehicle, VehicleRegistry, FIRST_AUTOMOBILE_YEAR, MAX_TEXT_LENGTH
from .persistence import VehicleFileStore

__version__ = "1.0.0"
__all__ = [
    'Vehicle', 'VehicleRegistry', 'VehicleFileStore', 'FIRST_AUTOMOBILE_YEAR', 'MAX_TEXT_LENGTH',
    'InventoryError', 'ValidationError', 'NotFoundError', 'StorageError', 'ParseError',
]
