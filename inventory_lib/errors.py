"""
Errors Module - Exception hierarchy shared by the registry, the file store and the console
"""


class InventoryError(Exception):
    """Base class for every inventory error"""


class ValidationError(InventoryError):
    """A vehicle field failed one of its checks"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(InventoryError):
    """No vehicle is stored under the requested id"""

    def __init__(self, vehicle_id):
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle {vehicle_id} not found")


class StorageError(InventoryError):
    """A vehicle file could not be opened, read or written"""

    def __init__(self, path, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class ParseError(InventoryError):
    """A line of a vehicle file does not decode into a valid vehicle"""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        self.message = message
        super().__init__(f"line {line_number}: {message}")
