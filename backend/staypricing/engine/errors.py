"""
staypricing/engine/errors.py

Pricing engine error taxonomy.

Both errors are caught by PropertyRunner and turned into a failed result;
neither escapes the public entry points.
"""
from typing import Optional


class PricingEngineError(Exception):
    """Base class for pricing engine errors."""


class PropertyNotFoundError(PricingEngineError):
    """The property id does not resolve. Terminal for that property's run."""

    def __init__(self, property_id: str):
        super().__init__(f"Property {property_id} not found")
        self.property_id = property_id


class DataAccessError(PricingEngineError):
    """A read or write against the backing store failed."""

    def __init__(self, message: str, property_id: Optional[str] = None,
                 room_id: Optional[str] = None):
        super().__init__(message)
        self.property_id = property_id
        self.room_id = room_id
