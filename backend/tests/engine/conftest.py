"""
tests/engine/conftest.py

In-memory pricing store and snapshot builders for engine tests.
"""
import pytest
from decimal import Decimal
from typing import Dict, List, Optional, Set

from staypricing.engine.errors import DataAccessError, PropertyNotFoundError
from staypricing.engine.repositories import PricingStore
from staypricing.engine.types import RoomSnapshot, RoomStatus, RuleSnapshot


class InMemoryPricingStore(PricingStore):
    """Dict-backed store; properties listed in fail_* sets raise DataAccessError."""

    def __init__(self):
        self.base_prices: Dict[str, Decimal] = {}
        self.rules: Dict[str, List[RuleSnapshot]] = {}
        self.rooms: Dict[str, List[RoomSnapshot]] = {}
        self.writes: List[tuple] = []
        self.fail_reads: Set[str] = set()
        self.fail_writes: Set[str] = set()
        self.fail_listing = False

    def add_property(self, property_id: str, base_price="100") -> None:
        self.base_prices[property_id] = Decimal(base_price)
        self.rules.setdefault(property_id, [])
        self.rooms.setdefault(property_id, [])

    def add_room(self, property_id: str, room_id: str, current_price: Optional[int] = 100,
                 status: RoomStatus = RoomStatus.AVAILABLE) -> None:
        self.rooms[property_id].append(RoomSnapshot(
            id=room_id, property_id=property_id, type="double",
            status=status, current_price=current_price,
        ))

    def add_rule(self, property_id: str, rule: RuleSnapshot) -> None:
        self.rules[property_id].append(rule)

    def list_active_rules(self, property_id):
        if property_id in self.fail_reads:
            raise DataAccessError("rules unavailable", property_id=property_id)
        active = [r for r in self.rules.get(property_id, []) if r.is_active]
        return sorted(active, key=lambda r: r.priority, reverse=True)

    def list_available_rooms(self, property_id):
        if property_id in self.fail_reads:
            raise DataAccessError("rooms unavailable", property_id=property_id)
        return [r for r in self.rooms.get(property_id, []) if r.status == RoomStatus.AVAILABLE]

    def get_property_base_price(self, property_id):
        if property_id not in self.base_prices:
            raise PropertyNotFoundError(property_id)
        return self.base_prices[property_id]

    def list_all_property_ids(self):
        if self.fail_listing:
            raise DataAccessError("properties unavailable")
        return list(self.base_prices)

    def update_room_price(self, room_id, price, reason):
        if room_id in self.fail_writes:
            raise DataAccessError("write rejected", room_id=room_id)
        self.writes.append((room_id, price, reason))
        for property_id, rooms in self.rooms.items():
            self.rooms[property_id] = [
                RoomSnapshot(r.id, r.property_id, r.type, r.status, price, reason)
                if r.id == room_id else r
                for r in rooms
            ]


def _make_rule(name, rule_type="custom", priority=0, action=None, date_from=None,
              date_to=None, days_of_week=None, conditions=None, is_active=True,
              property_id="p1", rule_id=None) -> RuleSnapshot:
    return RuleSnapshot.from_raw(
        id=rule_id or name,
        property_id=property_id,
        name=name,
        rule_type=rule_type,
        priority=priority,
        is_active=is_active,
        conditions=conditions,
        action=action if action is not None else {"type": "discount", "value": 0},
        date_from=date_from,
        date_to=date_to,
        days_of_week=days_of_week,
    )


def _make_room(room_id="r1", current_price=100, status=RoomStatus.AVAILABLE) -> RoomSnapshot:
    return RoomSnapshot(id=room_id, property_id="p1", type="double",
                        status=status, current_price=current_price)


@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryPricingStore()


@pytest.fixture
def make_rule():
    """Rule snapshot builder; unspecified action is a zero discount."""
    return _make_rule


@pytest.fixture
def make_room():
    """Room snapshot builder."""
    return _make_room
