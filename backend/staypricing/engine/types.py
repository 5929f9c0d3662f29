"""
staypricing/engine/types.py

Value types consumed by the pricing engine.

Rules and rooms are read into immutable snapshots before evaluation so a run
never observes edits made while it is in flight. Rule payloads (`conditions`,
`action`) arrive as free-form JSON and are parsed permissively: missing or
malformed fields fall back to defaults instead of failing the run.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Union
import logging

logger = logging.getLogger(__name__)


class RoomStatus(str, Enum):
    """Room status."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class RuleType(str, Enum):
    """Pricing rule categories."""
    LAST_MINUTE = "last_minute"
    LENGTH_OF_STAY = "length_of_stay"
    WEEKEND = "weekend"
    SEASONAL = "seasonal"
    GAP_NIGHT = "gap_night"
    ORPHAN_DAY = "orphan_day"
    EVENT_BASED = "event_based"
    CUSTOM = "custom"


class ActionType(str, Enum):
    DISCOUNT = "discount"
    SURGE = "surge"


# ============== Actions ==============

@dataclass(frozen=True)
class Discount:
    """Lower the base price by `percent`."""
    percent: Decimal

    def apply(self, base_price: Decimal) -> Decimal:
        return base_price * (1 - self.percent / 100)


@dataclass(frozen=True)
class Surge:
    """Raise the base price by `percent`."""
    percent: Decimal

    def apply(self, base_price: Decimal) -> Decimal:
        return base_price * (1 + self.percent / 100)


@dataclass(frozen=True)
class NoAdjustment:
    """Action with an unrecognised type; leaves the base price unchanged."""
    raw_type: str = ""

    def apply(self, base_price: Decimal) -> Decimal:
        return base_price


Action = Union[Discount, Surge, NoAdjustment]


def _to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    if value is None or isinstance(value, bool):
        return default
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default
    return result if result.is_finite() else default


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_action(raw: Any) -> Action:
    """
    Parse a rule's `action` JSON.

    `type` defaults to discount and `value` to 0, so a malformed action
    degrades to a zero adjustment.

    Args:
        raw: The stored action payload, e.g. {"type": "surge", "value": 20, "unit": "percent"}.

    Returns:
        Discount, Surge or NoAdjustment.
    """
    if not isinstance(raw, dict):
        raw = {}

    action_type = raw.get("type") or ActionType.DISCOUNT.value
    percent = _to_decimal(raw.get("value"))

    if action_type == ActionType.DISCOUNT.value:
        return Discount(percent)
    if action_type == ActionType.SURGE.value:
        return Surge(percent)

    logger.warning(f"Unknown pricing action type: {action_type!r}")
    return NoAdjustment(str(action_type))


# ============== Conditions ==============
# Parsed for completeness; the evaluator does not consult these fields.

@dataclass(frozen=True)
class LastMinuteConditions:
    days_before_checkin: Optional[int] = None


@dataclass(frozen=True)
class LengthOfStayConditions:
    min_length: Optional[int] = None
    max_length: Optional[int] = None


@dataclass(frozen=True)
class GapNightConditions:
    gap_nights: Optional[int] = None


@dataclass(frozen=True)
class OrphanDayConditions:
    gap_nights: Optional[int] = None


@dataclass(frozen=True)
class EventConditions:
    event_name: Optional[str] = None


@dataclass(frozen=True)
class GenericConditions:
    """Conditions of weekend, seasonal and custom rules (kept verbatim)."""
    raw: Dict[str, Any] = field(default_factory=dict)


Conditions = Union[
    LastMinuteConditions,
    LengthOfStayConditions,
    GapNightConditions,
    OrphanDayConditions,
    EventConditions,
    GenericConditions,
]


def parse_rule_type(raw: Any) -> Optional[RuleType]:
    """Return the RuleType for `raw`, or None when it is not a known type."""
    try:
        return RuleType(raw)
    except ValueError:
        return None


def parse_conditions(rule_type: Optional[RuleType], raw: Any) -> Conditions:
    """Parse a rule's `conditions` JSON according to its rule type."""
    if not isinstance(raw, dict):
        raw = {}

    if rule_type == RuleType.LAST_MINUTE:
        return LastMinuteConditions(_to_int(raw.get("days_before_checkin")))
    if rule_type == RuleType.LENGTH_OF_STAY:
        return LengthOfStayConditions(_to_int(raw.get("min_length")), _to_int(raw.get("max_length")))
    if rule_type == RuleType.GAP_NIGHT:
        return GapNightConditions(_to_int(raw.get("gap_nights")))
    if rule_type == RuleType.ORPHAN_DAY:
        return OrphanDayConditions(_to_int(raw.get("gap_nights")))
    if rule_type == RuleType.EVENT_BASED:
        name = raw.get("event_name")
        return EventConditions(str(name) if name is not None else None)
    return GenericConditions(dict(raw))


def parse_days_of_week(raw: Any) -> FrozenSet[int]:
    """Keep the integer entries in 0-6 (Sunday=0); anything else is dropped.

    A bare scalar is read as a single day.
    """
    if raw is None:
        return frozenset()
    if not isinstance(raw, (list, tuple, set, frozenset)):
        raw = [raw]
    days = set()
    for item in raw:
        day = _to_int(item)
        if day is not None and 0 <= day <= 6:
            days.add(day)
    return frozenset(days)


# ============== Snapshots ==============

@dataclass(frozen=True)
class RuleSnapshot:
    """
    Immutable view of one pricing rule for a single evaluation pass.

    Attributes:
        id: Rule ID
        property_id: Owning property
        name: Display name, used in reason strings
        rule_type: Parsed rule type, None if the stored value is unknown
        priority: Higher values are evaluated first
        is_active: Inactive rules are filtered out by the repository
        conditions: Type-specific conditions (not evaluated)
        action: Price adjustment
        date_from / date_to: Optional inclusive window, enforced only when both are set
        days_of_week: Allowed weekdays, Sunday=0; empty means every day
    """

    id: str
    property_id: str
    name: str
    rule_type: Optional[RuleType]
    priority: int
    action: Action
    is_active: bool = True
    conditions: Conditions = field(default_factory=GenericConditions)
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    days_of_week: FrozenSet[int] = frozenset()

    @classmethod
    def from_raw(
        cls,
        id: str,
        property_id: str,
        name: str,
        rule_type: Any,
        priority: Optional[int] = 0,
        is_active: bool = True,
        conditions: Any = None,
        action: Any = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        days_of_week: Any = None,
    ) -> "RuleSnapshot":
        """Build a snapshot from stored column values."""
        parsed_type = parse_rule_type(rule_type)
        return cls(
            id=id,
            property_id=property_id,
            name=name,
            rule_type=parsed_type,
            priority=priority or 0,
            is_active=bool(is_active),
            conditions=parse_conditions(parsed_type, conditions),
            action=parse_action(action),
            date_from=date_from,
            date_to=date_to,
            days_of_week=parse_days_of_week(days_of_week),
        )


@dataclass(frozen=True)
class RoomSnapshot:
    """Immutable view of one room."""

    id: str
    property_id: str
    type: str
    status: RoomStatus
    current_price: Optional[int]
    last_logic_reason: Optional[str] = None
