"""
staypricing/engine/evaluator.py

Rule evaluator - computes one room's nightly price from the property base price.

Every matching rule recomputes the price from the base price and replaces the
previous result, so the last matching rule in evaluation order decides the
price even when an earlier, higher-priority rule also matched.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, Sequence
import logging

from staypricing.engine.types import Action, RoomSnapshot, RoomStatus, RuleSnapshot, RuleType

logger = logging.getLogger(__name__)


def apply_action(base_price: Decimal, action: Action) -> Decimal:
    """Apply a discount/surge action to the base price."""
    return action.apply(Decimal(base_price))


def round_price(price: Decimal) -> int:
    """Round half-up to whole currency units, never below zero."""
    price = Decimal(price)
    with localcontext() as ctx:
        # quantize needs room for every integer digit
        ctx.prec = max(ctx.prec, price.adjusted() + 2)
        rounded = int(price.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(rounded, 0)


def sunday_based_weekday(day: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return day.isoweekday() % 7


@dataclass
class EvaluationResult:
    """
    Result of evaluating one room.

    Attributes:
        price: Rounded nightly price
        applied_rules: Names of the matching rules, in evaluation order
    """

    price: int
    applied_rules: List[str] = field(default_factory=list)


class RuleEvaluator:
    """
    Pure rule evaluator.

    Only the date-range and day-of-week gates are enforced. Type-specific
    conditions such as days_before_checkin, min_length or gap_nights are
    carried on the rule but not consulted.

    Example:
        >>> evaluator = RuleEvaluator()
        >>> result = evaluator.evaluate(Decimal("100"), room, rules, date.today())
        >>> result.price, result.applied_rules
        (120, ['Early bird', 'Summer surge'])
    """

    def rule_matches(self, rule: RuleSnapshot, room: RoomSnapshot, today: date) -> bool:
        """
        Check whether a rule applies to a room today.

        Args:
            rule: Rule snapshot.
            room: Room snapshot.
            today: Evaluation day.

        Returns:
            True if the rule passes every gate.
        """
        if rule.rule_type is None:
            logger.debug(f"Rule {rule.name} ({rule.id}) has unknown type, skipped")
            return False

        if rule.date_from is not None and rule.date_to is not None:
            if today < rule.date_from or today > rule.date_to:
                logger.debug(
                    f"Rule {rule.name} ({rule.id}) outside date range "
                    f"{rule.date_from} - {rule.date_to} for room {room.id}"
                )
                return False

        if rule.days_of_week:
            weekday = sunday_based_weekday(today)
            if weekday not in rule.days_of_week:
                logger.debug(
                    f"Rule {rule.name} ({rule.id}) not active on weekday {weekday} "
                    f"(allowed {sorted(rule.days_of_week)})"
                )
                return False

        # gap_night only checks availability; gap detection needs calendar data
        if rule.rule_type == RuleType.GAP_NIGHT:
            return room.status == RoomStatus.AVAILABLE

        return True

    def evaluate(
        self,
        base_price: Decimal,
        room: RoomSnapshot,
        rules: Sequence[RuleSnapshot],
        today: date,
    ) -> EvaluationResult:
        """
        Fold the ordered rules over the base price.

        Args:
            base_price: Property base price, the anchor of every action.
            room: Room being priced.
            rules: Rules in evaluation order (priority descending).
            today: Evaluation day.

        Returns:
            EvaluationResult with the rounded price and matching rule names.
        """
        if isinstance(today, datetime):
            today = today.date()

        base_price = Decimal(base_price)
        price = base_price
        applied: List[str] = []

        for rule in rules:
            if not self.rule_matches(rule, room, today):
                continue
            price = apply_action(base_price, rule.action)
            applied.append(rule.name)

        return EvaluationResult(price=round_price(price), applied_rules=applied)
