"""
staypricing/engine/runner.py

Run orchestration - prices every available room of one property, or of every
property in the portfolio.

Failures are contained: a property run reports success=False instead of
raising, and the portfolio loop keeps going past a failed property.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional
import logging

from staypricing.engine.errors import DataAccessError, PropertyNotFoundError
from staypricing.engine.evaluator import RuleEvaluator
from staypricing.engine.repositories import PricingStore
from staypricing.engine.writer import PriceWriter, build_reason

logger = logging.getLogger(__name__)


@dataclass
class PropertyRunResult:
    """
    Result of pricing one property.

    Attributes:
        success: False if the property was missing or a store call failed
        updated_rooms: Rooms whose price was written
        applied_rules: De-duplicated names of rules that matched any room, first-seen order
        evaluated_rules_count: Active rules loaded for the property
    """

    success: bool
    updated_rooms: int = 0
    applied_rules: List[str] = field(default_factory=list)
    evaluated_rules_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "updatedRooms": self.updated_rooms,
            "appliedRules": list(self.applied_rules),
            "evaluatedRulesCount": self.evaluated_rules_count,
        }


@dataclass
class PortfolioRunResult:
    """Result of pricing every property."""

    success: bool
    properties_processed: int = 0
    total_updated: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "propertiesProcessed": self.properties_processed,
            "totalUpdated": self.total_updated,
        }


class PropertyRunner:
    """
    Prices the available rooms of a single property.

    Example:
        >>> runner = PropertyRunner(SqlPricingStore(db))
        >>> runner.run(property_id).to_dict()
        {'success': True, 'updatedRooms': 3, 'appliedRules': ['Weekend surge'], 'evaluatedRulesCount': 2}
    """

    def __init__(
        self,
        store: PricingStore,
        evaluator: Optional[RuleEvaluator] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self._store = store
        self._evaluator = evaluator or RuleEvaluator()
        self._writer = PriceWriter(store)
        self._today_provider = today_provider

    def run(self, property_id: str) -> PropertyRunResult:
        """
        Evaluate and persist prices for one property.

        Args:
            property_id: Property ID.

        Returns:
            PropertyRunResult; never raises. Unexpected errors end the run with
            success=False and the counts gathered so far.
        """
        result = PropertyRunResult(success=False)
        room_id = None

        try:
            base_price = self._store.get_property_base_price(property_id)
            rules = self._store.list_active_rules(property_id)
            rooms = self._store.list_available_rooms(property_id)
            result.evaluated_rules_count = len(rules)
            today = self._today_provider()

            for room in rooms:
                room_id = room.id
                evaluation = self._evaluator.evaluate(base_price, room, rules, today)

                for name in evaluation.applied_rules:
                    if name not in result.applied_rules:
                        result.applied_rules.append(name)

                reason = build_reason(evaluation.applied_rules)
                if self._writer.write_if_changed(room, evaluation.price, reason):
                    result.updated_rooms += 1
        except PropertyNotFoundError:
            logger.warning(f"Pricing run skipped: property {property_id} not found")
            return PropertyRunResult(success=False)
        except DataAccessError as e:
            logger.error(
                f"Pricing run aborted for property {property_id} (room {room_id}): {e}",
                exc_info=True,
            )
            return result
        except Exception as e:
            logger.exception(f"Unexpected error pricing property {property_id} (room {room_id}): {e}")
            return result

        result.success = True
        logger.info(
            f"Property {property_id}: updated {result.updated_rooms} rooms, "
            f"{result.evaluated_rules_count} rules evaluated, applied {result.applied_rules}"
        )
        return result


class PortfolioRunner:
    """Runs PropertyRunner over every property, one at a time."""

    def __init__(self, store: PricingStore, property_runner: Optional[PropertyRunner] = None):
        self._store = store
        self._property_runner = property_runner or PropertyRunner(store)

    def run_all(self) -> PortfolioRunResult:
        """
        Price every property.

        Returns:
            PortfolioRunResult. properties_processed counts every attempted
            property; total_updated only sums successful runs.
        """
        try:
            property_ids = self._store.list_all_property_ids()
        except DataAccessError as e:
            logger.error(f"Pricing portfolio run aborted, cannot list properties: {e}", exc_info=True)
            return PortfolioRunResult(success=False)

        total_updated = 0
        for property_id in property_ids:
            try:
                result = self._property_runner.run(property_id)
            except Exception as e:
                logger.exception(f"Unexpected error pricing property {property_id}: {e}")
                continue
            if result.success:
                total_updated += result.updated_rooms

        logger.info(f"Pricing portfolio run: {len(property_ids)} properties, {total_updated} rooms updated")
        return PortfolioRunResult(
            success=True,
            properties_processed=len(property_ids),
            total_updated=total_updated,
        )
