"""
staypricing/engine/writer.py

Price writer - persists a room's new price only when it changed.
"""
from decimal import Decimal
from typing import Sequence, Union
import logging

from staypricing.engine.evaluator import round_price
from staypricing.engine.repositories import RoomPriceStore
from staypricing.engine.types import RoomSnapshot

logger = logging.getLogger(__name__)

NO_RULES_REASON = "Base price (no rules matched)"


def build_reason(applied_rules: Sequence[str]) -> str:
    """Reason text stored on the room: matching rule names in evaluation order."""
    if not applied_rules:
        return NO_RULES_REASON
    return ", ".join(applied_rules)


class PriceWriter:
    """Writes at most one price update per room per run."""

    def __init__(self, store: RoomPriceStore):
        self._store = store

    def write_if_changed(
        self,
        room: RoomSnapshot,
        new_price: Union[int, Decimal],
        reason: str,
    ) -> bool:
        """
        Persist the price and reason if the rounded price differs from the stored one.

        Args:
            room: Room snapshot holding the currently stored price.
            new_price: Evaluated price.
            reason: Reason text, see build_reason().

        Returns:
            True if a write happened.

        Raises:
            DataAccessError: The store rejected the write.
        """
        price = round_price(new_price)
        if price == room.current_price:
            return False

        self._store.update_room_price(room.id, price, reason)
        logger.info(f"Room {room.id} repriced {room.current_price} -> {price}: {reason}")
        return True
