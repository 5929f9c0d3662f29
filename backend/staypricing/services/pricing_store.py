"""
定价数据访问 - SQLAlchemy 实现
把 ORM 行转换为引擎使用的不可变快照；存储异常统一转换为 DataAccessError
"""
from decimal import Decimal
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from staypricing.config import settings
from staypricing.engine.errors import DataAccessError, PropertyNotFoundError
from staypricing.engine.repositories import PricingStore
from staypricing.engine.types import RoomSnapshot, RoomStatus, RuleSnapshot
from staypricing.models.ontology import PricingRule, Property, Room

logger = logging.getLogger(__name__)


class SqlPricingStore(PricingStore):
    """基于数据库会话的定价仓储"""

    def __init__(self, db: Session, default_base_price: Optional[Decimal] = None):
        self.db = db
        self.default_base_price = (
            default_base_price if default_base_price is not None else settings.DEFAULT_BASE_PRICE
        )

    def list_active_rules(self, property_id: str) -> List[RuleSnapshot]:
        """获取启用规则（优先级降序，同优先级按创建顺序）"""
        try:
            rows = self.db.query(PricingRule).filter(
                PricingRule.property_id == property_id,
                PricingRule.is_active == True
            ).order_by(
                PricingRule.priority.desc(),
                PricingRule.created_at.asc()
            ).all()
        except SQLAlchemyError as e:
            raise DataAccessError(f"读取定价规则失败: {e}", property_id=property_id) from e

        return [
            RuleSnapshot.from_raw(
                id=r.id,
                property_id=r.property_id,
                name=r.name,
                rule_type=r.rule_type,
                priority=r.priority,
                is_active=r.is_active,
                conditions=r.conditions,
                action=r.action,
                date_from=r.date_from,
                date_to=r.date_to,
                days_of_week=r.days_of_week,
            )
            for r in rows
        ]

    def list_available_rooms(self, property_id: str) -> List[RoomSnapshot]:
        """获取可售房间"""
        try:
            rows = self.db.query(Room).filter(
                Room.property_id == property_id,
                Room.status == RoomStatus.AVAILABLE
            ).all()
        except SQLAlchemyError as e:
            raise DataAccessError(f"读取房间失败: {e}", property_id=property_id) from e

        return [
            RoomSnapshot(
                id=r.id,
                property_id=r.property_id,
                type=r.type,
                status=r.status,
                current_price=r.current_price,
                last_logic_reason=r.last_logic_reason,
            )
            for r in rows
        ]

    def get_property_base_price(self, property_id: str) -> Decimal:
        """获取基础价格；物业存在但未配置价格时使用默认值"""
        try:
            prop = self.db.query(Property).filter(Property.id == property_id).first()
        except SQLAlchemyError as e:
            raise DataAccessError(f"读取物业失败: {e}", property_id=property_id) from e

        if not prop:
            raise PropertyNotFoundError(property_id)

        if prop.base_price is None:
            logger.warning(
                f"Property {property_id} has no base price, using default {self.default_base_price}"
            )
            return Decimal(self.default_base_price)
        return Decimal(prop.base_price)

    def list_all_property_ids(self) -> List[str]:
        """获取全部物业ID"""
        try:
            rows = self.db.query(Property.id).order_by(Property.created_at.asc()).all()
        except SQLAlchemyError as e:
            raise DataAccessError(f"读取物业列表失败: {e}") from e
        return [row[0] for row in rows]

    def update_room_price(self, room_id: str, price: int, reason: str) -> None:
        """写入房间价格与原因，每次写入单独提交"""
        try:
            updated = self.db.query(Room).filter(Room.id == room_id).update(
                {Room.current_price: price, Room.last_logic_reason: reason},
                synchronize_session=False
            )
            self.db.commit()
        except Exception as e:
            # 驱动层错误（如整数超出 INTEGER 范围）不会包装成 SQLAlchemyError
            self.db.rollback()
            raise DataAccessError(f"更新房间价格失败: {e}", room_id=room_id) from e

        if updated == 0:
            raise DataAccessError(f"房间 {room_id} 不存在", room_id=room_id)
