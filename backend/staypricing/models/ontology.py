"""
本体对象定义 (Ontology Objects)
短租库存的核心实体：物业、房间、定价规则
定价引擎只读取规则与基础价格，只写房间的 current_price / last_logic_reason
"""
import uuid
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, DateTime, Date,
    ForeignKey, Text, Enum as SQLEnum, Boolean, Numeric, JSON
)
from sqlalchemy.orm import relationship
from staypricing.database import Base
from staypricing.engine.types import RoomStatus


def _new_id() -> str:
    return str(uuid.uuid4())


# ============== 本体对象定义 ==============

class Property(Base):
    """
    物业对象
    base_price 是所有规则动作的计算锚点
    """
    __tablename__ = "properties"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)            # 物业名称
    slug = Column(String(100), unique=True)                # 公开预订页标识
    base_price = Column(Numeric(10, 2))                    # 基础价格(每晚)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    rooms = relationship("Room", back_populates="property")
    pricing_rules = relationship("PricingRule", back_populates="property")


class Room(Base):
    """
    房间对象
    status 由预订流程维护，定价引擎只改价格与原因
    """
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=_new_id)
    property_id = Column(String(36), ForeignKey("properties.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)              # 房型
    status = Column(SQLEnum(RoomStatus, values_callable=lambda e: [m.value for m in e]),
                    default=RoomStatus.AVAILABLE)
    current_price = Column(Integer, default=0)             # 当前每晚价格(已取整)
    last_logic_reason = Column(Text)                       # 最近一次改价原因
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    property = relationship("Property", back_populates="rooms")


class PricingRule(Base):
    """
    定价规则对象
    conditions/action 为 JSON，结构随 rule_type 变化
    """
    __tablename__ = "pricing_rules"

    id = Column(String(36), primary_key=True, default=_new_id)
    property_id = Column(String(36), ForeignKey("properties.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)             # 规则名称
    rule_type = Column(String(30), nullable=False)         # RuleType 取值
    priority = Column(Integer, default=0)                  # 优先级(数字越大越先评估)
    is_active = Column(Boolean, default=True)              # 是否启用
    conditions = Column(JSON, default=dict)                # 类型相关条件
    action = Column(JSON, default=dict)                    # {type, value, unit}
    date_from = Column(Date)                               # 生效开始日期(含)
    date_to = Column(Date)                                 # 生效结束日期(含)
    days_of_week = Column(JSON)                            # 0-6，周日为0
    min_nights = Column(Integer)
    max_nights = Column(Integer)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    property = relationship("Property", back_populates="pricing_rules")
