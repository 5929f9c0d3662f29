"""
初始化数据脚本
创建：演示物业、房间、定价规则，并执行一次全部物业定价

演示物业：
  Seaside Villas   基础价 180
  ├── 6 间房（4 间可售、1 间入住、1 间维修）
  └── 规则：周末上浮、暑期上浮、临时折扣(停用)、间隙夜折扣
"""
import sys
sys.path.insert(0, '.')

from datetime import date, timedelta
from decimal import Decimal
from staypricing.database import SessionLocal, init_db
from staypricing.models.ontology import Property, Room, RoomStatus, PricingRule
from staypricing.services.pricing_engine_service import execute_for_all


def init_property(db):
    """初始化演示物业"""
    prop = db.query(Property).filter(Property.slug == "seaside-villas").first()
    if not prop:
        prop = Property(name="Seaside Villas", slug="seaside-villas", base_price=Decimal("180.00"))
        db.add(prop)
        db.flush()
    return prop


def init_rooms(db, prop):
    """初始化房间"""
    if db.query(Room).filter(Room.property_id == prop.id).count() > 0:
        return

    rooms = [
        ("double", RoomStatus.AVAILABLE),
        ("double", RoomStatus.AVAILABLE),
        ("suite", RoomStatus.AVAILABLE),
        ("suite", RoomStatus.AVAILABLE),
        ("double", RoomStatus.OCCUPIED),
        ("studio", RoomStatus.MAINTENANCE),
    ]
    for room_type, status in rooms:
        db.add(Room(
            property_id=prop.id,
            type=room_type,
            status=status,
            current_price=int(prop.base_price)
        ))
    db.flush()


def init_pricing_rules(db, prop):
    """初始化定价规则"""
    if db.query(PricingRule).filter(PricingRule.property_id == prop.id).count() > 0:
        return

    today = date.today()
    rules = [
        PricingRule(
            property_id=prop.id, name="Weekend surge", rule_type="weekend", priority=10,
            action={"type": "surge", "value": 20, "unit": "percent"},
            days_of_week=[5, 6]
        ),
        PricingRule(
            property_id=prop.id, name="Summer season", rule_type="seasonal", priority=5,
            action={"type": "surge", "value": 15, "unit": "percent"},
            date_from=date(today.year, 6, 1), date_to=date(today.year, 8, 31)
        ),
        PricingRule(
            property_id=prop.id, name="Flash sale", rule_type="custom", priority=8,
            is_active=False,
            action={"type": "discount", "value": 30, "unit": "percent"},
            date_from=today, date_to=today + timedelta(days=3)
        ),
        PricingRule(
            property_id=prop.id, name="Gap night fill", rule_type="gap_night", priority=1,
            conditions={"gap_nights": 1},
            action={"type": "discount", "value": 10, "unit": "percent"},
            days_of_week=[0, 1, 2, 3]
        ),
    ]
    db.add_all(rules)
    db.flush()


def main():
    """主函数"""
    print("=" * 50)
    print("StayPricing 初始化数据")
    print("=" * 50)

    init_db()
    db = SessionLocal()
    try:
        prop = init_property(db)
        init_rooms(db, prop)
        init_pricing_rules(db, prop)
        db.commit()
        print(f"✓ 物业已就绪: {prop.name} ({prop.id})")

        result = execute_for_all(db)
        print(
            f"✓ 定价执行完成: 处理 {result.properties_processed} 个物业, "
            f"更新 {result.total_updated} 间房"
        )
    finally:
        db.close()


if __name__ == '__main__':
    main()
