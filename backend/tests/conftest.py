"""
Pytest 配置和共享 fixtures
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from decimal import Decimal

from staypricing.database import Base, get_db
from staypricing.models import ontology  # noqa: F401
from staypricing.models.ontology import Property, Room, RoomStatus, PricingRule
from staypricing.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session, monkeypatch):
    """创建测试客户端（跳过真实数据库初始化）"""
    def override_get_db():
        yield db_session

    monkeypatch.setattr("staypricing.main.init_db", lambda: None)
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_property(db_session):
    """创建测试物业，基础价 100"""
    prop = Property(name="海景民宿", slug="seaside", base_price=Decimal("100.00"))
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop


@pytest.fixture
def sample_property_2(db_session):
    """创建第二个测试物业，基础价 200"""
    prop = Property(name="山间小屋", slug="cabin", base_price=Decimal("200.00"))
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop


@pytest.fixture
def sample_rooms(db_session, sample_property):
    """创建测试房间：2 间可售、1 间入住、1 间维修，当前价均为 100"""
    rooms = []
    for room_type, status in [
        ("double", RoomStatus.AVAILABLE),
        ("suite", RoomStatus.AVAILABLE),
        ("double", RoomStatus.OCCUPIED),
        ("studio", RoomStatus.MAINTENANCE),
    ]:
        room = Room(
            property_id=sample_property.id,
            type=room_type,
            status=status,
            current_price=100
        )
        db_session.add(room)
        rooms.append(room)
    db_session.commit()
    for room in rooms:
        db_session.refresh(room)
    return rooms


@pytest.fixture
def sample_rule(db_session, sample_property):
    """创建一条无日期限制的 15% 折扣规则"""
    rule = PricingRule(
        property_id=sample_property.id,
        name="Early bird",
        rule_type="last_minute",
        priority=10,
        is_active=True,
        conditions={"days_before_checkin": 3},
        action={"type": "discount", "value": 15, "unit": "percent"}
    )
    db_session.add(rule)
    db_session.commit()
    db_session.refresh(rule)
    return rule
