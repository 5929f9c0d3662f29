"""
定价引擎数据访问接口：与存储无关的仓储抽象

应用层通过实现这些接口对接具体存储（SQLAlchemy、内存假实现等），
并注入 PropertyRunner / PortfolioRunner。
所有方法在存储故障时抛出 DataAccessError。
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List

from staypricing.engine.types import RoomSnapshot, RuleSnapshot


class RuleRepository(ABC):
    """定价规则只读仓储"""

    @abstractmethod
    def list_active_rules(self, property_id: str) -> List[RuleSnapshot]:
        """获取物业的启用规则

        Returns:
            按 priority 降序排列的规则；同优先级保持读取顺序；无规则时返回空列表
        """


class RoomRepository(ABC):
    """房间只读仓储"""

    @abstractmethod
    def list_available_rooms(self, property_id: str) -> List[RoomSnapshot]:
        """获取物业下 status == available 的房间"""


class PropertyRepository(ABC):
    """物业只读仓储"""

    @abstractmethod
    def get_property_base_price(self, property_id: str) -> Decimal:
        """获取物业基础价格

        Raises:
            PropertyNotFoundError: 物业不存在
        """

    @abstractmethod
    def list_all_property_ids(self) -> List[str]:
        """获取全部物业ID"""


class RoomPriceStore(ABC):
    """房间价格写入端口"""

    @abstractmethod
    def update_room_price(self, room_id: str, price: int, reason: str) -> None:
        """持久化房间的新价格与改价原因"""


class PricingStore(RuleRepository, RoomRepository, PropertyRepository, RoomPriceStore):
    """定价引擎所需的全部数据访问能力"""
