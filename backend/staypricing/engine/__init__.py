"""
staypricing.engine - 定价规则评估引擎

纯逻辑层，不依赖具体存储；数据访问通过 repositories 中的接口注入。
"""
from staypricing.engine.errors import DataAccessError, PricingEngineError, PropertyNotFoundError
from staypricing.engine.evaluator import EvaluationResult, RuleEvaluator, apply_action, round_price
from staypricing.engine.repositories import (
    PricingStore,
    PropertyRepository,
    RoomPriceStore,
    RoomRepository,
    RuleRepository,
)
from staypricing.engine.runner import (
    PortfolioRunner,
    PortfolioRunResult,
    PropertyRunner,
    PropertyRunResult,
)
from staypricing.engine.types import (
    Discount,
    NoAdjustment,
    RoomSnapshot,
    RoomStatus,
    RuleSnapshot,
    RuleType,
    Surge,
    parse_action,
)
from staypricing.engine.writer import NO_RULES_REASON, PriceWriter, build_reason

__all__ = [
    "DataAccessError",
    "PricingEngineError",
    "PropertyNotFoundError",
    "EvaluationResult",
    "RuleEvaluator",
    "apply_action",
    "round_price",
    "PricingStore",
    "PropertyRepository",
    "RoomPriceStore",
    "RoomRepository",
    "RuleRepository",
    "PortfolioRunner",
    "PortfolioRunResult",
    "PropertyRunner",
    "PropertyRunResult",
    "Discount",
    "NoAdjustment",
    "RoomSnapshot",
    "RoomStatus",
    "RuleSnapshot",
    "RuleType",
    "Surge",
    "parse_action",
    "NO_RULES_REASON",
    "PriceWriter",
    "build_reason",
]
