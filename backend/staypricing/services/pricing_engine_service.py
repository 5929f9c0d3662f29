"""
定价引擎服务 - 对外调用入口
"立即执行"（单个物业）与"全部执行"（所有物业），供路由和外部调度使用
"""
from datetime import date
from typing import Callable, Optional
from sqlalchemy.orm import Session

from staypricing.engine.runner import (
    PortfolioRunner, PortfolioRunResult, PropertyRunner, PropertyRunResult
)
from staypricing.services.pricing_store import SqlPricingStore


def execute_for_property(db: Session, property_id: str,
                         today_provider: Optional[Callable[[], date]] = None) -> PropertyRunResult:
    """对单个物业执行定价规则"""
    store = SqlPricingStore(db)
    runner = PropertyRunner(store, today_provider=today_provider or date.today)
    return runner.run(property_id)


def execute_for_all(db: Session,
                    today_provider: Optional[Callable[[], date]] = None) -> PortfolioRunResult:
    """对全部物业执行定价规则"""
    store = SqlPricingStore(db)
    runner = PortfolioRunner(store, PropertyRunner(store, today_provider=today_provider or date.today))
    return runner.run_all()


def describe_property_result(result: PropertyRunResult) -> str:
    """生成单个物业执行结果的提示信息"""
    if result.updated_rooms > 0:
        return f"Updated {result.updated_rooms} rooms"
    if result.evaluated_rules_count > 0:
        return (
            f"Evaluated {result.evaluated_rules_count} rules, "
            f"but none matched current conditions (Date/Day)"
        )
    return "No active pricing rules found for this property"


def describe_portfolio_result(result: PortfolioRunResult) -> str:
    """生成全部物业执行结果的提示信息"""
    return f"Processed {result.properties_processed} properties, updated {result.total_updated} rooms"
