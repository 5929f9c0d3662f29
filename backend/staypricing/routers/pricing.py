"""
定价规则路由
规则管理与手动执行（Execute Now）
"""
from typing import List, Optional, Union
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from staypricing.database import get_db
from staypricing.models.schemas import (
    PricingRuleCreate, PricingRuleUpdate, PricingRuleResponse,
    ExecuteRulesRequest, PropertyExecutionResponse, PortfolioExecutionResponse
)
from staypricing.services.pricing_rule_service import PricingRuleService
from staypricing.services.pricing_engine_service import (
    execute_for_property, execute_for_all,
    describe_property_result, describe_portfolio_result
)

router = APIRouter(tags=["定价规则"])


@router.post(
    "/api/execute-rules",
    response_model=Union[PropertyExecutionResponse, PortfolioExecutionResponse]
)
def execute_rules(
    data: ExecuteRulesRequest,
    db: Session = Depends(get_db)
):
    """手动触发定价规则执行；不传 property_id 时执行全部物业"""
    if data.property_id:
        result = execute_for_property(db, data.property_id)
        return PropertyExecutionResponse(
            success=result.success,
            message=describe_property_result(result),
            updated_rooms=result.updated_rooms,
            applied_rules=result.applied_rules
        )

    result = execute_for_all(db)
    return PortfolioExecutionResponse(
        success=result.success,
        message=describe_portfolio_result(result),
        properties_processed=result.properties_processed,
        total_updated=result.total_updated
    )


@router.get("/pricing-rules", response_model=List[PricingRuleResponse])
def list_pricing_rules(
    property_id: Optional[str] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """获取定价规则列表"""
    service = PricingRuleService(db)
    return service.get_rules(property_id, is_active)


@router.get("/pricing-rules/{rule_id}", response_model=PricingRuleResponse)
def get_pricing_rule(
    rule_id: str,
    db: Session = Depends(get_db)
):
    """获取定价规则详情"""
    rule = PricingRuleService(db).get_rule(rule_id)
    if not rule:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="定价规则不存在")
    return rule


@router.post("/pricing-rules", response_model=PricingRuleResponse)
def create_pricing_rule(
    data: PricingRuleCreate,
    db: Session = Depends(get_db)
):
    """创建定价规则"""
    service = PricingRuleService(db)
    try:
        return service.create_rule(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/pricing-rules/{rule_id}", response_model=PricingRuleResponse)
def update_pricing_rule(
    rule_id: str,
    data: PricingRuleUpdate,
    db: Session = Depends(get_db)
):
    """更新定价规则"""
    service = PricingRuleService(db)
    if not service.get_rule(rule_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="定价规则不存在")
    try:
        return service.update_rule(rule_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/pricing-rules/{rule_id}")
def delete_pricing_rule(
    rule_id: str,
    db: Session = Depends(get_db)
):
    """删除定价规则"""
    service = PricingRuleService(db)
    try:
        service.delete_rule(rule_id)
        return {"message": "定价规则已删除"}
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
