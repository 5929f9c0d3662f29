"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime, date
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from staypricing.engine.types import RuleType, ActionType


# ============== 定价规则 Schemas ==============

class PricingAction(BaseModel):
    type: ActionType = ActionType.DISCOUNT
    value: float = Field(default=0, ge=0)
    unit: str = "percent"


def _check_days_of_week(v: Optional[List[int]]) -> Optional[List[int]]:
    if v is None:
        return v
    for day in v:
        if day < 0 or day > 6:
            raise ValueError("days_of_week 取值范围为 0-6（周日为0）")
    return sorted(set(v))


class PricingRuleCreate(BaseModel):
    property_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    rule_type: RuleType
    priority: int = 0
    is_active: bool = True
    conditions: Dict[str, Any] = Field(default_factory=dict)
    action: PricingAction = Field(default_factory=PricingAction)
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    days_of_week: Optional[List[int]] = None
    min_nights: Optional[int] = Field(None, ge=1)
    max_nights: Optional[int] = Field(None, ge=1)

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v):
        return _check_days_of_week(v)


class PricingRuleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    rule_type: Optional[RuleType] = None
    priority: Optional[int] = None
    is_active: Optional[bool] = None
    conditions: Optional[Dict[str, Any]] = None
    action: Optional[PricingAction] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    days_of_week: Optional[List[int]] = None
    min_nights: Optional[int] = Field(None, ge=1)
    max_nights: Optional[int] = Field(None, ge=1)

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v):
        return _check_days_of_week(v)


class PricingRuleResponse(BaseModel):
    id: str
    property_id: str
    name: str
    rule_type: str
    priority: int
    is_active: bool
    conditions: Dict[str, Any]
    action: Dict[str, Any]
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    days_of_week: Optional[List[int]] = None
    min_nights: Optional[int] = None
    max_nights: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ============== 规则执行 Schemas ==============

class ExecuteRulesRequest(BaseModel):
    property_id: Optional[str] = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyExecutionResponse(_CamelModel):
    success: bool
    message: str
    updated_rooms: int
    applied_rules: List[str]


class PortfolioExecutionResponse(_CamelModel):
    success: bool
    message: str
    properties_processed: int
    total_updated: int
