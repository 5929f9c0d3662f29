"""
定价规则服务 - 本体操作层
管理 PricingRule 对象的增删改查；规则评估见 staypricing.engine
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from staypricing.models.ontology import PricingRule, Property
from staypricing.models.schemas import PricingRuleCreate, PricingRuleUpdate

# 不可为空的列，更新时忽略显式的 null
_REQUIRED_FIELDS = {"name", "rule_type", "priority", "is_active", "conditions", "action"}


class PricingRuleService:
    """定价规则服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_rules(self, property_id: Optional[str] = None,
                  is_active: Optional[bool] = None) -> List[PricingRule]:
        """获取定价规则列表"""
        query = self.db.query(PricingRule)

        if property_id:
            query = query.filter(PricingRule.property_id == property_id)
        if is_active is not None:
            query = query.filter(PricingRule.is_active == is_active)

        return query.order_by(PricingRule.priority.desc(), PricingRule.created_at.asc()).all()

    def get_rule(self, rule_id: str) -> Optional[PricingRule]:
        """获取单个定价规则"""
        return self.db.query(PricingRule).filter(PricingRule.id == rule_id).first()

    def create_rule(self, data: PricingRuleCreate) -> PricingRule:
        """创建定价规则"""
        prop = self.db.query(Property).filter(Property.id == data.property_id).first()
        if not prop:
            raise ValueError("物业不存在")

        self._check_dates(data.date_from, data.date_to)

        payload = data.model_dump(mode="json")
        payload["date_from"] = data.date_from
        payload["date_to"] = data.date_to

        rule = PricingRule(**payload)
        self.db.add(rule)
        self.db.commit()
        self.db.refresh(rule)
        return rule

    def update_rule(self, rule_id: str, data: PricingRuleUpdate) -> PricingRule:
        """更新定价规则"""
        rule = self.get_rule(rule_id)
        if not rule:
            raise ValueError("定价规则不存在")

        update_data = data.model_dump(mode="json", exclude_unset=True)
        for key in ("date_from", "date_to"):
            if key in update_data:
                update_data[key] = getattr(data, key)

        for key, value in update_data.items():
            if value is None and key in _REQUIRED_FIELDS:
                continue
            setattr(rule, key, value)

        # 验证日期
        self._check_dates(rule.date_from, rule.date_to)

        self.db.commit()
        self.db.refresh(rule)
        return rule

    def delete_rule(self, rule_id: str) -> bool:
        """删除定价规则"""
        rule = self.get_rule(rule_id)
        if not rule:
            raise ValueError("定价规则不存在")

        self.db.delete(rule)
        self.db.commit()
        return True

    def _check_dates(self, date_from, date_to) -> None:
        if date_from and date_to and date_to < date_from:
            self.db.rollback()
            raise ValueError("结束日期不能早于开始日期")
