# Business Services
from staypricing.services.pricing_rule_service import PricingRuleService
from staypricing.services.pricing_store import SqlPricingStore

__all__ = ['PricingRuleService', 'SqlPricingStore']
