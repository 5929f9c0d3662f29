"""
StayPricing - 短租库存与夜间价格自动计算
"""
__version__ = "1.0.0"
