"""
测试 staypricing.engine.types - 规则快照与宽松解析
"""
from decimal import Decimal

from staypricing.engine.types import (
    Discount, Surge, NoAdjustment, RuleType, RuleSnapshot,
    LastMinuteConditions, LengthOfStayConditions, GapNightConditions,
    OrphanDayConditions, EventConditions, GenericConditions,
    parse_action, parse_conditions, parse_days_of_week, parse_rule_type,
)


class TestParseAction:
    def test_discount(self):
        """测试折扣动作"""
        assert parse_action({"type": "discount", "value": 15, "unit": "percent"}) == Discount(Decimal("15"))

    def test_surge(self):
        """测试上浮动作"""
        assert parse_action({"type": "surge", "value": 20}) == Surge(Decimal("20"))

    def test_missing_type_defaults_to_discount(self):
        """缺少 type 时默认为折扣"""
        assert parse_action({"value": 10}) == Discount(Decimal("10"))

    def test_missing_value_defaults_to_zero(self):
        """缺少 value 时默认为 0"""
        assert parse_action({"type": "surge"}) == Surge(Decimal("0"))

    def test_empty_or_none(self):
        """空动作退化为 0% 折扣"""
        assert parse_action({}) == Discount(Decimal("0"))
        assert parse_action(None) == Discount(Decimal("0"))
        assert parse_action("garbage") == Discount(Decimal("0"))

    def test_non_numeric_value(self):
        """非数字 value 视为 0"""
        assert parse_action({"type": "surge", "value": "lots"}) == Surge(Decimal("0"))
        assert parse_action({"type": "surge", "value": "NaN"}) == Surge(Decimal("0"))

    def test_numeric_string_value(self):
        """数字字符串可以解析"""
        assert parse_action({"type": "discount", "value": "12.5"}) == Discount(Decimal("12.5"))

    def test_unknown_type(self):
        """未知类型不调整价格"""
        action = parse_action({"type": "fixed", "value": 50})
        assert isinstance(action, NoAdjustment)
        assert action.apply(Decimal("100")) == Decimal("100")


class TestParseConditions:
    def test_last_minute(self):
        cond = parse_conditions(RuleType.LAST_MINUTE, {"days_before_checkin": "3"})
        assert cond == LastMinuteConditions(days_before_checkin=3)

    def test_length_of_stay(self):
        cond = parse_conditions(RuleType.LENGTH_OF_STAY, {"min_length": 7, "max_length": 28})
        assert cond == LengthOfStayConditions(min_length=7, max_length=28)

    def test_gap_night_and_orphan_day(self):
        assert parse_conditions(RuleType.GAP_NIGHT, {"gap_nights": 2}) == GapNightConditions(2)
        assert parse_conditions(RuleType.ORPHAN_DAY, {"gap_nights": 1}) == OrphanDayConditions(1)

    def test_event_based(self):
        cond = parse_conditions(RuleType.EVENT_BASED, {"event_name": "Jazz Festival"})
        assert cond == EventConditions(event_name="Jazz Festival")

    def test_generic_keeps_raw(self):
        cond = parse_conditions(RuleType.CUSTOM, {"note": "manual"})
        assert cond == GenericConditions({"note": "manual"})

    def test_malformed_fields_default_to_none(self):
        """字段格式错误时置空而不是报错"""
        cond = parse_conditions(RuleType.LENGTH_OF_STAY, {"min_length": "week"})
        assert cond == LengthOfStayConditions(min_length=None, max_length=None)

    def test_non_dict_conditions(self):
        assert parse_conditions(RuleType.LAST_MINUTE, None) == LastMinuteConditions()
        assert parse_conditions(RuleType.WEEKEND, [1, 2]) == GenericConditions({})


class TestParseHelpers:
    def test_rule_type(self):
        assert parse_rule_type("weekend") == RuleType.WEEKEND
        assert parse_rule_type("bogus") is None
        assert parse_rule_type(None) is None

    def test_days_of_week(self):
        """只保留 0-6 的整数"""
        assert parse_days_of_week([5, 6]) == frozenset({5, 6})
        assert parse_days_of_week(["0", 7, -1, "x", 3]) == frozenset({0, 3})
        assert parse_days_of_week(None) == frozenset()
        assert parse_days_of_week([]) == frozenset()

    def test_days_of_week_scalar_is_single_day(self):
        """存量数据可能把单个星期几存成标量"""
        assert parse_days_of_week(5) == frozenset({5})
        assert parse_days_of_week("6") == frozenset({6})
        assert parse_days_of_week(9) == frozenset()
        assert parse_days_of_week({"day": 5}) == frozenset()

    def test_days_of_week_infinite_entries_dropped(self):
        assert parse_days_of_week(float("inf")) == frozenset()
        assert parse_days_of_week([float("inf"), float("nan"), 5]) == frozenset({5})


class TestRuleSnapshot:
    def test_from_raw(self):
        """测试从存储值构建快照"""
        rule = RuleSnapshot.from_raw(
            id="r1", property_id="p1", name="Weekend", rule_type="weekend",
            priority=None, conditions=None, action={"type": "surge", "value": 20},
            days_of_week=[6, 5, 5],
        )
        assert rule.rule_type == RuleType.WEEKEND
        assert rule.priority == 0
        assert rule.action == Surge(Decimal("20"))
        assert rule.days_of_week == frozenset({5, 6})
        assert rule.conditions == GenericConditions({})

    def test_unknown_rule_type_kept_as_none(self):
        rule = RuleSnapshot.from_raw(id="r1", property_id="p1", name="Old", rule_type="legacy")
        assert rule.rule_type is None
        assert rule.action == Discount(Decimal("0"))
