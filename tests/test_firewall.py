import pytest

from cdn_distribution import DEFAULT_RULES, FirewallRule, FirewallRuleError
from cdn_distribution.firewall import BLOCK, COUNT, build_rules


class TestDefaultRules:
    def setup_method(self):
        self.rules = build_rules(DEFAULT_RULES)

    def test_three_rules_in_priority_order(self):
        assert [rule.priority for rule in self.rules] == [0, 1, 2]
        assert [rule.name for rule in self.rules] == [
            "AWS-AWSManagedRulesCommonRuleSet",
            "AWS-AWSManagedRulesAnonymousIpList",
            "AWS-AWSManagedRulesAmazonIpReputationList",
        ]

    def test_all_rules_count_only(self):
        for rule in self.rules:
            assert rule.override_action.count is not None
            assert rule.override_action.none is None

    def test_managed_rule_groups(self):
        statements = [rule.statement.managed_rule_group_statement for rule in self.rules]

        assert [statement.vendor_name for statement in statements] == ["AWS"] * 3
        assert [statement.name for statement in statements] == [
            "AWSManagedRulesCommonRuleSet",
            "AWSManagedRulesAnonymousIpList",
            "AWSManagedRulesAmazonIpReputationList",
        ]

    def test_metrics_named_after_rule(self):
        for rule in self.rules:
            assert rule.visibility_config.metric_name == rule.name
            assert rule.visibility_config.cloudwatch_metrics_enabled is True
            assert rule.visibility_config.sampled_requests_enabled is True


def test_rules_are_sorted_and_gaps_allowed():
    rules = build_rules(
        [
            FirewallRule("AWSManagedRulesKnownBadInputsRuleSet", priority=20, action=BLOCK),
            FirewallRule("AWSManagedRulesCommonRuleSet", priority=5),
        ]
    )

    assert [rule.priority for rule in rules] == [5, 20]
    assert rules[1].override_action.none is not None
    assert rules[1].override_action.count is None


def test_duplicate_priority_rejected():
    with pytest.raises(FirewallRuleError, match="Duplicate firewall rule priority 1"):
        build_rules([FirewallRule("A", priority=1), FirewallRule("B", priority=1)])


def test_negative_priority_rejected():
    with pytest.raises(FirewallRuleError, match="negative priority"):
        build_rules([FirewallRule("A", priority=-1)])


def test_unknown_action_rejected():
    with pytest.raises(FirewallRuleError, match="'allow'"):
        build_rules([FirewallRule("A", priority=0, action="allow")])


def test_default_action_is_count():
    assert FirewallRule("A", priority=0).action == COUNT
