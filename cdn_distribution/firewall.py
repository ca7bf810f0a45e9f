"""
Edge firewall (WAFv2 web ACL) used when the caller brings none.

The default rule set only counts matches. Switching a rule to ``block``
is left to an operator after reviewing the metrics.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

import pulumi
import pulumi_aws as aws

from cdn_distribution.errors import FirewallRuleError

COUNT = "count"
BLOCK = "block"


@dataclass(frozen=True)
class FirewallRule:
    rule_group: str
    priority: int
    action: str = COUNT
    vendor: str = "AWS"
    visibility: bool = True

    @property
    def name(self) -> str:
        return f"{self.vendor}-{self.rule_group}"


DEFAULT_RULES = (
    FirewallRule("AWSManagedRulesCommonRuleSet", priority=0),
    FirewallRule("AWSManagedRulesAnonymousIpList", priority=1),
    FirewallRule("AWSManagedRulesAmazonIpReputationList", priority=2),
)


def _override_action(action: str) -> aws.wafv2.WebAclRuleOverrideActionArgs:
    if action == COUNT:
        return aws.wafv2.WebAclRuleOverrideActionArgs(count=aws.wafv2.WebAclRuleOverrideActionCountArgs())
    if action == BLOCK:
        # No override: the managed group's own block actions apply.
        return aws.wafv2.WebAclRuleOverrideActionArgs(none=aws.wafv2.WebAclRuleOverrideActionNoneArgs())
    raise FirewallRuleError(f"Unknown firewall rule action {action!r}, expected {COUNT!r} or {BLOCK!r}")


def build_rules(rules: Iterable[FirewallRule]) -> List[aws.wafv2.WebAclRuleArgs]:
    ordered = sorted(rules, key=lambda rule: rule.priority)

    seen = set()
    for rule in ordered:
        if rule.priority < 0:
            raise FirewallRuleError(f"Rule {rule.name!r} has a negative priority {rule.priority}")
        if rule.priority in seen:
            raise FirewallRuleError(f"Duplicate firewall rule priority {rule.priority} ({rule.name!r})")
        seen.add(rule.priority)

    return [
        aws.wafv2.WebAclRuleArgs(
            name=rule.name,
            priority=rule.priority,
            override_action=_override_action(rule.action),
            statement=aws.wafv2.WebAclRuleStatementArgs(
                managed_rule_group_statement=aws.wafv2.WebAclRuleStatementManagedRuleGroupStatementArgs(
                    name=rule.rule_group,
                    vendor_name=rule.vendor,
                ),
            ),
            visibility_config=aws.wafv2.WebAclRuleVisibilityConfigArgs(
                cloudwatch_metrics_enabled=rule.visibility,
                metric_name=rule.name,
                sampled_requests_enabled=rule.visibility,
            ),
        )
        for rule in ordered
    ]


def create_web_acl(
    name: str,
    rules: Iterable[FirewallRule] = DEFAULT_RULES,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.wafv2.WebAcl:
    return aws.wafv2.WebAcl(
        f"{name}-web-acl",
        description="Best practice AWS WAF rules",
        scope="CLOUDFRONT",
        default_action=aws.wafv2.WebAclDefaultActionArgs(allow=aws.wafv2.WebAclDefaultActionAllowArgs()),
        rules=build_rules(rules),
        visibility_config=aws.wafv2.WebAclVisibilityConfigArgs(
            cloudwatch_metrics_enabled=True,
            metric_name=name,
            sampled_requests_enabled=True,
        ),
        opts=opts,
    )
