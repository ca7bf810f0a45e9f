"""
CloudFront distribution composition for Pulumi programs.

- **CdnDistribution**: distribution, default web ACL, bucket access policy
  and Route 53 alias for one origin and one domain.
- **BucketOrigin** / **ApiGatewayOrigin**: the origins it can front.
- **split_domain**: sub-domain and hosted zone name of a domain.
"""

from cdn_distribution.distribution import CdnDistribution
from cdn_distribution.domains import DomainParts, split_domain
from cdn_distribution.errors import (
    DistributionError,
    FirewallRuleError,
    InvalidDomainError,
    SettingsError,
    UnsupportedOriginError,
    ZoneNotFoundError,
)
from cdn_distribution.firewall import DEFAULT_RULES, FirewallRule
from cdn_distribution.origins import ApiGatewayOrigin, BucketOrigin
from cdn_distribution.settings import Settings, load_settings, resolve

__all__ = [
    "ApiGatewayOrigin",
    "BucketOrigin",
    "CdnDistribution",
    "DEFAULT_RULES",
    "DistributionError",
    "DomainParts",
    "FirewallRule",
    "FirewallRuleError",
    "InvalidDomainError",
    "Settings",
    "SettingsError",
    "UnsupportedOriginError",
    "ZoneNotFoundError",
    "load_settings",
    "resolve",
    "split_domain",
]
