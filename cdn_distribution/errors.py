import pulumi


class DistributionError(pulumi.RunError):
    """Base class for errors raised while composing a distribution."""


class InvalidDomainError(DistributionError):
    def __init__(self, domain_name: str):
        super().__init__(f"No TLD found on {domain_name!r}")
        self.domain_name = domain_name


class ZoneNotFoundError(DistributionError):
    def __init__(self, zone_name: str, reason: str = ""):
        message = f"No Route 53 hosted zone found for {zone_name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.zone_name = zone_name


class SettingsError(DistributionError):
    pass


class UnsupportedOriginError(TypeError):
    def __init__(self, origin):
        super().__init__(
            f"Unsupported origin {origin!r}: expected a BucketOrigin, an ApiGatewayOrigin, "
            "an aws.s3.Bucket or an aws.apigateway.Stage"
        )
        self.origin = origin


class FirewallRuleError(ValueError):
    pass
