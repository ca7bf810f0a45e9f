import re
from typing import Callable, Optional

import pulumi
import pulumi_aws as aws

from cdn_distribution.errors import ZoneNotFoundError

ZoneLookup = Callable[[str], pulumi.Input[str]]

# Both spellings the AWS provider has used for an unknown zone.
ZONE_NOT_FOUND = re.compile(r"no matching route ?53 ?(hosted )?zone found", re.IGNORECASE)


def route53_zone_lookup(zone_name: str) -> str:
    """
    Zone id of the public hosted zone called ``zone_name``.

    Only an unknown zone becomes ``ZoneNotFoundError``; credential,
    throttling and other invoke failures propagate as raised.
    """
    try:
        zone = aws.route53.get_zone(name=zone_name)
    except Exception as err:
        if not ZONE_NOT_FOUND.search(str(err)):
            raise
        raise ZoneNotFoundError(zone_name, str(err)) from err
    return zone.zone_id


def create_alias_record(
    name: str,
    domain_name: str,
    zone_id: pulumi.Input[str],
    distribution: aws.cloudfront.Distribution,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> aws.route53.Record:
    """Create a DNS A record pointing ``domain_name`` at the distribution edge."""
    opts = pulumi.ResourceOptions.merge(opts, pulumi.ResourceOptions(depends_on=[distribution]))

    return aws.route53.Record(
        f"{name}-alias",
        name=domain_name,
        zone_id=zone_id,
        type="A",
        aliases=[
            aws.route53.RecordAliasArgs(
                name=distribution.domain_name,
                zone_id=distribution.hosted_zone_id,
                evaluate_target_health=True,
            )
        ],
        opts=opts,
    )
