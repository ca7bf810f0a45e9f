"""
CloudFront distribution composed from a single origin, a domain and a certificate.

``CdnDistribution`` declares, in dependency order:

* for bucket origins, an origin access identity and a bucket policy that
  lets only that identity read objects;
* a default web ACL, unless the caller passes one;
* the distribution itself;
* a Route 53 alias record for the domain.

Each step is a plain function so it can be exercised on its own.
"""

import json
from typing import List, NamedTuple, Optional, Union

import pulumi
import pulumi_aws as aws

from cdn_distribution.dns import ZoneLookup, create_alias_record, route53_zone_lookup
from cdn_distribution.domains import split_domain
from cdn_distribution.firewall import create_web_acl
from cdn_distribution.origins import ApiGatewayOrigin, BucketOrigin, Origin, as_origin
from cdn_distribution.settings import DEFAULT_PRICE_CLASS, TTL, resolve

ID = "cdn:index:Distribution"

CACHED_METHODS = ["GET", "HEAD", "OPTIONS"]


class OriginAccess(NamedTuple):
    identity: aws.cloudfront.OriginAccessIdentity
    policy: aws.s3.BucketPolicy


def bucket_policy_document(bucket_arn: str, identity_arn: str) -> str:
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Id": "originAccessPolicy",
            "Statement": [
                {
                    "Sid": "originAccess",
                    "Effect": "Allow",
                    "Principal": {"AWS": identity_arn},
                    "Action": ["s3:GetObject"],
                    "Resource": f"{bucket_arn}/*",
                }
            ],
        }
    )


def create_origin_access(
    name: str, origin: Origin, opts: Optional[pulumi.ResourceOptions] = None
) -> Optional[OriginAccess]:
    """
    Lock a bucket origin down to the distribution.

    API gateway stages do their own access control, so nothing is created
    for them and None is returned.
    """
    if not isinstance(origin, BucketOrigin):
        return None

    identity = aws.cloudfront.OriginAccessIdentity(
        f"{name}-origin-access-identity",
        comment="Ensure visitors cannot access the site using the S3 endpoint url",
        opts=opts,
    )

    policy = aws.s3.BucketPolicy(
        f"{name}-origin-policy",
        bucket=origin.identifier,
        policy=pulumi.Output.all(origin.arn, identity.iam_arn).apply(
            lambda args: bucket_policy_document(args[0], args[1])
        ),
        opts=pulumi.ResourceOptions.merge(opts, pulumi.ResourceOptions(depends_on=[identity])),
    )

    return OriginAccess(identity=identity, policy=policy)


def build_origin(origin: Origin, access: Optional[OriginAccess] = None) -> aws.cloudfront.DistributionOriginArgs:
    if isinstance(origin, BucketOrigin):
        s3_origin_config = None
        if access is not None:
            s3_origin_config = aws.cloudfront.DistributionOriginS3OriginConfigArgs(
                origin_access_identity=access.identity.cloudfront_access_identity_path,
            )
        return aws.cloudfront.DistributionOriginArgs(
            origin_id=origin.arn,
            domain_name=origin.regional_domain_name,
            s3_origin_config=s3_origin_config,
        )

    # The stage is dropped from the domain, so it has to come back as the origin path.
    return aws.cloudfront.DistributionOriginArgs(
        origin_id=origin.arn,
        domain_name=origin.domain_name,
        origin_path=origin.origin_path,
        custom_origin_config=aws.cloudfront.DistributionOriginCustomOriginConfigArgs(
            origin_protocol_policy="https-only",
            http_port=80,
            https_port=443,
            origin_ssl_protocols=["TLSv1.2"],
        ),
    )


def build_default_cache_behavior(
    target_origin_id: pulumi.Input[str],
) -> aws.cloudfront.DistributionDefaultCacheBehaviorArgs:
    return aws.cloudfront.DistributionDefaultCacheBehaviorArgs(
        target_origin_id=target_origin_id,
        viewer_protocol_policy="redirect-to-https",
        allowed_methods=list(CACHED_METHODS),
        cached_methods=list(CACHED_METHODS),
        forwarded_values=aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesArgs(
            query_string=False,
            cookies=aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesCookiesArgs(
                forward="none",
            ),
        ),
        compress=True,
        min_ttl=0,
        default_ttl=TTL,
        max_ttl=TTL,
    )


def build_custom_error_responses(origin: Origin) -> Optional[List[aws.cloudfront.DistributionCustomErrorResponseArgs]]:
    # API backends return their own error bodies.
    if isinstance(origin, ApiGatewayOrigin):
        return None
    return [
        aws.cloudfront.DistributionCustomErrorResponseArgs(
            error_code=404,
            response_code=404,
            response_page_path="/404.html",
        )
    ]


def build_logging_config(
    domain_name: str, logging_bucket: Optional[aws.s3.Bucket] = None
) -> Optional[aws.cloudfront.DistributionLoggingConfigArgs]:
    if logging_bucket is None:
        return None
    return aws.cloudfront.DistributionLoggingConfigArgs(
        bucket=logging_bucket.bucket_domain_name,
        include_cookies=False,
        prefix=f"{domain_name}/",
    )


def build_distribution_args(
    origin: Origin,
    domain_name: str,
    certificate_arn: pulumi.Input[str],
    web_acl_id: pulumi.Input[str],
    access: Optional[OriginAccess] = None,
    logging_bucket: Optional[aws.s3.Bucket] = None,
    price_class: Optional[str] = None,
) -> aws.cloudfront.DistributionArgs:
    return aws.cloudfront.DistributionArgs(
        enabled=True,
        aliases=[domain_name],
        origins=[build_origin(origin, access)],
        default_root_object="index.html",
        default_cache_behavior=build_default_cache_behavior(origin.arn),
        price_class=resolve(price_class, DEFAULT_PRICE_CLASS),
        custom_error_responses=build_custom_error_responses(origin),
        restrictions=aws.cloudfront.DistributionRestrictionsArgs(
            geo_restriction=aws.cloudfront.DistributionRestrictionsGeoRestrictionArgs(
                restriction_type="none",
            ),
        ),
        viewer_certificate=aws.cloudfront.DistributionViewerCertificateArgs(
            acm_certificate_arn=certificate_arn,
            ssl_support_method="sni-only",
        ),
        logging_config=build_logging_config(domain_name, logging_bucket),
        web_acl_id=web_acl_id,
    )


class CdnDistribution(pulumi.ComponentResource):
    """
    CloudFront distribution, edge firewall and DNS alias for one domain.

    ``origin`` is a ``BucketOrigin`` or an ``ApiGatewayOrigin`` (an
    ``aws.s3.Bucket`` or ``aws.apigateway.Stage`` is converted for you).
    ``zone_lookup`` maps a zone name such as ``example.com.`` to its hosted
    zone id and defaults to a Route 53 lookup. ``web_acl`` may be a web ACL
    resource or the ARN of one managed elsewhere.

    The domain is split and its zone resolved before anything is declared,
    so a malformed domain or a missing zone leaves no resources behind.
    """

    def __init__(
        self,
        name: str,
        origin: Union[Origin, aws.s3.Bucket, aws.apigateway.Stage],
        domain_name: str,
        certificate_arn: pulumi.Input[str],
        logging_bucket: Optional[aws.s3.Bucket] = None,
        price_class: Optional[str] = None,
        web_acl: Optional[Union[aws.wafv2.WebAcl, pulumi.Input[str]]] = None,
        zone_lookup: ZoneLookup = route53_zone_lookup,
        provider: Optional[aws.Provider] = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        origin = as_origin(origin)
        domain_parts = split_domain(domain_name)
        zone_id = zone_lookup(domain_parts.parent_domain)

        super().__init__(ID, name, None, opts)

        pulumi.log.debug(
            f"{domain_name}: {type(origin).__name__}, zone {domain_parts.parent_domain!r}",
            resource=self,
        )

        self.origin = origin
        self.domain_name = domain_name

        child_opts = pulumi.ResourceOptions(parent=self)

        # CloudFront-scoped WAF and distributions are managed from us-east-1.
        if provider is None:
            provider = aws.Provider(f"{name}-us-east-1", region="us-east-1", opts=child_opts)
        edge_opts = pulumi.ResourceOptions(parent=self, provider=provider)

        self.origin_access = create_origin_access(name, origin, child_opts)

        def default_web_acl():
            pulumi.log.info(f"No web ACL supplied for {domain_name}, creating the default rule set", resource=self)
            return create_web_acl(name, opts=edge_opts)

        self.owns_web_acl = web_acl is None
        self.web_acl = resolve(web_acl, default_web_acl)

        depends_on = []
        if isinstance(self.web_acl, aws.wafv2.WebAcl):
            self.web_acl_arn = self.web_acl.arn
            depends_on.append(self.web_acl)
        else:
            self.web_acl_arn = pulumi.Output.from_input(self.web_acl)
        if self.origin_access is not None:
            depends_on.append(self.origin_access.policy)

        self.distribution = aws.cloudfront.Distribution(
            f"{name}-cdn",
            build_distribution_args(
                origin,
                domain_name,
                certificate_arn,
                self.web_acl_arn,
                access=self.origin_access,
                logging_bucket=logging_bucket,
                price_class=price_class,
            ),
            opts=pulumi.ResourceOptions.merge(edge_opts, pulumi.ResourceOptions(depends_on=depends_on)),
        )

        self.alias_record = create_alias_record(name, domain_name, zone_id, self.distribution, child_opts)

        self.register_outputs(
            {
                "distribution_id": self.distribution.id,
                "distribution_domain_name": self.distribution.domain_name,
                "hosted_zone_id": self.distribution.hosted_zone_id,
                "web_acl_arn": self.web_acl_arn,
                "alias_fqdn": self.alias_record.fqdn,
            }
        )
