import pulumi
import pulumi_aws as aws
import pulumi_synced_folder as synced_folder

from cdn_distribution import ApiGatewayOrigin, BucketOrigin, CdnDistribution, load_settings, split_domain
from cdn_distribution.dns import route53_zone_lookup

# Import the program's configuration settings.
settings = load_settings(pulumi.Config())

# ACM certificates used by CloudFront must be created in the us-east-1 region.
us_east_provider = aws.Provider("us-east-provider", region="us-east-1")

if settings.origin_type == "api":
    # Front an existing API gateway stage.
    stage = aws.apigateway.Stage.get(
        "stage", f"ags-{settings.rest_api_id}-{settings.stage_name}"
    )
    origin = ApiGatewayOrigin.from_stage(stage)
else:
    # Create a private S3 bucket; only the distribution may read it.
    bucket = aws.s3.Bucket("bucket")

    # Use a synced folder to manage the files of the website.
    bucket_folder = synced_folder.S3BucketFolder(
        "bucket-folder", path=settings.path, bucket_name=bucket.bucket, acl="private"
    )
    origin = BucketOrigin.from_bucket(bucket)

certificate_arn = settings.certificate_arn
if certificate_arn is None:
    # Provision a new ACM certificate and validate it with DNS.
    zone_id = route53_zone_lookup(split_domain(settings.domain_name).parent_domain)
    certificate = aws.acm.Certificate(
        "certificate",
        domain_name=settings.domain_name,
        validation_method="DNS",
        opts=pulumi.ResourceOptions(provider=us_east_provider),
    )
    options = certificate.domain_validation_options.apply(lambda options: options[0])
    certificate_validation_record = aws.route53.Record(
        "certificate-validation-record",
        name=options.resource_record_name,
        type=options.resource_record_type,
        records=[options.resource_record_value],
        zone_id=zone_id,
        ttl=60,
    )
    certificate_validation = aws.acm.CertificateValidation(
        "certificate-validation",
        certificate_arn=certificate.arn,
        validation_record_fqdns=[certificate_validation_record.fqdn],
        opts=pulumi.ResourceOptions(provider=us_east_provider),
    )
    certificate_arn = certificate_validation.certificate_arn

logging_bucket = None
if settings.enable_logging:
    logging_bucket = aws.s3.Bucket("access-logs")
    aws.s3.BucketOwnershipControls(
        "access-logs-ownership",
        bucket=logging_bucket.id,
        rule=aws.s3.BucketOwnershipControlsRuleArgs(object_ownership="BucketOwnerPreferred"),
    )

# Create a CloudFront CDN to distribute and cache the website, and a DNS A record to point to it.
cdn = CdnDistribution(
    "cdn",
    origin,
    settings.domain_name,
    certificate_arn,
    logging_bucket=logging_bucket,
    price_class=settings.price_class,
    web_acl=settings.web_acl_arn,
    provider=us_east_provider,
)

# Export the hostnames of the distribution and the domain.
pulumi.export("cdnURL", pulumi.Output.concat("https://", cdn.distribution.domain_name))
pulumi.export("cdnHostname", cdn.distribution.domain_name)
pulumi.export("webAclArn", cdn.web_acl_arn)
pulumi.export("domainURL", "https://" + settings.domain_name)
