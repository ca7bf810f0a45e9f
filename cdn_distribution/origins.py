"""
Origins a distribution can front.

Callers pick the variant explicitly (``BucketOrigin.from_bucket(bucket)`` or
``ApiGatewayOrigin.from_stage(stage)``); nothing is inferred from the shape
of the value.
"""

from dataclasses import dataclass
from typing import Union

import pulumi
import pulumi_aws as aws

from cdn_distribution.errors import UnsupportedOriginError


@dataclass(frozen=True)
class BucketOrigin:
    identifier: pulumi.Input[str]
    arn: pulumi.Input[str]
    regional_domain_name: pulumi.Input[str]

    @classmethod
    def from_bucket(cls, bucket: aws.s3.Bucket) -> "BucketOrigin":
        return cls(
            identifier=bucket.id,
            arn=bucket.arn,
            regional_domain_name=bucket.bucket_regional_domain_name,
        )


@dataclass(frozen=True)
class ApiGatewayOrigin:
    arn: pulumi.Input[str]
    invoke_url: pulumi.Input[str]
    stage_name: pulumi.Input[str]

    @classmethod
    def from_stage(cls, stage: aws.apigateway.Stage) -> "ApiGatewayOrigin":
        return cls(arn=stage.arn, invoke_url=stage.invoke_url, stage_name=stage.stage_name)

    @property
    def domain_name(self) -> pulumi.Output[str]:
        return pulumi.Output.all(self.invoke_url, self.stage_name).apply(
            lambda args: stage_domain_name(args[0], args[1])
        )

    @property
    def origin_path(self) -> pulumi.Output[str]:
        return pulumi.Output.from_input(self.stage_name).apply(lambda stage: f"/{stage}")


Origin = Union[BucketOrigin, ApiGatewayOrigin]


def as_origin(value) -> Origin:
    if isinstance(value, (BucketOrigin, ApiGatewayOrigin)):
        return value
    if isinstance(value, aws.s3.Bucket):
        return BucketOrigin.from_bucket(value)
    if isinstance(value, aws.apigateway.Stage):
        return ApiGatewayOrigin.from_stage(value)
    raise UnsupportedOriginError(value)


def stage_domain_name(invoke_url: str, stage_name: str) -> str:
    """
    Host part of a stage invoke URL.

    ``https://abc123.execute-api.us-east-1.amazonaws.com/prod`` with stage
    ``prod`` gives ``abc123.execute-api.us-east-1.amazonaws.com``. The stage
    moves to the origin path, so only a trailing ``/<stage>`` is removed.
    """
    _, sep, rest = invoke_url.partition("://")
    domain = rest if sep else invoke_url
    domain = domain.rstrip("/")
    suffix = f"/{stage_name}"
    if stage_name and domain.endswith(suffix):
        domain = domain[: -len(suffix)]
    return domain
