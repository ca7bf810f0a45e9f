import pulumi

ZONE_ID = "Z0EXAMPLE"
EDGE_DOMAIN = "d111111abcdef8.cloudfront.net"
EDGE_ZONE_ID = "Z2FDTNDATAQYW2"


def _extra_outputs(typ: str, name: str, inputs: dict) -> dict:
    if typ == "aws:s3/bucket:Bucket":
        return {
            "arn": f"arn:aws:s3:::{name}",
            "bucket": name,
            "bucketDomainName": f"{name}.s3.amazonaws.com",
            "bucketRegionalDomainName": f"{name}.s3.us-west-2.amazonaws.com",
        }
    if typ == "aws:cloudfront/originAccessIdentity:OriginAccessIdentity":
        return {
            "iamArn": f"arn:aws:iam::cloudfront:user/CloudFront Origin Access Identity {name}",
            "cloudfrontAccessIdentityPath": f"origin-access-identity/cloudfront/{name}",
        }
    if typ == "aws:apigateway/stage:Stage":
        return {
            "arn": f"arn:aws:apigateway:us-east-1::/restapis/abc123/stages/{inputs.get('stageName')}",
            "invokeUrl": f"https://abc123.execute-api.us-east-1.amazonaws.com/{inputs.get('stageName')}",
        }
    if typ == "aws:cloudfront/distribution:Distribution":
        return {"domainName": EDGE_DOMAIN, "hostedZoneId": EDGE_ZONE_ID}
    if typ == "aws:route53/record:Record":
        return {"fqdn": inputs.get("name")}
    return {}


class RecordingMocks(pulumi.runtime.Mocks):
    """In-memory engine that remembers every resource it was asked to create."""

    def __init__(self, call_error: Exception = None):
        self.resources = []
        self.calls = []
        self.call_error = call_error

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources.append(args)
        outputs = dict(args.inputs)
        outputs.setdefault("arn", f"arn:aws:mock:::{args.name}")
        outputs.update(_extra_outputs(args.typ, args.name, args.inputs))
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append(args)
        if self.call_error is not None:
            raise self.call_error
        if args.token == "aws:route53/getZone:getZone":
            return {"zoneId": ZONE_ID, "name": args.args.get("name")}
        return {}

    def of_type(self, typ: str) -> list:
        return [resource for resource in self.resources if resource.typ == typ]


def install(call_error: Exception = None) -> RecordingMocks:
    mocks = RecordingMocks(call_error)
    pulumi.runtime.set_mocks(mocks, preview=False)
    return mocks
