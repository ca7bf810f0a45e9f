from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

from cdn_distribution.errors import SettingsError

T = TypeVar("T")

# Cache lifetime for the default behaviour, in seconds.
TTL = 60 * 10

# "PriceClass_All" is the most broad distribution, and also the most expensive.
# "PriceClass_100" is the least broad (USA, Canada and Europe), and also the least expensive.
DEFAULT_PRICE_CLASS = "PriceClass_100"

ORIGIN_TYPES = ("bucket", "api")


def resolve(explicit: Optional[T], default: Union[T, Callable[[], T]]) -> T:
    """
    Return ``explicit`` unless it is None, otherwise the default.

    A callable default is only called when it is needed, so a fallback
    resource is never declared when the caller supplied one. Empty strings
    and other falsy values count as explicit.
    """
    if explicit is not None:
        return explicit
    return default() if callable(default) else default


@dataclass(frozen=True)
class Settings:
    domain_name: str
    certificate_arn: Optional[str] = None
    origin_type: str = "bucket"
    path: str = "./www"
    rest_api_id: Optional[str] = None
    stage_name: Optional[str] = None
    price_class: Optional[str] = None
    enable_logging: bool = False
    web_acl_arn: Optional[str] = None


def load_settings(config) -> Settings:
    """Read the program's settings from a ``pulumi.Config``."""
    origin_type = config.get("originType") or "bucket"
    if origin_type not in ORIGIN_TYPES:
        raise SettingsError(f"originType must be one of {', '.join(ORIGIN_TYPES)}, got {origin_type!r}")

    rest_api_id = config.get("restApiId") or None
    stage_name = config.get("stageName") or None
    if origin_type == "api" and not (rest_api_id and stage_name):
        raise SettingsError("originType 'api' needs both restApiId and stageName")

    return Settings(
        domain_name=config.require("domainName"),
        certificate_arn=config.get("certificateArn") or None,
        origin_type=origin_type,
        path=config.get("path") or "./www",
        rest_api_id=rest_api_id,
        stage_name=stage_name,
        price_class=config.get("priceClass") or None,
        enable_logging=config.get_bool("enableLogging") or False,
        web_acl_arn=config.get("webAclArn") or None,
    )
