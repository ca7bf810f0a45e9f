from typing import NamedTuple

from cdn_distribution.errors import InvalidDomainError


class DomainParts(NamedTuple):
    sub_domain: str
    parent_domain: str


def split_domain(domain_name: str) -> DomainParts:
    """
    Split a domain into its sub-domain and the parent zone name.

    ``example.com`` has no sub-domain and is returned untouched.
    ``www.example.com`` gives ``("www", "example.com.")``: the parent keeps
    a trailing dot, which is how Route 53 names hosted zones.
    No case folding or IDNA conversion is done here.
    """
    parts = domain_name.split(".")

    if len(parts) < 2:
        raise InvalidDomainError(domain_name)

    # Two parts indicates no sub-domain so only the parent domain is returned.
    if len(parts) == 2:
        return DomainParts(sub_domain="", parent_domain=domain_name)

    sub_domain, *rest = parts
    return DomainParts(sub_domain=sub_domain, parent_domain=".".join(rest) + ".")
