"""CDK constructs for static website infrastructure."""

from .certificate import DnsValidatedCertificate
from .distribution import CloudFrontDistribution
from .dns import DnsZone
from .static_site import StaticSiteConstruct
from .storage import StorageBucket

__all__ = [
  "CloudFrontDistribution",
  "DnsValidatedCertificate",
  "DnsZone",
  "StaticSiteConstruct",
  "StorageBucket",
]
