"""Main composite construct for complete static website infrastructure."""

from aws_cdk import RemovalPolicy
from constructs import Construct

from .certificate import DnsValidatedCertificate
from .distribution import CloudFrontDistribution
from .dns import DnsZone
from .storage import StorageBucket


class StaticSiteConstruct(Construct):
  """Complete static website infrastructure.

  Creates:
  - Private S3 bucket for static content
  - ACM certificate for apex and www (DNS validated in the existing zone)
  - CloudFront distribution with HTTPS and Origin Access Control
  - Route 53 alias records for apex and www
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone_id: str | None = None,
    include_www: bool = True,
    index_document: str = "index.html",
    error_document: str = "404.html",
    removal_policy: RemovalPolicy = RemovalPolicy.DESTROY,
  ) -> None:
    super().__init__(scope, id)

    domain_names = [domain_name]
    if include_www:
      domain_names.append(f"www.{domain_name}")

    # Hosted zone must already exist
    self.dns = DnsZone(
      self,
      "Dns",
      domain_name=domain_name,
      hosted_zone_id=hosted_zone_id,
    )

    self.certificate = DnsValidatedCertificate(
      self,
      "Certificate",
      domain_name=domain_name,
      hosted_zone=self.dns.hosted_zone,
      include_www=include_www,
    )

    self.bucket = StorageBucket(
      self,
      "Storage",
      removal_policy=removal_policy,
    )

    self.distribution = CloudFrontDistribution(
      self,
      "Cdn",
      bucket=self.bucket.bucket,
      certificate=self.certificate.certificate,
      domain_names=domain_names,
      index_document=index_document,
      error_document=error_document,
    )

    self.dns.create_cloudfront_records(
      distribution=self.distribution.distribution,
      include_www=include_www,
    )
