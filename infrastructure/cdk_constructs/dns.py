"""Route 53 DNS constructs."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct


class DnsZone(Construct):
  """Existing Route 53 hosted zone and the alias records for the site."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone_id: str | None = None,
  ) -> None:
    super().__init__(scope, id)

    self.domain_name = domain_name

    if hosted_zone_id:
      self.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
        self,
        "HostedZone",
        hosted_zone_id=hosted_zone_id,
        zone_name=domain_name,
      )
    else:
      # Needs an explicit account/region on the stack
      self.hosted_zone = route53.HostedZone.from_lookup(
        self,
        "HostedZone",
        domain_name=domain_name,
      )

  def create_cloudfront_records(
    self,
    distribution: cloudfront.IDistribution,
    include_www: bool = True,
  ) -> None:
    """Create A and AAAA alias records pointing to CloudFront distribution."""
    target = route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution))

    record_names = {"Apex": self.domain_name}
    if include_www:
      record_names["Www"] = f"www.{self.domain_name}"

    for prefix, record_name in record_names.items():
      route53.ARecord(
        self,
        f"{prefix}ARecord",
        zone=self.hosted_zone,
        record_name=record_name,
        target=target,
      )
      route53.AaaaRecord(
        self,
        f"{prefix}AAAARecord",
        zone=self.hosted_zone,
        record_name=record_name,
        target=target,
      )
