"""CDK stack for a single static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import StaticSiteConstruct
from infrastructure.config import SiteConfig


class StaticSiteStack(cdk.Stack):
  """Stack for a single static website.

  Outputs are declared on the stack itself so their keys stay stable for
  the publish tooling that reads them back from CloudFormation.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.site = StaticSiteConstruct(
      self,
      "Site",
      domain_name=site_config.domain,
      hosted_zone_id=site_config.hosted_zone_id,
      include_www=site_config.include_www,
      index_document=site_config.index_document,
      error_document=site_config.error_document,
      removal_policy=site_config.removal_policy,
    )

    cdk.Tags.of(self).add("Project", "static-sites")
    cdk.Tags.of(self).add("Domain", site_config.domain)
    if site_config.owner:
      cdk.Tags.of(self).add("Owner", site_config.owner)
    if site_config.email:
      cdk.Tags.of(self).add("OwnerEmail", site_config.email)

    distribution = self.site.distribution.distribution

    cdk.CfnOutput(
      self,
      "BucketName",
      value=self.site.bucket.bucket.bucket_name,
      description="S3 bucket name",
    )
    cdk.CfnOutput(
      self,
      "DistributionDomain",
      value=distribution.distribution_domain_name,
      description="CloudFront distribution domain name",
    )
    cdk.CfnOutput(
      self,
      "DistributionId",
      value=distribution.distribution_id,
      description="CloudFront distribution ID",
    )
    cdk.CfnOutput(
      self,
      "HostedZoneId",
      value=self.site.dns.hosted_zone.hosted_zone_id,
      description="Route 53 hosted zone ID",
    )
    cdk.CfnOutput(
      self,
      "WebsiteUrl",
      value=site_config.url,
      description="Public website URL",
    )
