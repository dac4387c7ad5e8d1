"""CloudFront distribution for static website."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct

# S3 behind OAC answers 403 for missing keys since ListBucket is not granted
NOT_FOUND_STATUSES = (403, 404)


class CloudFrontDistribution(Construct):
  """CloudFront distribution with a private S3 origin."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    certificate: acm.ICertificate,
    domain_names: list[str],
    index_document: str = "index.html",
    error_document: str = "404.html",
  ) -> None:
    super().__init__(scope, id)

    error_responses = [
      cloudfront.ErrorResponse(
        http_status=status,
        response_http_status=404,
        response_page_path=f"/{error_document.lstrip('/')}",
      )
      for status in NOT_FOUND_STATUSES
    ]

    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origins.S3BucketOrigin.with_origin_access_control(bucket),
        viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
      ),
      domain_names=domain_names,
      certificate=certificate,
      default_root_object=index_document,
      error_responses=error_responses,
      minimum_protocol_version=cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
    )
