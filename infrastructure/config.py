"""Configuration loader for the website stack and content build."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml
from aws_cdk import RemovalPolicy

REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}


@dataclass
class SiteConfig:
  """Configuration for a single static site."""

  domain: str
  owner: str = ""
  email: str = ""
  include_www: bool = True
  removal_policy: RemovalPolicy = RemovalPolicy.DESTROY
  hosted_zone_id: str | None = None
  region: str = "us-east-1"  # CloudFront only accepts us-east-1 certificates
  index_document: str = "index.html"
  error_document: str = "404.html"
  title: str = ""
  description: str = ""
  content_dir: str = "content/blog"
  public_dir: str = "public"
  output_dir: str = "dist"

  @property
  def stack_name(self) -> str:
    return f"StaticSite-{self.domain.replace('.', '-')}"

  @property
  def url(self) -> str:
    return f"https://{self.domain}"


@dataclass
class Config:
  """Site configuration loaded from sites.yaml."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    sites: list[SiteConfig] = []

    for site_data in data.get("sites", []):
      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}

      removal_policy_str = str(merged.get("removal_policy", "destroy"))
      removal_policy = REMOVAL_POLICIES.get(
        removal_policy_str.lower(), RemovalPolicy.DESTROY
      )

      sites.append(
        SiteConfig(
          domain=merged["domain"],
          owner=merged.get("owner", ""),
          email=merged.get("email", ""),
          include_www=merged.get("include_www", True),
          removal_policy=removal_policy,
          hosted_zone_id=merged.get("hosted_zone_id"),
          region=merged.get("region", "us-east-1"),
          index_document=merged.get("index_document", "index.html"),
          error_document=merged.get("error_document", "404.html"),
          title=merged.get("title", merged["domain"]),
          description=merged.get("description", ""),
          content_dir=merged.get("content_dir", "content/blog"),
          public_dir=merged.get("public_dir", "public"),
          output_dir=merged.get("output_dir", "dist"),
        )
      )

    return cls(sites=sites)

  def get_site(self, domain: str | None = None) -> SiteConfig:
    """Return the site for a domain, or the first site when none is given."""
    if not self.sites:
      raise ValueError("No sites configured")
    if domain is None:
      return self.sites[0]

    domain = domain.lower().strip()
    if domain.startswith("www."):
      domain = domain[4:]
    for site in self.sites:
      if site.domain == domain:
        return site
    raise ValueError(f"Site {domain} not found in configuration")
