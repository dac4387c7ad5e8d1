"""Tests for the configuration loader."""

from pathlib import Path

import pytest
from aws_cdk import RemovalPolicy

from infrastructure.config import Config, SiteConfig


def write_config(tmp_path: Path, content: str) -> Path:
  path = tmp_path / "sites.yaml"
  path.write_text(content)
  return path


class TestSiteConfig:
  """Test SiteConfig dataclass."""

  def test_default_values(self) -> None:
    """Verify default values are set correctly."""
    config = SiteConfig(domain="example.com")

    assert config.domain == "example.com"
    assert config.owner == ""
    assert config.include_www is True
    assert config.removal_policy == RemovalPolicy.DESTROY
    assert config.hosted_zone_id is None
    assert config.region == "us-east-1"
    assert config.index_document == "index.html"
    assert config.error_document == "404.html"
    assert config.output_dir == "dist"

  def test_derived_names(self) -> None:
    """Verify stack name and URL."""
    config = SiteConfig(domain="chessbyte.com")

    assert config.stack_name == "StaticSite-chessbyte-com"
    assert config.url == "https://chessbyte.com"


class TestConfigFromYaml:
  """Test Config.from_yaml loading."""

  def test_load_simple_config(self, tmp_path: Path) -> None:
    """Test loading a simple configuration."""
    path = write_config(
      tmp_path,
      """
sites:
  - domain: example.com
""",
    )

    config = Config.from_yaml(path)

    assert len(config.sites) == 1
    assert config.sites[0].domain == "example.com"
    assert config.sites[0].title == "example.com"
    assert config.sites[0].content_dir == "content/blog"

  def test_load_with_defaults(self, tmp_path: Path) -> None:
    """Test loading configuration with defaults."""
    path = write_config(
      tmp_path,
      """
defaults:
  include_www: false
  output_dir: build

sites:
  - domain: example.com
    title: Example
    description: An example blog
""",
    )

    config = Config.from_yaml(path)

    site = config.sites[0]
    assert site.include_www is False
    assert site.output_dir == "build"
    assert site.title == "Example"
    assert site.description == "An example blog"

  def test_site_overrides_defaults(self, tmp_path: Path) -> None:
    """Test that site-specific config overrides defaults."""
    path = write_config(
      tmp_path,
      """
defaults:
  include_www: false

sites:
  - domain: example.com
    include_www: true
""",
    )

    config = Config.from_yaml(path)

    assert config.sites[0].include_www is True

  @pytest.mark.parametrize(
    ("value", "expected"),
    [
      ("retain", RemovalPolicy.RETAIN),
      ("DESTROY", RemovalPolicy.DESTROY),
      ("snapshot", RemovalPolicy.SNAPSHOT),
      ("bogus", RemovalPolicy.DESTROY),
    ],
  )
  def test_removal_policy_conversion(
    self, tmp_path: Path, value: str, expected: RemovalPolicy
  ) -> None:
    """Test removal policy string conversion."""
    path = write_config(
      tmp_path,
      f"""
sites:
  - domain: example.com
    removal_policy: {value}
""",
    )

    config = Config.from_yaml(path)

    assert config.sites[0].removal_policy == expected

  def test_hosted_zone_id(self, tmp_path: Path) -> None:
    """Test hosted zone ID is loaded correctly."""
    path = write_config(
      tmp_path,
      """
sites:
  - domain: example.com
    hosted_zone_id: Z1234567890
""",
    )

    config = Config.from_yaml(path)

    assert config.sites[0].hosted_zone_id == "Z1234567890"

  def test_missing_domain_raises(self, tmp_path: Path) -> None:
    path = write_config(
      tmp_path,
      """
sites:
  - title: No domain
""",
    )

    with pytest.raises(KeyError):
      Config.from_yaml(path)

  def test_empty_file(self, tmp_path: Path) -> None:
    path = write_config(tmp_path, "")
    assert Config.from_yaml(path).sites == []


class TestGetSite:
  """Test Config.get_site selection."""

  @pytest.fixture
  def config(self) -> Config:
    return Config(sites=[SiteConfig(domain="site1.com"), SiteConfig(domain="site2.com")])

  def test_defaults_to_first_site(self, config: Config) -> None:
    assert config.get_site().domain == "site1.com"

  def test_selects_by_domain(self, config: Config) -> None:
    assert config.get_site("site2.com").domain == "site2.com"

  def test_normalizes_www_prefix(self, config: Config) -> None:
    assert config.get_site("WWW.Site2.com").domain == "site2.com"

  def test_unknown_domain(self, config: Config) -> None:
    with pytest.raises(ValueError, match="not found"):
      config.get_site("other.com")

  def test_no_sites(self) -> None:
    with pytest.raises(ValueError, match="No sites"):
      Config().get_site()
