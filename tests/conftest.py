"""Pytest fixtures for CDK construct and publishing tests."""

import aws_cdk as cdk
import pytest

ACCOUNT = "123456789012"
REGION = "us-east-1"
HOSTED_ZONE_ID = "Z0123456789EXAMPLE"


def hosted_zone_context(domain: str) -> dict[str, dict[str, str]]:
  """Cached hosted zone lookup result, as cdk.context.json would store it."""
  key = f"hosted-zone:account={ACCOUNT}:domainName={domain}:region={REGION}"
  return {key: {"Id": f"/hostedzone/{HOSTED_ZONE_ID}", "Name": f"{domain}."}}


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App with a cached hosted zone lookup for example.com."""
  return cdk.App(context=hosted_zone_context("example.com"))


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(
    app, "TestStack", env=cdk.Environment(account=ACCOUNT, region=REGION)
  )
