#!/usr/bin/env python3
"""Operator commands for the website: provision, build, publish."""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

import boto3

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from blog.generator import SiteGenerator  # noqa: E402
from blog.publish import (  # noqa: E402
  create_invalidation,
  get_stack_outputs,
  invalidation_paths,
  sync_directory,
)
from infrastructure.config import Config, SiteConfig  # noqa: E402

CDK_COMMANDS = ("bootstrap", "diff", "deploy", "destroy")


def run_cdk(command: str, site: SiteConfig, config_path: str, extra: list[str]) -> int:
  """Run a cdk CLI command for the site's stack and return its exit code."""
  args = ["cdk", command]
  if command != "bootstrap":
    args.append(site.stack_name)
  args += ["--context", f"config={config_path}", *extra]
  print(f"$ {' '.join(args)}")
  return subprocess.run(args, check=False).returncode


def build_site(site: SiteConfig) -> list[Path]:
  """Render the site's Markdown content into its output directory."""
  generator = SiteGenerator(
    site_title=site.title or site.domain,
    site_url=site.url,
    site_description=site.description,
  )
  return generator.build(
    Path(site.content_dir),
    Path(site.output_dir),
    public_dir=Path(site.public_dir),
    index_document=site.index_document,
    error_document=site.error_document,
  )


def stack_outputs(site: SiteConfig) -> dict[str, str]:
  cfn = boto3.client("cloudformation", region_name=site.region)
  return get_stack_outputs(cfn, site.stack_name)


def sync_site(site: SiteConfig, *, delete: bool = True, dry_run: bool = False) -> list[str]:
  """Mirror the output directory to the site bucket. Returns changed keys."""
  bucket = stack_outputs(site)["BucketName"]
  s3 = boto3.client("s3", region_name=site.region)
  result = sync_directory(
    s3,
    bucket,
    Path(site.output_dir),
    delete=delete,
    dry_run=dry_run,
  )
  prefix = "(dryrun) " if dry_run else ""
  print(
    f"{prefix}s3://{bucket}: {len(result.uploaded)} uploaded, "
    f"{len(result.deleted)} deleted, {len(result.unchanged)} unchanged"
  )
  return result.changed


def invalidate_site(site: SiteConfig, paths: list[str], *, wait: bool = False) -> str | None:
  distribution_id = stack_outputs(site)["DistributionId"]
  cloudfront = boto3.client("cloudfront")
  invalidation_id = create_invalidation(cloudfront, distribution_id, paths, wait=wait)
  if invalidation_id:
    print(f"Invalidation {invalidation_id}: {', '.join(paths)}")
  else:
    print("No paths to invalidate")
  return invalidation_id


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(description="Manage the static website")
  parser.add_argument(
    "--config",
    default="sites.yaml",
    help="Site configuration file (default: sites.yaml)",
  )
  parser.add_argument(
    "--domain",
    help="Site to operate on (default: first site in the config)",
  )
  parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

  commands = parser.add_subparsers(dest="command", required=True)

  commands.add_parser("bootstrap", help="Initialize the CDK environment")
  commands.add_parser("diff", help="Preview infrastructure changes")
  deploy = commands.add_parser("deploy", help="Apply infrastructure changes")
  deploy.add_argument(
    "--require-approval",
    choices=["never", "any-change", "broadening"],
    help="Passed through to cdk deploy",
  )
  commands.add_parser("destroy", help="Tear down the site stack")

  commands.add_parser("build", help="Render Markdown content to static files")

  sync = commands.add_parser("sync", help="Mirror built files to the S3 bucket")
  sync.add_argument("--dryrun", action="store_true", help="Show what would change")
  sync.add_argument(
    "--no-delete",
    action="store_true",
    help="Keep remote files that no longer exist locally",
  )

  invalidate = commands.add_parser("invalidate", help="Invalidate CloudFront paths")
  invalidate.add_argument("paths", nargs="*", default=["/*"], help="Paths (default: /*)")
  invalidate.add_argument("--wait", action="store_true", help="Wait for completion")

  publish = commands.add_parser("publish", help="Build, sync and invalidate changes")
  publish.add_argument("--wait", action="store_true", help="Wait for invalidation")

  commands.add_parser("outputs", help="Show stack outputs")
  return parser


def run(args: argparse.Namespace) -> int:
  config = Config.from_yaml(Path(args.config))
  site = config.get_site(args.domain)

  if args.command in CDK_COMMANDS:
    extra: list[str] = []
    if getattr(args, "require_approval", None):
      extra += ["--require-approval", args.require_approval]
    return run_cdk(args.command, site, args.config, extra)

  if args.command == "build":
    written = build_site(site)
    print(f"Built {len(written)} files into {site.output_dir}")
  elif args.command == "sync":
    sync_site(site, delete=not args.no_delete, dry_run=args.dryrun)
  elif args.command == "invalidate":
    invalidate_site(site, args.paths, wait=args.wait)
  elif args.command == "publish":
    written = build_site(site)
    print(f"Built {len(written)} files into {site.output_dir}")
    changed = sync_site(site)
    invalidate_site(site, invalidation_paths(changed), wait=args.wait)
  elif args.command == "outputs":
    for key, value in sorted(stack_outputs(site).items()):
      print(f"{key}={value}")
  return 0


def main(argv: list[str] | None = None) -> None:
  """Main entry point."""
  args = build_parser().parse_args(argv)
  logging.basicConfig(
    level=logging.INFO if args.verbose else logging.WARNING,
    format="%(levelname)s %(name)s: %(message)s",
  )

  try:
    code = run(args)
  except Exception as e:
    print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)
  sys.exit(code)


if __name__ == "__main__":
  main()
