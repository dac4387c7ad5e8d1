"""Upload built assets to S3 and refresh the CloudFront cache."""

import hashlib
import logging
import mimetypes
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)

# delete_objects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000
# Above this many paths a single wildcard is cheaper than listing them
MAX_INVALIDATION_PATHS = 15
INDEX_DOCUMENT = "index.html"


@dataclass
class SyncResult:
  """Outcome of a directory sync."""

  uploaded: list[str] = field(default_factory=list)
  deleted: list[str] = field(default_factory=list)
  unchanged: list[str] = field(default_factory=list)

  @property
  def changed(self) -> list[str]:
    return sorted(set(self.uploaded) | set(self.deleted))


def file_md5(path: Path) -> str:
  digest = hashlib.md5()
  with open(path, "rb") as f:
    for chunk in iter(lambda: f.read(1024 * 1024), b""):
      digest.update(chunk)
  return digest.hexdigest()


def guess_content_type(path: Path) -> str:
  content_type, _ = mimetypes.guess_type(path.name)
  return content_type or "application/octet-stream"


def list_remote_objects(s3_client: Any, bucket: str, prefix: str = "") -> dict[str, str]:
  """Return {key: etag} for every object under prefix."""
  objects: dict[str, str] = {}
  kwargs: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix}

  while True:
    response = s3_client.list_objects_v2(**kwargs)
    for obj in response.get("Contents", []):
      objects[obj["Key"]] = obj["ETag"].strip('"')
    if not response.get("IsTruncated"):
      return objects
    kwargs["ContinuationToken"] = response["NextContinuationToken"]


def list_local_files(source_dir: Path, prefix: str = "") -> dict[str, Path]:
  """Return {key: path} for every file under source_dir."""
  source_dir = Path(source_dir)
  return {
    prefix + path.relative_to(source_dir).as_posix(): path
    for path in sorted(source_dir.rglob("*"))
    if path.is_file()
  }


def sync_directory(
  s3_client: Any,
  bucket: str,
  source_dir: Path,
  prefix: str = "",
  delete: bool = True,
  dry_run: bool = False,
) -> SyncResult:
  """Mirror a local directory to an S3 prefix.

  Files whose MD5 matches the remote ETag are skipped. With delete=True,
  remote keys under the prefix that have no local file are removed.
  """
  source_dir = Path(source_dir)
  if not source_dir.is_dir():
    raise FileNotFoundError(f"Source directory {source_dir} does not exist")
  if prefix and not prefix.endswith("/"):
    prefix += "/"

  local = list_local_files(source_dir, prefix)
  remote = list_remote_objects(s3_client, bucket, prefix)
  result = SyncResult()

  for key, path in local.items():
    if remote.get(key) == file_md5(path):
      result.unchanged.append(key)
      continue

    result.uploaded.append(key)
    if dry_run:
      logger.info("(dryrun) upload: %s", key)
      continue
    logger.info("upload: %s -> s3://%s/%s", path, bucket, key)
    s3_client.put_object(
      Bucket=bucket,
      Key=key,
      Body=path.read_bytes(),
      ContentType=guess_content_type(path),
    )

  if delete:
    result.deleted = sorted(set(remote) - set(local))
    if dry_run:
      for key in result.deleted:
        logger.info("(dryrun) delete: %s", key)
    else:
      for start in range(0, len(result.deleted), DELETE_BATCH_SIZE):
        batch = result.deleted[start : start + DELETE_BATCH_SIZE]
        logger.info("delete: %d objects from s3://%s", len(batch), bucket)
        s3_client.delete_objects(
          Bucket=bucket,
          Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
        )

  return result


def invalidation_paths(keys: list[str]) -> list[str]:
  """Map changed object keys to the CloudFront paths that serve them."""
  paths: set[str] = set()
  for key in keys:
    path = "/" + quote(key.lstrip("/"), safe="/~")
    paths.add(path)
    # blog/post/index.html is also served at /blog/post/
    if key == INDEX_DOCUMENT or key.endswith("/" + INDEX_DOCUMENT):
      paths.add(path[: -len(INDEX_DOCUMENT)])

  if len(paths) > MAX_INVALIDATION_PATHS:
    return ["/*"]
  return sorted(paths)


def create_invalidation(
  cloudfront_client: Any,
  distribution_id: str,
  paths: list[str],
  wait: bool = False,
) -> str | None:
  """Create a CloudFront invalidation and return its ID."""
  if not paths:
    logger.info("Nothing to invalidate")
    return None

  response = cloudfront_client.create_invalidation(
    DistributionId=distribution_id,
    InvalidationBatch={
      "Paths": {"Quantity": len(paths), "Items": list(paths)},
      "CallerReference": str(time.time()),
    },
  )
  invalidation_id: str = response["Invalidation"]["Id"]
  logger.info("Created invalidation %s for %d paths", invalidation_id, len(paths))

  if wait:
    waiter = cloudfront_client.get_waiter("invalidation_completed")
    waiter.wait(DistributionId=distribution_id, Id=invalidation_id)

  return invalidation_id


def get_stack_outputs(cfn_client: Any, stack_name: str) -> dict[str, str]:
  """Read the named outputs of a deployed stack."""
  response = cfn_client.describe_stacks(StackName=stack_name)
  stacks = response.get("Stacks", [])
  if not stacks:
    raise ValueError(f"Stack {stack_name} not found")
  return {
    output["OutputKey"]: output["OutputValue"]
    for output in stacks[0].get("Outputs", [])
  }
