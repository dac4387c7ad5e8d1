"""Markdown blog posts with YAML front matter."""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

REQUIRED_FIELDS = ("title", "description", "pubDate")
MARKDOWN_SUFFIXES = {".md", ".markdown"}


class ContentError(ValueError):
  """A content file cannot be turned into a post."""

  def __init__(self, path: Path | str, message: str) -> None:
    self.path = Path(path)
    super().__init__(f"{self.path}: {message}")


@dataclass
class Post:
  """A single blog post."""

  slug: str
  title: str
  description: str
  pub_date: date
  body: str
  source: Path
  updated_date: date | None = None
  hero_image: str | None = None

  @property
  def url(self) -> str:
    return f"/blog/{self.slug}/"


def split_front_matter(text: str) -> tuple[str, str] | None:
  """Split ``---`` delimited front matter from the body.

  Returns None when the document has no front matter block.
  """
  lines = text.lstrip("\ufeff").splitlines(keepends=True)
  if not lines or lines[0].strip() != "---":
    return None

  for index, line in enumerate(lines[1:], start=1):
    if line.strip() == "---":
      return "".join(lines[1:index]), "".join(lines[index + 1 :])
  return None


def _is_blank(value: Any) -> bool:
  return value is None or (isinstance(value, str) and not value.strip())


def _parse_date(path: Path, name: str, value: Any) -> date:
  # datetime is a subclass of date, check it first
  if isinstance(value, datetime):
    return value.date()
  if isinstance(value, date):
    return value
  if isinstance(value, str):
    try:
      return datetime.fromisoformat(value.strip()).date()
    except ValueError:
      pass
  raise ContentError(path, f"'{name}' is not a valid date: {value!r}")


def parse_post(path: Path) -> Post:
  """Parse a Markdown file into a Post, validating its metadata."""
  path = Path(path)
  parts = split_front_matter(path.read_text(encoding="utf-8"))
  if parts is None:
    raise ContentError(path, "missing front matter")

  raw_meta, body = parts
  try:
    meta = yaml.safe_load(raw_meta) or {}
  except yaml.YAMLError as e:
    raise ContentError(path, f"invalid front matter: {e}") from e
  if not isinstance(meta, dict):
    raise ContentError(path, "front matter must be a mapping")

  missing = [name for name in REQUIRED_FIELDS if _is_blank(meta.get(name))]
  if missing:
    raise ContentError(path, f"missing required field(s): {', '.join(missing)}")
  for name in REQUIRED_FIELDS:
    if isinstance(meta[name], list | dict):
      raise ContentError(path, f"'{name}' must be a single value")

  updated = meta.get("updatedDate")
  hero_image = meta.get("heroImage")

  return Post(
    slug=path.stem,
    title=str(meta["title"]),
    description=str(meta["description"]),
    pub_date=_parse_date(path, "pubDate", meta["pubDate"]),
    updated_date=_parse_date(path, "updatedDate", updated) if updated else None,
    hero_image=str(hero_image) if hero_image else None,
    body=body,
    source=path,
  )


def load_posts(directory: Path) -> list[Post]:
  """Load every post in a directory, newest first."""
  directory = Path(directory)
  if not directory.is_dir():
    raise ContentError(directory, "content directory not found")

  posts = [
    parse_post(path)
    for path in sorted(directory.iterdir())
    if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES
  ]
  seen: dict[str, Path] = {}
  for post in posts:
    if post.slug in seen:
      raise ContentError(
        post.source, f"slug '{post.slug}' already used by {seen[post.slug].name}"
      )
    seen[post.slug] = post.source
  posts.sort(key=lambda p: (p.pub_date, p.slug), reverse=True)
  return posts
