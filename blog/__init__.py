"""Markdown blog content pipeline and publishing helpers."""

from .generator import SiteGenerator
from .posts import ContentError, Post, load_posts, parse_post
from .publish import (
  SyncResult,
  create_invalidation,
  get_stack_outputs,
  invalidation_paths,
  sync_directory,
)

__all__ = [
  "ContentError",
  "Post",
  "SiteGenerator",
  "SyncResult",
  "create_invalidation",
  "get_stack_outputs",
  "invalidation_paths",
  "load_posts",
  "parse_post",
  "sync_directory",
]
