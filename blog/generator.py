"""Static HTML generation for the blog."""

import logging
import shutil
from datetime import UTC, date, datetime, time
from email.utils import format_datetime
from pathlib import Path
from typing import Any

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .posts import Post, load_posts

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["extra", "toc", "sane_lists"]
RECENT_POSTS = 5
ASSETS_DIR = "_assets"


def format_date(value: date) -> str:
  return value.strftime("%b %d, %Y")


def rfc822_date(value: date) -> str:
  return format_datetime(datetime.combine(value, time(), tzinfo=UTC))


def render_markdown(text: str) -> str:
  """Convert a Markdown body to HTML."""
  return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def _contains(outer: Path, inner: Path) -> bool:
  """Whether inner is outer itself or somewhere below it."""
  outer = outer.resolve()
  inner = inner.resolve()
  return inner == outer or outer in inner.parents


class SiteGenerator:
  """Generate the static site from a directory of posts."""

  def __init__(
    self,
    site_title: str,
    site_url: str,
    site_description: str = "",
    templates_dir: Path | None = None,
    static_dir: Path | None = None,
  ) -> None:
    self.site = {
      "title": site_title,
      "url": site_url.rstrip("/"),
      "description": site_description,
    }
    self.templates_dir = templates_dir or Path(__file__).parent / "templates"
    self.static_dir = static_dir or Path(__file__).parent / "static"

    self.jinja_env = Environment(
      loader=FileSystemLoader(str(self.templates_dir)),
      autoescape=select_autoescape(["html", "xml"]),
      keep_trailing_newline=True,
    )
    self.jinja_env.filters["format_date"] = format_date
    self.jinja_env.filters["rfc822"] = rfc822_date

  def render(self, template_name: str, **context: Any) -> str:
    template = self.jinja_env.get_template(template_name)
    return template.render(site=self.site, assets=f"/{ASSETS_DIR}", **context)

  def render_post(self, post: Post) -> str:
    """Render a single post page."""
    return self.render("post.html", post=post, content=render_markdown(post.body))

  def build(
    self,
    content_dir: Path,
    output_dir: Path,
    public_dir: Path | None = None,
    index_document: str = "index.html",
    error_document: str = "404.html",
  ) -> list[Path]:
    """Build the whole site into output_dir and return the files written.

    All posts are validated before the output directory is touched, so a
    broken post leaves the previous build in place. The home page and the
    error page are written under the names the distribution serves.
    """
    content_dir = Path(content_dir)
    output_dir = Path(output_dir)

    if _contains(output_dir, content_dir):
      raise ValueError(f"Output directory {output_dir} would overwrite the content")
    if public_dir is not None and _contains(output_dir, Path(public_dir)):
      raise ValueError(
        f"Output directory {output_dir} would overwrite "
        f"the public files in {public_dir}"
      )

    posts = load_posts(content_dir)
    logger.info("Loaded %d posts from %s", len(posts), content_dir)

    if output_dir.exists():
      shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)

    # Public files first so generated pages win on a name clash
    if public_dir is not None and Path(public_dir).is_dir():
      shutil.copytree(public_dir, output_dir, dirs_exist_ok=True)
    if self.static_dir.is_dir():
      shutil.copytree(self.static_dir, output_dir / ASSETS_DIR, dirs_exist_ok=True)

    pages: dict[str, str] = {
      index_document: self.render("index.html", posts=posts[:RECENT_POSTS]),
      "blog/index.html": self.render("blog_index.html", posts=posts),
      error_document: self.render("404.html"),
      "rss.xml": self.render("rss.xml", posts=posts),
      "sitemap.xml": self.render("sitemap.xml", posts=posts),
    }
    for post in posts:
      pages[f"blog/{post.slug}/index.html"] = self.render_post(post)

    for name, html in pages.items():
      target = output_dir / name
      target.parent.mkdir(parents=True, exist_ok=True)
      target.write_text(html, encoding="utf-8")
      logger.debug("Wrote %s", target)

    written = sorted(p for p in output_dir.rglob("*") if p.is_file())
    logger.info("Built %d files into %s", len(written), output_dir)
    return written
