# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT
import os
from datetime import date, datetime, time, timezone
from typing import Dict, Any, List, Optional
from pymdownx.slugs import slugify as _md_slugify
from ..content.frontmatter import parse_frontmatter, parse_frontmatter_file

_slugify_lower = _md_slugify(case="lower")

TRUE_STRINGS = ("true", "yes", "on", "1")

def slugify(value: str) -> str:
    """Lower-case path segment the way Hugo builds it from a file name or slug.

    Spaces become dashes; dots and underscores survive, so ``ubuntu-20.04``
    keeps its dot.
    """
    return ".".join(_slugify_lower(part, sep="-") for part in value.strip().split("."))

def parse_date(value: Any) -> Optional[datetime]:
    """Coerce a front matter date into an aware datetime.

    YAML and TOML loaders already hand back date/datetime objects for bare
    timestamps; quoted values arrive as ISO-8601 strings. Returns None when
    the value cannot be read as a timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

def _as_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]

def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_STRINGS

class Post:
    """Represents a blog post, as defined by the Hugo front matter of a Markdown file."""
    raw: dict # not recommended to use directly, use properties instead

    body: str
    path: str
    format: Optional[str]
    title: str
    date: Any
    tags: List[str]
    categories: List[str]
    author: str
    description: str
    url: str
    slug: str
    draft: bool
    more_link: bool

    def __init__(self, raw_data: Dict[str, Any], body: str = "", path: str = "", fmt: Optional[str] = None):
        self.raw = raw_data
        self.body = body
        self.path = path
        self.format = fmt
        # `title:` with no value loads as None
        title = raw_data.get("title")
        if title is None:
            title = ""
        self.title = title.strip() if isinstance(title, str) else str(title)
        self.date = raw_data.get("date", None)
        self.tags = _as_list(raw_data.get("tags"))
        self.categories = _as_list(raw_data.get("categories"))
        self.author = str(raw_data.get("author", "") or "")
        self.description = str(raw_data.get("description", "") or "")
        self.url = str(raw_data.get("url", "") or "")
        self.slug = str(raw_data.get("slug", "") or "")
        self.draft = _as_bool(raw_data.get("draft", False))
        self.more_link = _as_bool(raw_data.get("more_link", False))

    @classmethod
    def from_text(cls, text: str, path: str = "") -> "Post":
        metadata, body, fmt = parse_frontmatter(text, path=path or None)
        return cls(metadata, body, path, fmt)

    @classmethod
    def from_file(cls, path: str) -> "Post":
        metadata, body, fmt = parse_frontmatter_file(path)
        return cls(metadata, body, path, fmt)

    @property
    def has_frontmatter(self) -> bool:
        return self.format is not None

    @property
    def published_at(self) -> Optional[datetime]:
        return parse_date(self.date)

    @property
    def file_slug(self) -> str:
        """Slug derived from the file name, Hugo's fallback when none is set."""
        name = os.path.splitext(os.path.basename(self.path))[0]
        if name == "index":
            # page bundle: the directory names the post
            name = os.path.basename(os.path.dirname(self.path))
        return slugify(name)

    @property
    def permalink(self) -> str:
        if self.url:
            url = self.url if self.url.startswith("/") else "/" + self.url
            return url if url.endswith("/") or "." in url.rsplit("/", 1)[-1] else url + "/"
        slug = slugify(self.slug) if self.slug else self.file_slug
        return f"/post/{slug}/"

    def to_dict(self) -> Dict[str, Any]:
        published = self.published_at
        return {
            "title": self.title,
            "date": published.isoformat() if published else None,
            "url": self.permalink,
            "author": self.author,
            "description": self.description,
            "tags": self.tags,
            "categories": self.categories,
        }

    def __repr__(self):
        raw_bytes = len(str(self.raw).encode('utf-8'))
        return f"<Post title=\"{self.title}\" date=\"{self.date}\" author=\"{self.author}\", rawBytes={raw_bytes}>"
