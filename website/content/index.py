# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List
from ..models.post import Post

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

def build_post_index(posts: Iterable[Post]) -> List[Dict[str, Any]]:
    """Published posts, newest first, as plain dicts for posts.json."""
    published = [p for p in posts if p.has_frontmatter and not p.draft and p.title]
    published.sort(key=lambda p: (p.published_at or _EPOCH, p.permalink), reverse=True)
    return [p.to_dict() for p in published]

def write_post_index(posts: Iterable[Post], path: str) -> int:
    """Write posts.json and return how many posts went in."""
    index = build_post_index(posts)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(index, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return len(index)
