# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Front matter parsing for Hugo posts.

Posts open with either a YAML block fenced by ``---`` or a TOML block fenced
by ``+++``. Anything else is treated as a post with no front matter.
"""

import logging
from typing import Any, Dict, Optional, Tuple
import toml
import yaml
from frontmatter.default_handlers import BaseHandler, TOMLHandler, YAMLHandler
from ..exceptions import FrontMatterError

logger = logging.getLogger(__name__)

YAML = "yaml"
TOML = "toml"

_HANDLERS: Dict[str, BaseHandler] = {
    YAML: YAMLHandler(),
    TOML: TOMLHandler(),
}

_DELIMITERS = {
    "---": YAML,
    "+++": TOML,
}

def detect_format(text: str) -> Optional[str]:
    """Return "yaml", "toml" or None depending on the opening delimiter."""
    first_line = text.lstrip("\ufeff").split("\n", 1)[0].rstrip()
    return _DELIMITERS.get(first_line)

def parse_frontmatter(text: str, path: Optional[str] = None) -> Tuple[Dict[str, Any], str, Optional[str]]:
    """Split a post into (metadata, body, format).

    Returns an empty mapping and the whole text when there is no front matter.
    Raises FrontMatterError when the block is unterminated, does not parse,
    or is not a mapping.
    """
    text = text.lstrip("\ufeff")
    fmt = detect_format(text)
    if fmt is None:
        return {}, text, None

    handler = _HANDLERS[fmt]
    try:
        raw, body = handler.split(text)
    except ValueError:
        raise FrontMatterError("block is not terminated", fmt, path)

    try:
        metadata = handler.load(raw)
    except (yaml.YAMLError, toml.TomlDecodeError, ValueError) as e:
        raise FrontMatterError(str(e).replace("\n", " "), fmt, path) from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(f"expected a mapping, got {type(metadata).__name__}", fmt, path)

    return metadata, body.lstrip("\n"), fmt

def parse_frontmatter_file(path: str, encoding: str = "utf-8") -> Tuple[Dict[str, Any], str, Optional[str]]:
    """Read a post from disk and split its front matter. OSError propagates."""
    with open(path, "r", encoding=encoding) as f:
        text = f.read()
    logger.debug(f"Parsing front matter of {path}")
    return parse_frontmatter(text, path=path)
