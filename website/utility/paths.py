# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from urllib.parse import quote_plus

def sanitize_path(path: str) -> str:
    """Escape a request path for use as a lookup key, metric label and log field.

    The path is query-escaped, slashes are restored, and any remaining
    control characters are dropped.
    """
    sanitized = quote_plus(path, safe="").replace("%2F", "/")
    for char in ("\n", "\r", "\t"):
        sanitized = sanitized.replace(char, "")
    return "".join(c for c in sanitized if ord(c) >= 32 and ord(c) != 127)

def url_path_for(relative_path: str) -> str:
    """Turn an OS-relative path below the web root into its URL path."""
    if relative_path in ("", "."):
        return "/"
    return "/" + relative_path.replace("\\", "/").lstrip("/")
