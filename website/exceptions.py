# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

class WebsiteError(Exception):
    """Base class for errors raised by the website package."""

class FrontMatterError(WebsiteError):
    """Raised when a post's front matter block cannot be parsed."""

    def __init__(self, message: str, fmt: str | None = None, path: str | None = None):
        self.fmt = fmt
        self.path = path
        super().__init__(message)

    def __str__(self):
        prefix = f"{self.path}: " if self.path else ""
        kind = f"{self.fmt} " if self.fmt else ""
        return f"{prefix}invalid {kind}front matter: {self.args[0]}"

class MemoryLoadError(WebsiteError):
    """Raised when the web root cannot be loaded into memory."""
