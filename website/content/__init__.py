# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from .frontmatter import parse_frontmatter, parse_frontmatter_file, detect_format
