#!/usr/bin/env python3
# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""
Content checks for the blog posts, run before the Hugo build.

Usage:
    python checks.py                              # Check CONTENT_DIR (default blog/content/post)
    python checks.py blog/content/post --strict   # Fail on warnings (drafts, missing dates) too
    python checks.py --format json                # Machine-readable report
    python checks.py --export public/posts.json   # Also write the published post index
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from website.config import Config
from website.content.index import write_post_index
from website.content.lint import lint_directory

logger = logging.getLogger("website.checks")

def main(argv=None) -> int:
    config = Config()
    parser = argparse.ArgumentParser(
        prog = "checks",
        description = "Lint the front matter of the blog posts.",
        epilog = f"Copyright (c) {datetime.now().year} Damien Boisvert (AlphaGameDeveloper). This software is released under the MIT License. https://opensource.org/licenses/MIT"
    )

    parser.add_argument(
        "content_dir",
        nargs="?",
        default=config.CONTENT_DIR,
        help=f"Directory holding the Markdown posts (default: {config.CONTENT_DIR})"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures"
    )

    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format (default: text)"
    )

    parser.add_argument(
        "--export",
        metavar="FILE",
        help="Write the index of published posts as JSON to FILE"
    )

    args = parser.parse_args(argv)

    if not os.path.isdir(args.content_dir):
        logger.error(f"Content directory {args.content_dir} does not exist")
        return 2

    report = lint_directory(args.content_dir)

    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2))
    else:
        for issue in report.issues:
            print(issue)
        drafts = [i for i in report.issues if i.rule == "draft"]
        print("Draft content found" if drafts else "No draft content found")
        print(f"{report.files_checked} files checked, {len(report.errors)} errors, {len(report.warnings)} warnings")

    if args.export:
        count = write_post_index(report.posts, args.export)
        logger.info(f"Wrote {count} posts to {args.export}")

    return 0 if report.ok(strict=args.strict) else 1

if __name__ == "__main__":
    sys.exit(main())
