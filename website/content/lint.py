# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
import logging
from typing import Dict, Iterator, List, Optional
from ..exceptions import FrontMatterError
from ..models.post import Post

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

TEMPLATE_FILE = "_template.md"
SECTION_FILE = "_index.md"

class Issue:
    """A single problem found in a post."""
    path: str
    rule: str
    severity: str
    message: str

    def __init__(self, path: str, rule: str, severity: str, message: str):
        self.path = path
        self.rule = rule
        self.severity = severity
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": self.path,
            "rule": self.rule,
            "severity": self.severity,
            "message": self.message,
        }

    def __eq__(self, other):
        if not isinstance(other, Issue):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self):
        return f"{self.path}: {self.severity}: {self.message} [{self.rule}]"

    def __repr__(self):
        return f"<Issue rule=\"{self.rule}\" severity=\"{self.severity}\" path=\"{self.path}\">"

class LintReport:
    def __init__(self):
        self.issues: List[Issue] = []
        self.posts: List[Post] = []
        self.files_checked = 0

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == WARNING]

    def ok(self, strict: bool = False) -> bool:
        if strict:
            return not self.issues
        return not self.errors

    def to_dict(self) -> Dict[str, object]:
        return {
            "files_checked": self.files_checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }

def check_post(post: Post) -> List[Issue]:
    """Run the per-file rules against a parsed post."""
    issues = []
    name = os.path.basename(post.path)

    if not post.has_frontmatter:
        issues.append(Issue(post.path, "missing-frontmatter", ERROR, "post has no front matter block"))
        return issues

    if not post.title:
        issues.append(Issue(post.path, "missing-title", ERROR, "front matter has no title"))

    # Section index pages carry no date
    if name != SECTION_FILE:
        if post.date is None or post.date == "":
            issues.append(Issue(post.path, "missing-date", WARNING, "front matter has no date"))
        elif post.published_at is None:
            issues.append(Issue(post.path, "invalid-date", ERROR, f"date {post.date!r} is not a valid timestamp"))

    if post.draft and name != TEMPLATE_FILE:
        issues.append(Issue(post.path, "draft", WARNING, "post is marked as draft"))

    return issues

def check_duplicates(posts: List[Post]) -> List[Issue]:
    """Flag every post after the first that resolves to an already-used permalink."""
    issues = []
    seen: Dict[str, str] = {}
    for post in posts:
        if os.path.basename(post.path) in (TEMPLATE_FILE, SECTION_FILE):
            continue
        link = post.permalink
        # Hugo lower-cases generated paths
        key = link.lower()
        if key in seen:
            issues.append(Issue(post.path, "duplicate-url", ERROR, f"permalink {link} is already used by {seen[key]}"))
        else:
            seen[key] = post.path
    return issues

def iter_markdown_files(root: str) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.endswith(".md"):
                yield os.path.join(dirpath, filename)

def lint_file(path: str) -> tuple[Optional[Post], List[Issue]]:
    try:
        post = Post.from_file(path)
    except FrontMatterError as e:
        return None, [Issue(path, "invalid-frontmatter", ERROR, str(e.args[0]))]
    except UnicodeDecodeError as e:
        return None, [Issue(path, "invalid-frontmatter", ERROR, f"file is not valid UTF-8: {e.reason}")]
    except OSError as e:
        return None, [Issue(path, "invalid-frontmatter", ERROR, f"cannot read file: {e.strerror}")]
    return post, check_post(post)

def lint_directory(root: str) -> LintReport:
    """Check every Markdown post below root."""
    report = LintReport()
    for path in iter_markdown_files(root):
        report.files_checked += 1
        post, issues = lint_file(path)
        report.issues.extend(issues)
        if post is not None:
            report.posts.append(post)
        for issue in issues:
            logger.debug(str(issue))

    report.issues.extend(check_duplicates(report.posts))
    logger.info(f"Checked {report.files_checked} posts: {len(report.errors)} errors, {len(report.warnings)} warnings")
    return report
