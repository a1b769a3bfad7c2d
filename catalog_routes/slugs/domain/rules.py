import re

from catalog_routes.slugs.domain.types import IssueTag

SLUG_POLICY_VERSION = "1.0.0"

# Suffixes authors paste in by accident (uploaded file names reused as slugs).
DOCUMENT_EXTENSIONS: tuple[str, ...] = (
    "txt",
    "html",
    "htm",
    "pdf",
    "doc",
    "docx",
    "xls",
    "xlsx",
    "ppt",
    "pptx",
    "csv",
    "md",
    "json",
    "xml",
    "rtf",
    "jpg",
    "jpeg",
    "png",
    "gif",
    "webp",
    "svg",
    "bmp",
    "zip",
    "rar",
    "7z",
    "tar",
    "gz",
)

EXTENSION_SUFFIX_RE = re.compile(r"\.(?:" + "|".join(map(re.escape, DOCUMENT_EXTENSIONS)) + r")$", re.I)

# Letters, digits, hyphen, underscore and CJK unified ideographs (incl. extension A).
ALLOWED_CHAR_CLASS = r"A-Za-z0-9_\-\u3400-\u4dbf\u4e00-\u9fff"
DISALLOWED_CHAR_RE = re.compile(rf"[^{ALLOWED_CHAR_CLASS}]")
WHITESPACE_RE = re.compile(r"\s")
WHITESPACE_RUN_RE = re.compile(r"\s+")
HYPHEN_RUN_RE = re.compile(r"-{2,}")
# Characters that would split or escape a single directory name.
PATH_SEPARATOR_RE = re.compile(r"[/\\\x00]")

ISSUE_ORDER: tuple[IssueTag, ...] = (
    "missing",
    "empty",
    "hasExtension",
    "hasSpecialChars",
    "hasWhitespace",
    "hasUpperCase",
)
