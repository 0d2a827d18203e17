"""Deciding whether a path is excluded from tagging.

Patterns are plain globs matched against the whole path with ``wcmatch``:
``*`` and ``?`` stay within one segment, ``**`` spans directories, brace
sets like ``*.{png,jpg}`` expand, and dotfiles match like any other name.
A leading ``!`` negates a pattern.
"""

from collections.abc import Callable, Iterable

from wcmatch import glob

GlobMatcher = Callable[[str, str], bool]

GLOB_FLAGS = (
    glob.GLOBSTAR
    | glob.BRACE
    | glob.DOTGLOB
    | glob.NEGATE
    | glob.NEGATEALL
    | glob.FORCEUNIX
)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    # Dependencies & lock files
    "**/node_modules/**",
    "**/*.lock",
    "**/package-lock.json",
    "**/yarn.lock",
    "**/pnpm-lock.yaml",
    # Generated assets
    "**/*.min.js",
    "**/*.min.css",
    "**/*.bundle.js",
    "**/*.map",
    "**/*.wasm",
    # Images & fonts
    "**/*.png",
    "**/*.jpg",
    "**/*.jpeg",
    "**/*.gif",
    "**/*.ico",
    "**/*.svg",
    "**/*.woff",
    "**/*.woff2",
    "**/*.ttf",
    "**/*.eot",
    # Documents, archives, binaries
    "**/*.pdf",
    "**/*.zip",
    "**/*.tar",
    "**/*.gz",
    "**/*.exe",
    "**/*.dll",
    "**/*.so",
    "**/*.dylib",
)


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def matches_glob(file_path: str, pattern: str) -> bool:
    """True if *file_path* matches the glob *pattern* (dotfiles included).

    Leading slashes are ignored on both sides, so absolute paths match
    the same patterns as relative ones.
    """
    path = _normalize(file_path).lstrip("/")
    if not path:
        return False
    return glob.globmatch(path, _normalize(pattern).lstrip("/"), flags=GLOB_FLAGS)


def should_exclude(
    file_path: str,
    patterns: Iterable[str],
    matcher: GlobMatcher = matches_glob,
) -> bool:
    """True if any of *patterns* matches *file_path* according to *matcher*."""
    path = _normalize(file_path)
    return any(matcher(path, pattern) for pattern in patterns)
