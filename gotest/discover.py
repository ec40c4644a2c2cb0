"""
Find the Go packages below a directory.

A package here is simply a directory holding at least one ``.go`` file; the
paths are returned in the ``./dir`` form that ``go test`` accepts.
"""
import fnmatch
import logging
import os

from typing import Iterable, List, Optional, Union

log = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS = ('vendor', 'testdata')
GLOB_CHARS = '*?['


def parse_ignore_patterns(value: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """
    Split comma separated ignore patterns, dropping blanks.

    :param value: a string like "example, pb", a list of such strings, or None
    :returns: a flat list of patterns
    """
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    patterns = []
    for item in value:
        for pattern in str(item).split(','):
            pattern = pattern.strip()
            if pattern:
                patterns.append(pattern)
    return patterns


def should_ignore(path: str, patterns: Iterable[str]) -> bool:
    """
    :returns: True if any pattern is contained in path, or, for patterns
              holding glob characters, if it matches path or its last
              component.
    """
    path = path.replace(os.sep, '/')
    name = path.rstrip('/').rsplit('/', 1)[-1]
    for pattern in patterns:
        if pattern in path:
            return True
        if any(c in pattern for c in GLOB_CHARS) and (
                fnmatch.fnmatchcase(path, pattern) or
                fnmatch.fnmatchcase(name, pattern)):
            return True
    return False


def _is_skipped_dir(name, skip_dirs):
    return name.startswith('.') or name in skip_dirs


def _package_path(rel_dir):
    if rel_dir == os.curdir:
        return './.'
    return './' + rel_dir.replace(os.sep, '/')


def find_packages(root: str = '.', ignore_patterns: Iterable[str] = (),
                  skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS) -> List[str]:
    """
    Walk root and collect every directory that contains Go source files.

    Hidden directories, the ones named in skip_dirs and the ones matching
    ignore_patterns are not descended into. The root itself is always
    walked.

    :param root: directory to start from
    :param ignore_patterns: patterns as understood by should_ignore()
    :param skip_dirs: directory names that are never packages
    :returns: package paths relative to root, in walk order
    """
    ignore_patterns = list(ignore_patterns)
    skip_dirs = set(skip_dirs)
    packages = []

    def onerror(exc):
        raise exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        rel_dir = os.path.relpath(dirpath, root)
        kept = []
        for name in sorted(dirnames):
            rel_path = os.path.normpath(os.path.join(rel_dir, name))
            if _is_skipped_dir(name, skip_dirs):
                log.debug("Skipping directory %s", rel_path)
                continue
            if should_ignore(rel_path, ignore_patterns):
                log.debug("Ignoring directory %s", rel_path)
                continue
            kept.append(name)
        dirnames[:] = kept

        if any(f.endswith('.go') for f in filenames):
            packages.append(_package_path(rel_dir))
    return packages
