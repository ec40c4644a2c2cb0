"""
Parse Go coverage profiles and summarize them per package.

A profile, as written by ``go test -coverprofile``, starts with a mode line
and then holds one line per code block::

    mode: atomic
    example.com/mod/pkg/file.go:10.2,12.16 3 1

i.e. ``file:startLine.startCol,endLine.endCol numStatements hitCount``.
"""
import logging
import posixpath

from typing import Dict, Iterable

log = logging.getLogger(__name__)

NAME_WIDTH = 61
MAX_NAME_LEN = 58
RULE_WIDTH = 70


class CoverageStats(object):
    """
    Statement counters for one package.
    """
    __slots__ = ['total_statements', 'covered_statements']

    def __init__(self, total_statements=0, covered_statements=0):
        self.total_statements = total_statements
        self.covered_statements = covered_statements

    def add_block(self, num_statements: int, count: int) -> None:
        self.total_statements += num_statements
        if count > 0:
            self.covered_statements += num_statements

    @property
    def percent(self) -> float:
        if self.total_statements > 0:
            return float(self.covered_statements) / \
                float(self.total_statements) * 100
        return 0.0

    def __eq__(self, other):
        if not isinstance(other, CoverageStats):
            return NotImplemented
        return (self.total_statements, self.covered_statements) == \
            (other.total_statements, other.covered_statements)

    def __repr__(self):
        return '{cls}(total_statements={total}, covered_statements={covered})'.format(  # noqa
            cls=self.__class__.__name__,
            total=self.total_statements,
            covered=self.covered_statements,
        )


def package_of(file_path: str) -> str:
    pkg = posixpath.dirname(file_path)
    return pkg or '.'


def parse_profile(lines: Iterable[str]) -> Dict[str, CoverageStats]:
    """
    Aggregate profile lines into per-package counters.

    Lines that don't look like coverage blocks are skipped.

    :param lines: an iterable of profile lines, e.g. an open file
    :returns: a dict mapping package directory to CoverageStats
    """
    package_stats = dict()
    for line in lines:
        if line.startswith('mode:'):
            continue

        parts = line.split()
        if len(parts) != 3:
            continue

        file_part, num_part, count_part = parts
        if ':' not in file_part:
            continue
        file_path = file_part.rsplit(':', 1)[0]

        try:
            num_statements = int(num_part)
            count = int(count_part)
        except ValueError:
            log.debug("Skipping malformed profile line: %r", line)
            continue

        pkg = package_of(file_path)
        if pkg not in package_stats:
            package_stats[pkg] = CoverageStats()
        package_stats[pkg].add_block(num_statements, count)
    return package_stats


def read_profile(path: str) -> Dict[str, CoverageStats]:
    with open(path) as f:
        return parse_profile(f)


def _display_name(pkg):
    if len(pkg) > MAX_NAME_LEN:
        return '...' + pkg[-(MAX_NAME_LEN - 3):]
    return pkg


def format_summary(package_stats: Dict[str, CoverageStats]) -> str:
    """
    Render the per-package coverage table.

    :param package_stats: as returned by parse_profile()
    :returns: the table, without a trailing newline
    """
    if not package_stats:
        return 'No coverage data found'

    lines = ['']
    lines.append('%-*s %10s' % (NAME_WIDTH, 'PACKAGE', 'COVERAGE'))
    lines.append('-' * RULE_WIDTH)

    total = CoverageStats()
    for pkg in sorted(package_stats):
        stats = package_stats[pkg]
        total.total_statements += stats.total_statements
        total.covered_statements += stats.covered_statements
        lines.append('%-*s %8.1f%%' % (NAME_WIDTH, _display_name(pkg),
                                        stats.percent))

    lines.append('-' * RULE_WIDTH)
    lines.append('%-*s %8.1f%%' % (NAME_WIDTH, 'TOTAL', total.percent))
    lines.append('')
    lines.append('Statements: %d/%d covered' % (total.covered_statements,
                                                total.total_statements))
    return '\n'.join(lines)


def display_coverage_stats(path: str) -> Dict[str, CoverageStats]:
    """
    Read the profile at path and print its per-package summary.

    :returns: the per-package stats
    """
    package_stats = read_profile(path)
    log.debug("Parsed coverage for %d package(s) from %s",
              len(package_stats), path)
    print(format_summary(package_stats))
    return package_stats
