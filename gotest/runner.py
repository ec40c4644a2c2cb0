"""
Thin wrappers around the go toolchain: ``go test`` with coverage enabled and
``go tool cover`` to render the HTML report.
"""
import logging
import subprocess

from collections import namedtuple

from gotest.exceptions import CommandFailedError, CommandNotFoundError

log = logging.getLogger(__name__)

TestResult = namedtuple('TestResult', ['returncode', 'output'])
# pytest would otherwise try to collect this as a test class
TestResult.__test__ = False

ERROR_MARKERS = ('FAIL', 'Error', 'error', 'panic', '_test.go:')
ERROR_PREFIXES = ('got:', 'want:', 'expected')


def build_test_args(packages, user_args, profile, mode='atomic'):
    """
    :param packages: package paths as returned by find_packages()
    :param user_args: extra arguments for go test, passed through untouched
    :param profile: where go test should write the coverage profile
    :param mode: the -covermode to use
    :returns: the argument list for 'go', starting with 'test'
    """
    args = ['test']
    args.extend(['-coverprofile=' + profile, '-covermode=' + mode])
    args.extend(user_args)
    args.extend(packages)
    return args


def _run(cmd, **kwargs):
    log.debug("Running: %s", ' '.join(cmd))
    try:
        return subprocess.run(cmd, **kwargs)
    except FileNotFoundError:
        raise CommandNotFoundError(command=cmd)


def run_tests(args, detail=False, go='go'):
    """
    Run go test.

    In detail mode the child shares our stdin, stdout and stderr so its
    output appears as it is produced. Otherwise stdout and stderr are
    captured together and handed back for filtering.

    A failing test run is not an error here; look at returncode.

    :param args: arguments for go, as built by build_test_args()
    :param detail: whether to stream the output
    :param go: the go executable
    :returns: a TestResult
    """
    cmd = [go] + list(args)
    if detail:
        proc = _run(cmd)
        return TestResult(proc.returncode, '')
    proc = _run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        universal_newlines=True,
        errors='replace',
    )
    return TestResult(proc.returncode, proc.stdout or '')


def filter_test_errors(output):
    """
    Pick the lines of go test output that describe a failure.

    :param output: the combined output of a go test run
    :returns: a list of lines
    """
    lines = []
    for line in output.split('\n'):
        stripped = line.strip()
        if any(marker in line for marker in ERROR_MARKERS) or \
                stripped.startswith(ERROR_PREFIXES):
            lines.append(line)
    return lines


def generate_html(profile, html, detail=False, go='go'):
    """
    Render a coverage profile to HTML with 'go tool cover'.

    :param profile: the coverage profile written by go test
    :param html: the output path
    :param detail: whether to show the tool's output
    :param go: the go executable
    """
    cmd = [go, 'tool', 'cover', '-html=' + profile, '-o', html]
    if detail:
        proc = _run(cmd)
    else:
        proc = _run(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    if proc.returncode != 0:
        raise CommandFailedError(
            command=cmd, exitstatus=proc.returncode,
            label='generating coverage HTML',
        )
