import logging
import os
import sys

import gotest
from gotest import coverage, discover, runner
from gotest.config import config as gotest_config
from gotest.exceptions import GotestError, NoCoverageProfileError
from gotest.util import opener

log = logging.getLogger(__name__)


def setup_config(args):
    """
    Merge the command line with the configuration file.

    :param args: the docopt dict from scripts/run.py
    :returns: a dict of the settings the run uses
    """
    ignore = discover.parse_ignore_patterns(gotest_config.get('ignore'))
    ignore.extend(discover.parse_ignore_patterns(args.get('--ignore')))
    open_report = gotest_config.get('open_report')
    if args.get('--no-open'):
        open_report = False
    return dict(
        detail=bool(args.get('--detail')),
        ignore=ignore,
        go=gotest_config.get('go'),
        profile=args.get('--profile') or gotest_config.get('cover_profile'),
        html=args.get('--html') or gotest_config.get('cover_html'),
        mode=gotest_config.get('cover_mode'),
        skip_dirs=discover.parse_ignore_patterns(
            gotest_config.get('skip_dirs')),
        opener=gotest_config.get('opener'),
        open_report=open_report,
        go_test_args=list(args.get('<go_test_args>') or []),
    )


def report_packages(packages, detail):
    if detail:
        print("Found %d package(s) with Go files:" % len(packages))
        for pkg in packages:
            print("  - %s" % pkg)
        print()
    else:
        print("Testing %d package(s)..." % len(packages))


def run_tests(settings, packages):
    """
    :returns: True if go test succeeded
    """
    args = runner.build_test_args(
        packages, settings['go_test_args'], settings['profile'],
        settings['mode'],
    )
    if settings['detail']:
        print("Running: go %s\n" % ' '.join(args))
    result = runner.run_tests(args, detail=settings['detail'],
                              go=settings['go'])
    passed = result.returncode == 0
    if not passed and not settings['detail']:
        print("\n--- TEST ERRORS ---")
        for line in runner.filter_test_errors(result.output):
            print(line)
        print("-" * 19)

    if passed:
        print("All tests passed")
    else:
        log.debug("go test exited with status %s", result.returncode)
        print("\nTests failed", file=sys.stderr)
    return passed


def summarize(profile):
    if not os.path.exists(profile):
        raise NoCoverageProfileError(profile)

    print()
    print("=" * 60)
    print("COVERAGE SUMMARY")
    print("=" * 60)
    try:
        coverage.display_coverage_stats(profile)
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("could not parse coverage stats: %s", exc)
    print("=" * 60)


def show_report(settings):
    html = settings['html']
    if settings['detail']:
        print("\nGenerating coverage report: %s" % html)
    runner.generate_html(settings['profile'], html,
                         detail=settings['detail'], go=settings['go'])
    if not settings['open_report']:
        print("\nCoverage report: %s" % html)
        return
    print("\nOpening %s in browser..." % html)
    opener.open_report(html, opener=settings['opener'])


def run(settings, root='.'):
    """
    Discover, test, summarize and open the report.

    :returns: the exit status
    """
    packages = discover.find_packages(
        root,
        ignore_patterns=settings['ignore'],
        skip_dirs=settings['skip_dirs'],
    )
    if not packages:
        print("No Go packages found")
        return 0
    report_packages(packages, settings['detail'])

    passed = run_tests(settings, packages)
    summarize(settings['profile'])
    show_report(settings)
    return 0 if passed else 1


def main(args):
    if args.get('--debug'):
        gotest.log.setLevel(logging.DEBUG)
    if args.get('--log-file'):
        gotest.setup_log_file(args['--log-file'])
    gotest.install_except_hook()

    try:
        gotest_config.load()
        settings = setup_config(args)
        log.debug("Settings: %s", settings)
        return run(settings)
    except GotestError as exc:
        log.debug("Aborting", exc_info=True)
        print("Error: %s" % exc, file=sys.stderr)
        return 1
