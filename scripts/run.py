"""
usage: gotest --help
       gotest --version
       gotest [options] [--] [<go_test_args>...]

Run go test recursively with coverage

Finds all Go packages in the current directory and its subdirectories, runs
'go test' on them with coverage enabled, prints per-package coverage
statistics and opens the HTML report in your browser.

positional arguments:
  <go_test_args>              Passed to 'go test' unchanged, e.g. -v, -race
                              or -run TestFoo (see 'go help test')

optional arguments:
  -h, --help                  Show this help message and exit
  --version                   The current installed version of gotest
  -d, --detail                Show detailed test output (default: minimal
                              output)
  -i PATTERNS, --ignore PATTERNS
                              Ignore packages matching patterns (comma
                              separated, may be repeated)
  --profile PATH              Where to write the coverage profile (default:
                              /tmp/cover.out)
  --html PATH                 Where to write the HTML report (default:
                              /tmp/cover.html)
  --no-open                   Write the HTML report but don't open it
  --debug                     Log debugging information
  --log-file PATH             Also write the log to this file

examples:
  gotest                              Run all tests (minimal output)
  gotest -d                           Run with detailed output
  gotest -i example,pb                Ignore packages containing "example" or "pb"
  gotest --ignore=cmd,testdata        Same as above with = syntax
  gotest -i generated -v              Ignore + verbose go test output
  gotest -run TestFoo                 Run specific tests

Defaults for the profile and report paths, extra ignore patterns and the
command used to open the report can be set in ~/.gotest.yaml (or the file
named by $GOTEST_CONFIG).
"""
import sys

import docopt

import gotest
import gotest.run

HELP = ('-h', '--help', '-help')
DETAIL = ('-d', '--detail', '-detail')
IGNORE = ('-i', '--ignore', '-ignore')
FLAGS = ('--version', '--no-open', '--debug')
VALUED = ('--profile', '--html', '--log-file')


def split_argv(argv):
    """
    Separate our own options from those meant for go test.

    Anything we don't recognize is forwarded to go test in its original
    order, after a '--' so that docopt leaves it alone. All ignore patterns
    are folded into a single --ignore option.

    :param argv: the command line, without the program name
    :returns: an argument list docopt can parse with __doc__
    """
    own = []
    passthrough = []
    patterns = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        name, sep, value = arg.partition('=')
        if arg == '--':
            passthrough.extend(argv[i + 1:])
            break
        elif arg in HELP:
            own.append('--help')
        elif arg in DETAIL:
            own.append('--detail')
        elif arg in FLAGS:
            own.append(arg)
        elif name in IGNORE:
            if sep:
                patterns.append(value)
            elif i + 1 < len(argv):
                i += 1
                patterns.append(argv[i])
        elif name in VALUED:
            if sep:
                own.append(arg)
            elif i + 1 < len(argv):
                i += 1
                own.append('%s=%s' % (name, argv[i]))
            else:
                own.append(arg)
        else:
            passthrough.append(arg)
        i += 1

    patterns = [p for p in patterns if p.strip()]
    if patterns:
        own.append('--ignore=' + ','.join(patterns))
    return own + ['--'] + passthrough


def main(argv=sys.argv[1:]):
    args = docopt.docopt(__doc__, argv=split_argv(argv),
                         version=gotest.__version__)
    sys.exit(gotest.run.main(args))
