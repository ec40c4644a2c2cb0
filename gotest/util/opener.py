import logging
import shlex
import subprocess
import sys

from typing import List, Optional

from gotest.exceptions import CommandNotFoundError, UnsupportedPlatformError

log = logging.getLogger(__name__)


def opener_command(path: str, platform: Optional[str] = None,
                   opener: Optional[str] = None) -> List[str]:
    """
    Build the command that opens path with the desktop's default handler.

    :param path: the document to open
    :param platform: a sys.platform value; defaults to the running one
    :param opener: a command line that replaces the platform default, e.g.
                   "firefox --new-tab"
    :returns: the argument list
    """
    if opener:
        return shlex.split(opener) + [path]
    if platform is None:
        platform = sys.platform
    match platform:
        case 'darwin':
            return ['open', path]
        case 'win32' | 'cygwin':
            return ['cmd', '/c', 'start', path]
        case _ if platform.startswith(('linux', 'freebsd', 'openbsd')):
            return ['xdg-open', path]
        case _:
            raise UnsupportedPlatformError(platform)


def open_report(path: str, platform: Optional[str] = None,
                opener: Optional[str] = None) -> subprocess.Popen:
    """
    Start the opener for path without waiting for it to exit.
    """
    cmd = opener_command(path, platform=platform, opener=opener)
    log.debug("Opening %s with %s", path, cmd[0])
    try:
        return subprocess.Popen(cmd)
    except FileNotFoundError:
        raise CommandNotFoundError(command=cmd)
