class GotestError(Exception):
    pass


class ConfigError(GotestError):
    """
    Raised when the configuration file is malformed
    """
    pass


class CommandFailedError(GotestError):

    """
    Exception thrown on command failure
    """
    def __init__(self, command, exitstatus, label=None):
        self.command = command
        self.exitstatus = exitstatus
        self.label = label

    def __str__(self):
        prefix = "Command failed"
        if self.label:
            prefix += " ({label})".format(label=self.label)
        cmd = self.command
        if isinstance(cmd, (list, tuple)):
            cmd = ' '.join(cmd)
        return "{prefix} with status {status}: {cmd!r}".format(
            status=self.exitstatus,
            cmd=cmd,
            prefix=prefix,
        )


class CommandNotFoundError(GotestError):

    """
    Exception thrown when the executable of a command cannot be started
    """
    def __init__(self, command):
        self.command = command

    def __str__(self):
        executable = self.command
        if isinstance(executable, (list, tuple)):
            executable = executable[0]
        return "Could not run {executable!r}: executable not found".format(
            executable=executable,
        )


class NoCoverageProfileError(GotestError):
    def __init__(self, path):
        self.path = path

    def __str__(self):
        return "coverage profile not generated at {path}".format(
            path=self.path)


class UnsupportedPlatformError(GotestError):
    def __init__(self, platform):
        self.platform = platform

    def __str__(self):
        return "unsupported platform: {platform}".format(
            platform=self.platform)
