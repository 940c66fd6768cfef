class QcError(Exception):
    """Base class for exceptions in this module."""

    pass


class TestCaseNotFound(QcError):
    """Raised when test case is not found"""

    pass


class TestDefinitionsNotFound(QcError):
    """Raised when common definitions or a sequence cannot be imported"""

    pass


class SettingsError(QcError):
    """Raised when station settings are missing or invalid"""

    pass


class WorkerError(QcError):
    """Raised when the testbot worker rejects a request"""

    pass


class CommandError(QcError):
    """Raised when a command on the DUT host OS fails.

    Attributes:
        command -- the command that was run
        exit_code -- exit code of the last attempt, None if never connected
        stderr -- error output of the last attempt
    """

    def __init__(self, command, exit_code=None, stderr=''):
        super().__init__(f'Command "{command}" failed with exit code {exit_code}: {stderr}')
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


class ImageError(QcError):
    """Raised when the OS image cannot be unpacked or configured"""

    pass


class ProvisioningError(QcError):
    """Raised when the DUT cannot be provisioned"""

    pass


class TeardownError(QcError):
    """Raised after teardown when one or more cleanup callbacks failed"""

    def __init__(self, failed):
        super().__init__('Teardown failed for: ' + ', '.join(failed))
        self.failed = failed
