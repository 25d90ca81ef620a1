"""Report a check status to the monitoring system and exit.

Everything that writes the plugin line to stdout and terminates the process
lives here. The formatting itself is done by `Status.format_output`.
"""

import sys
from typing import NoReturn, Union

from fc.checkstatus.status import Severity, Status


def report(status: Status) -> NoReturn:
    """Prints the Nagios line for `status` and exits with its code."""
    print(status.format_output(), file=sys.stdout, flush=True)
    sys.exit(status.exit_code)


def exit_with_status(status: Status) -> NoReturn:
    report(status)


def ok(message: str) -> NoReturn:
    report(Status(Severity.OK, message))


def warning(message: str) -> NoReturn:
    report(Status(Severity.WARNING, message))


def critical(error: Union[BaseException, str]) -> NoReturn:
    report(Status(Severity.CRITICAL, str(error)))


def unknown(message: str) -> NoReturn:
    report(Status(Severity.UNKNOWN, message))
