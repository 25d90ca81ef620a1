"""Report a Nagios check status from shell scripts.

Example:

    fc-check-status warning "Latency is high" --label latency --value 120 \\
        --uom ms --warn 100 --crit 200
"""

from enum import Enum
from functools import wraps

import fc.checkstatus.logging
import structlog
from fc.checkstatus.reporter import report
from fc.checkstatus.status import PerformanceMetric, Severity, Status
from typer import Argument, Option, Typer


class SeverityChoice(str, Enum):
    ok = "ok"
    warning = "warning"
    critical = "critical"
    unknown = "unknown"


def guarded(func):
    """Turns unexpected exceptions into an UNKNOWN report.

    A monitoring system expects a status line and exit code 3 from a plugin
    that fails itself, not a traceback.
    """

    @wraps(func)
    def unknown_on_error(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if fc.checkstatus.logging.logging_initialized():
                log = structlog.get_logger()
                log.error("unhandled-exception", exc_info=True)
            report(Status(Severity.UNKNOWN, f"{e.__class__.__name__}: {e}"))

    return unknown_on_error


# Showing local variables may leak secrets, don't do it in production!
app = Typer(pretty_exceptions_show_locals=False, add_completion=False)


@app.command()
@guarded
def main(
    severity: SeverityChoice = Argument(
        ..., case_sensitive=False, help="Check result severity."
    ),
    message: str = Argument(..., help="Text shown after the severity label."),
    label: str = Option("", help="Performance data: metric name."),
    value: str = Option("", help="Performance data: measured value."),
    uom: str = Option("", help="Performance data: unit of measurement."),
    warn: str = Option("", help="Performance data: warning threshold."),
    crit: str = Option("", help="Performance data: critical threshold."),
    min_value: str = Option("", "--min", help="Performance data: minimum."),
    max_value: str = Option("", "--max", help="Performance data: maximum."),
    verbose: bool = Option(
        False, "--verbose", "-v", help="Log debug output to stderr."
    ),
):
    """Prints a Nagios status line and exits with the matching code."""
    fc.checkstatus.logging.init_logging(verbose)
    log = structlog.get_logger()

    status = Status(
        Severity[severity.value.upper()],
        message,
        PerformanceMetric(
            label=label,
            value=value,
            uom=uom,
            warn_threshold=warn,
            crit_threshold=crit,
            min_value=min_value,
            max_value=max_value,
        ),
    )
    log.debug(
        "check-status-report",
        _replace_msg="Reporting {severity} with exit code {exit_code}.",
        severity=status.severity.name,
        exit_code=status.exit_code,
    )
    report(status)
