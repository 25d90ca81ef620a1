# Common code for Nagios-style check results.
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable

import fc.checkstatus.logging
import structlog

_log = structlog.get_logger()

PERFDATA_FORMAT = "'{label}'={value}{uom};{warn};{crit};{min};{max}"


class Severity(IntEnum):
    """The values with which a Nagios check can exit."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def label(self) -> str:
        return LABELS[self]

    def merge(self, new_status: "Severity") -> "Severity":
        """Returns the worse of both severities, ties keep ours."""
        if new_status > self:
            return new_status
        return self


LABELS = {
    Severity.OK: "OK:",
    Severity.WARNING: "WARNING:",
    Severity.CRITICAL: "CRITICAL:",
    Severity.UNKNOWN: "UNKNOWN:",
}


def label_for(severity: Severity) -> str:
    return LABELS[severity]


@dataclass
class PerformanceMetric:
    """A Nagios performance data value.

    See https://nagios-plugins.org/doc/guidelines.html#AEN200.
    All fields are kept as text, an empty string means "not set".
    """

    label: str = ""
    value: str = ""
    uom: str = ""
    warn_threshold: str = ""
    crit_threshold: str = ""
    min_value: str = ""
    max_value: str = ""

    def __bool__(self):
        return any(
            (
                self.label,
                self.value,
                self.uom,
                self.warn_threshold,
                self.crit_threshold,
                self.min_value,
                self.max_value,
            )
        )

    def format_output(self) -> str:
        return PERFDATA_FORMAT.format(
            label=self.label,
            value=self.value,
            uom=self.uom,
            warn=self.warn_threshold,
            crit=self.crit_threshold,
            min=self.min_value,
            max=self.max_value,
        )


@dataclass
class Status:
    severity: Severity = Severity.OK
    message: str = ""
    performance_metric: PerformanceMetric = field(
        default_factory=PerformanceMetric
    )

    def format_line(self) -> str:
        return f"{self.severity.label} {self.message}"

    def format_output(self) -> str:
        if self.performance_metric:
            perfdata = self.performance_metric.format_output()
            return self.format_line() + " | " + perfdata
        return self.format_line()

    @property
    def exit_code(self) -> int:
        return int(self.severity)

    def aggregate(self, others: Iterable["Status"], log=None):
        """Folds other statuses into this one.

        The worst severity wins. The first status replaces our message if it
        is still empty, all others are appended as additional lines, each
        prefixed with its own label. Performance data of the additional
        lines is collected into a block after the long message, our own
        performance data moves to the first line.

        Each status is traced to `log`, or to the module logger once
        `init_logging` ran. Unconfigured structlog would print to stdout.
        """
        if log is None and fc.checkstatus.logging.logging_initialized():
            log = _log

        long_message_lines = []
        perfdata_lines = []

        for index, other in enumerate(others):
            perfdata = other.performance_metric.format_output()
            if log is not None:
                log.debug(
                    "status-aggregated",
                    severity=other.severity.name,
                    status_message=other.message,
                    perfdata=perfdata if other.performance_metric else "",
                )

            self.severity = self.severity.merge(other.severity)

            if index == 0 and not self.message:
                self.message = other.format_output()
                self.performance_metric = PerformanceMetric()
                continue

            long_message_lines.append(other.format_line())
            if other.performance_metric:
                perfdata_lines.append(perfdata)

        if long_message_lines and self.performance_metric:
            # Our own perfdata belongs to the first line.
            self.message += " | " + self.performance_metric.format_output()
            self.performance_metric = PerformanceMetric()

        if long_message_lines:
            self.message += "\n" + "\n".join(long_message_lines)

        if perfdata_lines:
            self.message += " | " + "\n".join(perfdata_lines)
