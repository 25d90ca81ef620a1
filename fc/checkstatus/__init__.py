from fc.checkstatus.reporter import (
    critical,
    exit_with_status,
    ok,
    report,
    unknown,
    warning,
)
from fc.checkstatus.status import (
    PerformanceMetric,
    Severity,
    Status,
    label_for,
)
