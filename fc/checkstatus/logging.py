"""Structured logging for checks.

Stdout belongs to the Nagios plugin line, so all log output is rendered to
stderr.
"""

import string
import sys
import traceback

import colorama
import structlog

_EVENT_WIDTH = 30  # pad the event name to so many characters

_initialized = False

if sys.stderr.isatty():
    RESET_ALL = colorama.Style.RESET_ALL
    BRIGHT = colorama.Style.BRIGHT
    DIM = colorama.Style.DIM
    RED = colorama.Fore.RED
    CYAN = colorama.Fore.CYAN
    MAGENTA = colorama.Fore.MAGENTA
    YELLOW = colorama.Fore.YELLOW
    GREEN = colorama.Fore.GREEN
else:
    RESET_ALL = ""
    BRIGHT = ""
    DIM = ""
    RED = ""
    CYAN = ""
    MAGENTA = ""
    YELLOW = ""
    GREEN = ""


class PartialFormatter(string.Formatter):
    """
    A string formatter that doesn't break if values are missing or formats
    are wrong. Missing values and bad formats are replaced by a fixed string
    that can be set when constructing an formatter object.

    formatter = PartialFormatter(missing='<missing>', bad_format='<bad format>')
    formatted_str = formatter.format("{exists} {missing}", exists=1)
    formatted_str == "1 <missing>"
    """

    def __init__(self, missing="<missing>", bad_format="<bad format>"):
        self.missing = missing
        self.bad_format = bad_format

    def get_field(self, field_name, args, kwargs):
        try:
            val = super().get_field(field_name, args, kwargs)
        except (KeyError, AttributeError):
            val = (None, field_name)
        return val

    def format_field(self, value, format_spec):
        if value is None:
            return self.missing
        try:
            return super().format_field(value, format_spec)
        except ValueError:
            return self.bad_format


def _pad(s, l):
    """
    Pads *s* to length *l*.
    """
    missing = l - len(s)
    return s + " " * (missing if missing > 0 else 0)


class ConsoleRenderer:
    """
    Render `event_dict` nicely aligned and in colors. Events below
    `min_level` are dropped.
    """

    LEVELS = [
        "critical",
        "error",
        "warn",
        "warning",
        "info",
        "debug",
    ]

    def __init__(self, min_level, pad_event=_EVENT_WIDTH):
        self.min_level = self.LEVELS.index(min_level.lower())
        self._pad_event = pad_event
        self._level_to_color = {
            "critical": RED + BRIGHT,
            "error": RED + BRIGHT,
            "warn": YELLOW + BRIGHT,
            "warning": YELLOW + BRIGHT,
            "info": GREEN + BRIGHT,
            "debug": GREEN + BRIGHT,
        }

    def __call__(self, logger, method_name, event_dict):
        if self.LEVELS.index(method_name.lower()) > self.min_level:
            raise structlog.DropEvent

        parts = []

        replace_msg = event_dict.pop("_replace_msg", None)
        if replace_msg:
            formatter = PartialFormatter()
            formatted_replace_msg = formatter.format(replace_msg, **event_dict)
        else:
            formatted_replace_msg = None

        ts = event_dict.pop("timestamp", None)
        if ts is not None:
            parts.append(DIM + str(ts) + RESET_ALL + " ")

        level = event_dict.pop("level", None)
        if level is not None:
            parts.append(
                self._level_to_color[level] + level[0].upper() + RESET_ALL + " "
            )

        event = event_dict.pop("event")
        parts.append(BRIGHT + _pad(event, self._pad_event) + RESET_ALL + " ")

        exception_traceback = event_dict.pop("exception_traceback", None)

        if formatted_replace_msg:
            parts.append(formatted_replace_msg)
        else:
            parts.append(
                " ".join(
                    CYAN
                    + key
                    + RESET_ALL
                    + "="
                    + MAGENTA
                    + repr(event_dict[key])
                    + RESET_ALL
                    for key in sorted(event_dict.keys())
                )
            )

        if exception_traceback is not None:
            parts.append("\n" + exception_traceback)

        return "".join(parts)


def process_exc_info(logger, name, event_dict):
    """Transforms exc_info to the exception tuple format returned by
    sys.exc_info().
    """
    exc_info = event_dict.get("exc_info", None)

    if isinstance(exc_info, BaseException):
        event_dict["exc_info"] = (
            exc_info.__class__,
            exc_info,
            exc_info.__traceback__,
        )
    elif isinstance(exc_info, tuple):
        pass
    elif exc_info:
        event_dict["exc_info"] = sys.exc_info()

    return event_dict


def format_exc_info(logger, name, event_dict):
    """Renders exc_info if it's present.
    Expects the tuple format returned by sys.exc_info().
    """
    exc_info = event_dict.pop("exc_info", None)
    if exc_info is not None:
        exception_class = exc_info[0]
        event_dict["exception_traceback"] = "".join(
            traceback.format_exception(*exc_info)
        ).rstrip()
        event_dict["exception_msg"] = str(exc_info[1])
        event_dict["exception_class"] = (
            exception_class.__module__ + "." + exception_class.__name__
        )

    return event_dict


def logging_initialized():
    return _initialized


def init_logging(verbose, file=None):
    global _initialized

    processors = [
        structlog.processors.add_log_level,
        process_exc_info,
        format_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
        ConsoleRenderer(min_level="debug" if verbose else "warning"),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.BoundLogger,
        logger_factory=structlog.PrintLoggerFactory(file or sys.stderr),
        cache_logger_on_first_use=False,
    )
    _initialized = True
