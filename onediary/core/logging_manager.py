#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for import runs.

One DiaryLogger is created per CLI invocation. Its handlers sit on the
``onediary`` package logger, so the records of the parser modules
(assembler diagnostics, refused page mappings) end up in the same files
as the pipeline's own:

    <log_dir>/<component>.log   everything, DEBUG and up
    <log_dir>/errors.log        ERROR only, with tracebacks
    stderr                      WARNING and up

Every record names the export being imported and its dialect, set with
``import_context`` for the duration of one file:

    2025-02-08 09:41:00 INFO [1Diary.pdf|pdf] onediary.import.cli - entries_parsed {"count": 12}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from contextlib import contextmanager, nullcontext
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterator, List, Optional

# --- Third party imports ---
import click


PACKAGE_LOGGER = "onediary"
NO_IMPORT = "-"

_FILE_FORMAT = "%(asctime)s %(levelname)s [%(import_file)s|%(dialect)s] %(name)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s [%(import_file)s] %(message)s"


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message} {json.dumps(details, default=str, ensure_ascii=False)}"


def format_cli_error(error: BaseException, show_traceback: bool = False) -> str:
    """
    One-line error for the terminal, optionally followed by the traceback.

    Examples:
        >>> format_cli_error(ValueError("bad date"))
        '❌ ValueError: bad date'
    """
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{message}\n\n{tb}"
    return message


class ImportContextFilter(logging.Filter):
    """Stamps each record with the export file and dialect being imported."""

    def __init__(self) -> None:
        super().__init__()
        self.import_file = NO_IMPORT
        self.dialect = NO_IMPORT

    def filter(self, record: logging.LogRecord) -> bool:
        record.import_file = self.import_file
        record.dialect = self.dialect
        return True


class DiaryLogger:
    """
    File and console logging for one import run.

    Attributes:
        log_dir: Directory for log files
        component_name: Names the component log file and logger
        main_logger: Logger used by the pipeline (child of the package logger)
        context: Filter holding the current file and dialect
        handlers: Handlers installed on the package logger
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "onediary",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.context = ImportContextFilter()
        self.main_logger = logging.getLogger(f"{PACKAGE_LOGGER}.import.{component_name}")
        self.handlers: List[logging.Handler] = []

        self.log_dir.mkdir(parents=True, exist_ok=True)
        file_formatter = logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

        for path, level in (
            (self.component_log_path, logging.DEBUG),
            (self.error_log_path, logging.ERROR),
        ):
            handler = RotatingFileHandler(
                path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
            handler.setLevel(level)
            handler.setFormatter(file_formatter)
            self.handlers.append(handler)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        self.handlers.append(console)

        package = logging.getLogger(PACKAGE_LOGGER)
        package.setLevel(logging.DEBUG)
        # A previous run in the same process (tests, repeated CLI calls) is replaced
        for handler in list(package.handlers):
            if getattr(handler, "_diary_handler", False):
                package.removeHandler(handler)
                handler.close()
        for handler in self.handlers:
            handler.addFilter(self.context)
            handler._diary_handler = True  # type: ignore[attr-defined]
            package.addHandler(handler)

    @property
    def component_log_path(self) -> Path:
        return self.log_dir / f"{self.component_name}.log"

    @property
    def error_log_path(self) -> Path:
        return self.log_dir / "errors.log"

    @contextmanager
    def import_context(self, file_name: str, dialect: str) -> Iterator[None]:
        """Tag records logged inside the block with a file and dialect."""
        previous = (self.context.import_file, self.context.dialect)
        self.context.import_file, self.context.dialect = file_name, dialect
        try:
            yield
        finally:
            self.context.import_file, self.context.dialect = previous

    def close(self) -> None:
        """Detach and close this run's handlers."""
        package = logging.getLogger(PACKAGE_LOGGER)
        for handler in self.handlers:
            package.removeHandler(handler)
            handler.close()
        self.handlers = []

    # ----- Records -----
    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details(operation, details))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details(message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details(message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.warning(_with_details(message, details))

    def log_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        """Log an error and its traceback to the component and error logs."""
        self.main_logger.error(
            _with_details(f"{type(error).__name__}: {error}", context),
            exc_info=(type(error), error, error.__traceback__),
        )

    def log_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error in full and return its terminal form.

        Examples:
            >>> logger.log_cli_error(Txt2MdError("Input file not found"))
            '❌ Txt2MdError: Input file not found'
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


class NullLogger:
    """
    DiaryLogger stand-in that records nothing.

    Lets pipeline code call logger methods without `if logger:` guards.
    """

    def import_context(self, file_name: str, dialect: str) -> ContextManager[None]:
        return nullcontext()

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[DiaryLogger]) -> DiaryLogger:
    """The given logger, or a shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: click.Context,
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    The full error goes to the log; stderr gets one line (the traceback
    too with --verbose) and, when a log file exists, where to find it.
    Never returns.
    """
    logger: Optional[DiaryLogger] = ctx.obj.get("logger")
    verbose: bool = ctx.obj.get("verbose", False)

    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    click.echo(safe_logger(logger).log_cli_error(error, context, show_traceback=verbose), err=True)
    if logger is not None and not verbose:
        click.echo(f"   Details: {logger.error_log_path}", err=True)
    sys.exit(exit_code)
