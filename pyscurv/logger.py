"""
Package logger for pyscurv: console and/or file output with per-sink levels.
"""
import os
import sys
import time
from contextlib import contextmanager
from enum import IntEnum
from typing import Optional, Union


class LogLevel(IntEnum):
    """Log levels for controlling verbosity."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


_MODES = ('console', 'file', 'both')


class ScurvLogger:
    """
    Logger writing ``[timestamp] [LEVEL] message`` lines to the console, a file, or both.

    Warnings and above go to stderr, everything else to stdout.
    """
    def __init__(
        self,
        mode: str = 'console',
        log_file: Optional[str] = None,
        console_level: LogLevel = LogLevel.INFO,
        file_level: LogLevel = LogLevel.DEBUG,
        include_timestamp: bool = True
    ):
        """
        Args:
            mode: 'console', 'file', or 'both'
            log_file: Path to log file (required if mode is 'file' or 'both')
            console_level: Minimum log level for console output
            file_level: Minimum log level for file output
            include_timestamp: Whether to prefix lines with a timestamp
        """
        if mode not in _MODES:
            raise ValueError(f"mode must be one of {', '.join(_MODES)}")
        if mode != 'console' and not log_file:
            raise ValueError("log_file must be provided when mode is 'file' or 'both'")

        self.mode = mode
        self.log_file = log_file
        self.console_level = console_level
        self.file_level = file_level
        self.include_timestamp = include_timestamp

        if self.log_file and mode != 'console':
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            # Truncate on start
            open(self.log_file, 'w').close()

    @property
    def _to_console(self) -> bool:
        return self.mode in ('console', 'both')

    @property
    def _to_file(self) -> bool:
        return self.mode in ('file', 'both')

    def isEnabledFor(self, level: LogLevel) -> bool:
        """Mirror of ``logging.Logger.isEnabledFor`` for cheap guards around expensive messages."""
        return ((self._to_console and level >= self.console_level) or
                (self._to_file and level >= self.file_level))

    def _format_message(self, message: str, level: LogLevel) -> str:
        prefix = f"[{time.strftime('%Y-%m-%d %H:%M:%S')}] " if self.include_timestamp else ""
        return f"{prefix}[{level.name}] {message}"

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        """Log a message with the specified level."""
        if not self.isEnabledFor(level):
            return
        line = self._format_message(message, level)
        if self._to_console and level >= self.console_level:
            stream = sys.stderr if level >= LogLevel.WARNING else sys.stdout
            print(line, file=stream)
        if self._to_file and level >= self.file_level:
            with open(self.log_file, 'a') as f:
                f.write(line + '\n')

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def warning(self, message: str) -> None:
        self.log(message, LogLevel.WARNING)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def critical(self, message: str) -> None:
        self.log(message, LogLevel.CRITICAL)

    @contextmanager
    def timed(self, label: str, level: LogLevel = LogLevel.INFO):
        """
        Log ``label`` on entry and the elapsed wall time in milliseconds on exit.

        Nothing is logged on exit if the block raises.
        """
        self.log(f"{label} ...", level)
        start = time.perf_counter()
        yield
        self.log(f"{label} [done, {(time.perf_counter() - start) * 1000.0:.3f} ms]", level)

    def __call__(self, message: str, level: Union[str, LogLevel] = LogLevel.INFO) -> None:
        """Log directly through the instance; ``level`` may be given by name."""
        if isinstance(level, str):
            level = LogLevel.__members__.get(level.upper(), LogLevel.INFO)
        self.log(message, level)


DEFAULT_LOGGER = ScurvLogger(mode='console')


def get_logger(name: Optional[str] = None) -> ScurvLogger:
    """
    Return the package logger. ``name`` is accepted for parity with ``logging.getLogger``.
    """
    return DEFAULT_LOGGER


def set_logger(logger: Optional[ScurvLogger]) -> None:
    """
    Replace the package logger; ``None`` restores a console logger.
    """
    global DEFAULT_LOGGER
    if logger is None:
        DEFAULT_LOGGER = ScurvLogger(mode='console')
    elif not isinstance(logger, ScurvLogger):
        raise ValueError("Logger must be an instance of ScurvLogger")
    else:
        DEFAULT_LOGGER = logger
