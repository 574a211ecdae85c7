"""
Utility modules for the builder
"""

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Union

from ..errors import CommandError, ToolNotFoundError

PathLike = Union[str, Path]


class ColoredFormatter(logging.Formatter):
    """Log formatter that colors the level and message for terminals

    Records flagged as raw (forwarded tool output, banners) are passed
    through untouched.
    """

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'SUCCESS': '\033[92m',  # Bright Green
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = False):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        if getattr(record, 'raw', False):
            return record.getMessage()

        if self.use_color:
            # Work on a copy so the file handler sees the plain record
            record = logging.makeLogRecord(record.__dict__)
            color = self.COLORS.get(record.levelname, self.RESET)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
            record.msg = f"{color}{record.getMessage()}{self.RESET}"
            record.args = None

        return super().format(record)


def color_enabled(stream: TextIO) -> bool:
    """Color only interactive terminals, and honour NO_COLOR"""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Logger:
    """Builder logger

    Wraps the "libgodot_builder" logging.Logger with a console handler, an
    optional debug log file, a SUCCESS level for finished platforms and a raw
    channel for SCons, git and editor output.
    """

    SUCCESS = 25  # Between INFO and WARNING
    NAME = "libgodot_builder"

    def __init__(self,
                 verbose: bool = False,
                 log_file: Optional[PathLike] = None,
                 stream: Optional[TextIO] = None):
        """
        Initialize logger

        Args:
            verbose: Enable debug output with timestamps
            log_file: Optional log file path, always at debug level
            stream: Console stream, stdout by default
        """
        self.verbose = verbose
        stream = stream if stream is not None else sys.stdout
        level = logging.DEBUG if verbose else logging.INFO

        logging.addLevelName(self.SUCCESS, "SUCCESS")

        self.logger = logging.getLogger(self.NAME)
        self.logger.setLevel(logging.DEBUG if log_file else level)

        # A new run replaces the handlers of the previous one
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        fmt = "%(asctime)s [%(levelname)s] %(message)s" if verbose else "[%(levelname)s] %(message)s"
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            ColoredFormatter(fmt, datefmt="%H:%M:%S", use_color=color_enabled(stream))
        )
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(ColoredFormatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        self.logger.debug(msg)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def error(self, msg: str):
        self.logger.error(msg)

    def success(self, msg: str):
        """Log a finished step at the SUCCESS level"""
        self.logger.log(self.SUCCESS, msg)

    def raw(self, msg: str):
        """Log a line verbatim, used for child process output"""
        record = self.logger.makeRecord(
            self.logger.name, logging.INFO, "", 0, msg, (), None
        )
        record.raw = True
        self.logger.handle(record)

    def banner(self, title: str, width: int = 60):
        """Log a title framed by separator lines"""
        self.raw("")
        self.raw("=" * width)
        self.raw(title)
        self.raw("=" * width)


class CommandRunner:
    """Runs external tools, streaming their output through the logger"""

    def __init__(self, logger: Logger, dry_run: bool = False):
        """
        Initialize runner

        Args:
            logger: Logger instance
            dry_run: If True, commands are logged but not executed
        """
        self.logger = logger
        self.dry_run = dry_run

    def is_available(self, name: str) -> bool:
        """Check whether an executable is on PATH"""
        return shutil.which(name) is not None

    def run(self, cmd: Sequence[PathLike], cwd: Optional[PathLike] = None) -> int:
        """
        Run a command and block until it exits

        Stdout and stderr are merged and forwarded line by line as they
        arrive.

        Args:
            cmd: Command and arguments
            cwd: Working directory

        Returns:
            The exit code (always 0)

        Raises:
            ToolNotFoundError: the executable is not installed
            CommandError: the command exited with a non-zero status
        """
        argv: List[str] = [str(c) for c in cmd]
        cmd_str = " ".join(argv)
        self.logger.info(f"Running: {cmd_str}")
        if cwd is not None:
            self.logger.info(f"Working directory: {cwd}")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would run: {cmd_str}")
            return 0

        if cwd is not None and not Path(cwd).is_dir():
            raise FileNotFoundError(f"Working directory not found: {cwd}")

        try:
            process = subprocess.Popen(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(argv[0]) from e

        with process:
            for line in process.stdout:
                line = line.rstrip("\r\n")
                if line:
                    self.logger.raw(line)
            returncode = process.wait()

        if returncode != 0:
            raise CommandError(argv, returncode)
        return returncode


def copy_tree(src: Path, dest: Path) -> None:
    """Recursively copy src into dest, overwriting existing files"""
    dest.mkdir(parents=True, exist_ok=True)
    shutil.copytree(src, dest, dirs_exist_ok=True)


__all__ = ["Logger", "ColoredFormatter", "color_enabled", "CommandRunner", "copy_tree"]
