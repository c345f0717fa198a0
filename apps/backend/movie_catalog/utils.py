"""
Utility functions for the movie catalog.

Provides logging setup, progress bars and console display helpers
used by the database layer and the admin CLI.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, Optional, TypeVar

from tqdm import tqdm

T = TypeVar("T")


def setup_logger(
    name: str,
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    console_output: bool = True,
) -> logging.Logger:
    """
    Set up a logger writing to a dated file and, optionally, the console.

    Args:
        name: Logger name (also used for the log file name)
        log_dir: Directory for log files (defaults to ./logs)
        level: Logging level
        console_output: Whether warnings and above also go to stdout

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_dir is None:
        log_dir = Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def progress_bar(
    iterable: Iterable[T],
    total: Optional[int] = None,
    desc: str = "Processing",
    unit: str = "movies",
    disable: bool = False,
) -> Iterator[T]:
    """Wrap an iterable with a tqdm progress bar."""
    return tqdm(
        iterable,
        total=total,
        desc=desc,
        unit=unit,
        disable=disable,
        ncols=100,
        bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]",
    )


def format_number(n: int) -> str:
    """Format number with commas for readability."""
    return f"{n:,}"


def print_header(text: str, char: str = "=", width: int = 60) -> None:
    """Print a header with decorative lines."""
    print(char * width)
    print(text.center(width))
    print(char * width)


def print_status_table(data: dict, title: str = "Status") -> None:
    """Print a formatted key/value table."""
    print(f"\n{title}")
    print("-" * 40)
    key_width = max(len(str(k)) for k in data.keys()) if data else 10
    for key, value in data.items():
        print(f"  {key:<{key_width + 2}}: {value}")
    print()
