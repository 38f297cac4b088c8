from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

- One tqdm bar over files, disabled in non-TTY environments (CI, pipes) to
  avoid ANSI control sequence spam.
- Row progress inside a file is fed by the row pipeline's progress hook and
  shown as the bar postfix; the pipeline itself also logs every N rows.
"""

__all__ = [
    "ProgressTracker",
    "RowProgressReporter",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if TTY output is enabled.

    Returns:
        True if stdout is a TTY and progress should be displayed, False otherwise
    """
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker using tqdm for file processing."""

    def __init__(self, total_files: int, *, description: str = "Converting files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1

        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        """Set postfix information (stats) on the progress bar."""
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def row_reporter(self, file_name: str) -> RowProgressReporter:
        return RowProgressReporter(self, file_name)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class RowProgressReporter:
    """Progress hook for one file's row pipeline.

    Called with the running count of converted rows; forwards it to the file
    progress bar as a ``rows=`` postfix.
    """

    def __init__(self, tracker: ProgressTracker, file_name: str) -> None:
        self.tracker = tracker
        self.file_name = file_name
        self.last_count = 0

    def __call__(self, processed_rows: int) -> None:
        self.last_count = processed_rows
        self.tracker.set_postfix(file=self.file_name, rows=processed_rows)
