from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from csv_importer.services.progress import ProgressTracker, RowProgressReporter, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('csv_importer.services.progress.is_tty_enabled', return_value=True), \
             patch('csv_importer.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Test files")

            assert tracker.total_files == 5
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Test files",
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('csv_importer.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(5)

            assert tracker.enabled is False
            assert tracker.pbar is None
            assert tracker.description == "Converting files"

    def test_start_and_finish_file(self):
        mock_pbar = Mock()
        with patch('csv_importer.services.progress.is_tty_enabled', return_value=True), \
             patch('csv_importer.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3, description="Processing")
            tracker.start_file(Path("people.csv"))
            assert tracker.current_file == 1
            mock_pbar.set_description.assert_called_with("Processing (people.csv)")

            tracker.finish_file(success=True)
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_description.assert_called_with("Processing")

    def test_disabled_tracker_is_noop(self):
        with patch('csv_importer.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(2)
            tracker.start_file(Path("a.csv"))
            tracker.set_postfix(rows=10)
            tracker.finish_file()
            tracker.close()
            assert tracker.current_file == 1

    def test_context_manager_closes_bar(self):
        mock_pbar = Mock()
        with patch('csv_importer.services.progress.is_tty_enabled', return_value=True), \
             patch('csv_importer.services.progress.tqdm', return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                pass
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None


def test_row_reporter_forwards_count_as_postfix():
    mock_pbar = Mock()
    with patch('csv_importer.services.progress.is_tty_enabled', return_value=True), \
         patch('csv_importer.services.progress.tqdm', return_value=mock_pbar):
        tracker = ProgressTracker(1)
        reporter = tracker.row_reporter("big.csv")
        assert isinstance(reporter, RowProgressReporter)

        reporter(10_000)
        reporter(20_000)

        assert reporter.last_count == 20_000
        mock_pbar.set_postfix.assert_called_with(file="big.csv", rows=20_000)
