import pytest

from wizcloud.progress import Progress, ProgressReporter


def test_fraction():
    assert Progress(5, 10).fraction == 0.5
    assert Progress(12, 10).fraction == 1.0
    assert Progress(3).fraction is None
    assert Progress(0, 0).fraction is None


def test_reporter_start_reports_zero_once_when_total_known():
    reports = []
    reporter = ProgressReporter(reports.append, total=3)
    reporter.start()
    reporter.start()
    reporter.advance()
    reporter.advance(2)

    assert reports == [Progress(0, 3), Progress(1, 3), Progress(3, 3)]
    assert reporter.retrieved == 3


def test_reporter_without_callback_still_counts():
    reporter = ProgressReporter(None)
    reporter.advance()
    assert reporter.retrieved == 1


def test_reporter_rejects_negative_values():
    with pytest.raises(ValueError):
        ProgressReporter(None, total=-1)
    with pytest.raises(ValueError):
        ProgressReporter(None).advance(-1)
