import pytest

from job_analyzer.progress import ProgressContext


def test_latest_active_state_is_shown():
    shown = []
    progress = ProgressContext(shown.append)
    progress.start("read", "Reading files")
    progress.start("export", "Exporting")
    progress.finish("export")
    progress.finish("read")
    assert shown == ["Reading files", "Exporting", "Reading files", None]
    assert not progress.active


def test_track_finishes_on_error():
    progress = ProgressContext()
    with pytest.raises(RuntimeError):
        with progress.track("read", "Reading files"):
            assert progress.message == "Reading files"
            raise RuntimeError("boom")
    assert progress.message is None
