from datetime import datetime

from job_analyzer.formatting import format_duration, format_file_size, format_timestamp


def test_format_duration():
    assert format_duration(0) == "0h 0m"
    assert format_duration(90) == "1h 30m"
    assert format_duration(59.6) == "1h 0m"
    assert format_duration(125.2) == "2h 5m"


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 3, 5, 7, 8, 9)) == "05/03/2024 07:08:09"
    assert format_timestamp(None) == ""


def test_format_file_size():
    assert format_file_size(0) == "0 Bytes"
    assert format_file_size(512) == "512 Bytes"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(1024**2) == "1 MB"
    assert format_file_size(5 * 1024**4) == "5120 GB"
