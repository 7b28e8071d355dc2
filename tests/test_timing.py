from unittest import mock

import pytest

from threadcraft.timing import (
    format_results,
    hardware_threads,
    print_results,
    thread_count,
)


def test_format_results_layout():
    assert format_results("tag", 0.0, 0.5) == "tag: Time: 500.000000ms"


def test_format_results_zero_elapsed():
    line = format_results("STL sequntial :", 2.0, 2.0)
    assert line.startswith("STL sequntial :: Time: ")
    assert line.endswith("ms")


def test_print_results_writes_line(capsys):
    print_results("run", 1.0, 1.25)
    out = capsys.readouterr().out
    assert out == format_results("run", 1.0, 1.25) + "\n"


@mock.patch("os.cpu_count", return_value=None)
def test_hardware_threads_unknown(_):
    assert hardware_threads() == 0


@mock.patch("os.cpu_count", return_value=6)
def test_hardware_threads_known(_):
    assert hardware_threads() == 6


def test_thread_count_empty():
    assert thread_count(0, 25) == 0


@mock.patch("os.cpu_count", return_value=8)
def test_thread_count_limited_by_length(_):
    assert thread_count(1, 25) == 1
    assert thread_count(25, 25) == 1
    assert thread_count(26, 25) == 2


@mock.patch("os.cpu_count", return_value=8)
def test_thread_count_limited_by_hardware(_):
    assert thread_count(100000, 25) == 8


@mock.patch("os.cpu_count", return_value=None)
def test_thread_count_falls_back_to_two(_):
    assert thread_count(100000, 25) == 2


def test_thread_count_rejects_bad_block():
    with pytest.raises(ValueError):
        thread_count(10, 0)