import re

import pytest

from threadcraft.cli import (
    benchmark_find,
    benchmark_for_each,
    benchmark_scan,
    benchmark_sort,
    main,
)

TIME_LINE = re.compile(r"^(?P<tag>.+): Time: \d+\.\d{6}ms$")
SORT_LINE = re.compile(
    r"^(?P<tag>\w+): Lowest: (?P<low>\S+) Highest: (?P<high>\S+) Time: \d+\.\d{6}ms$"
)


def test_find_reports_three_timings():
    lines = benchmark_find(200)
    assert len(lines) == 3
    assert all(TIME_LINE.match(line) for line in lines)


def test_find_handles_empty_input():
    lines = benchmark_find(0)
    assert len(lines) == 3


def test_for_each_reports_each_strategy():
    lines = benchmark_for_each(60)
    tags = [TIME_LINE.match(line).group("tag") for line in lines]
    assert tags == ["Sequential", "Parallel-package_task", "Parallel-async"]


def test_scan_reports_tags():
    lines = benchmark_scan(100)
    tags = [TIME_LINE.match(line).group("tag") for line in lines]
    assert tags == ["sequential scan", "parallel scan manual"]


def test_sort_header_and_line_count():
    lines = benchmark_sort(500, 2)
    assert lines[0] == "Testing with 500 doubles..."
    assert len(lines) == 1 + 2 * 2


def test_sort_lines_have_ordered_extremes():
    lines = benchmark_sort(300, 1)
    matches = [SORT_LINE.match(line) for line in lines[1:]]
    assert [m.group("tag") for m in matches] == ["Serial", "Parallel"]
    for m in matches:
        assert float(m.group("low")) <= float(m.group("high"))
    assert matches[0].group("low") == matches[1].group("low")
    assert matches[0].group("high") == matches[1].group("high")


def test_sort_rejects_empty():
    with pytest.raises(ValueError):
        benchmark_sort(0, 1)


def test_main_prints_scan(capsys):
    assert main(["scan", "--size", "50"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert out[0].startswith("sequential scan: Time: ")


def test_main_sort_iterations(capsys):
    assert main(["sort", "--size", "40", "--iterations", "1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Testing with 40 doubles..."
    assert len(out) == 3


def test_main_rejects_unknown_benchmark():
    with pytest.raises(SystemExit) as info:
        main(["nonsense"])
    assert info.value.code == 2


def test_main_rejects_empty_sort():
    with pytest.raises(SystemExit) as info:
        main(["sort", "--size", "0"])
    assert info.value.code == 2