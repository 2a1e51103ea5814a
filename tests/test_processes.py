import os

import psutil
import pytest

from perfwatch.processes import (
    NO_SELECTION,
    NoSelectionError,
    ProcessRow,
    ProcessTable,
    ProcessTerminationError,
    read_processes,
    terminate_process,
    termination_report,
)


def _rows():
    return [
        ProcessRow(pid=10, name="editor", cpu_time=1.0, memory=2048),
        ProcessRow(pid=20, name="Browser", cpu_time=12.5, memory=512),
        ProcessRow(pid=30, name="shell", cpu_time=0.2, memory=3 * 1024 * 1024),
    ]


def _table():
    table = ProcessTable()
    table.update(_rows())
    return table


def test_rows_sorted_by_cpu_descending():
    table = _table()
    times = [row.cpu_time for row in table.rows]
    assert times == sorted(times, reverse=True)
    assert table.rows[0].pid == 20


def test_cells_and_highlight():
    row = ProcessRow(pid=7, name="daemon", cpu_time=12.5, memory=512)
    assert row.cells == ("", "7", "daemon", "12.5%", "512 B", "运行中")
    assert row.highlighted
    assert not ProcessRow(pid=8, name="x", cpu_time=5.0).highlighted


def test_update_keeps_checks_of_listed_pids():
    table = _table()
    table.set_checked(10)
    table.set_checked(30)
    table.update([ProcessRow(pid=10, name="editor"), ProcessRow(pid=40, name="new")])
    assert [row.pid for row in table.checked_rows()] == [10]
    table.update(_rows())
    assert [row.pid for row in table.checked_rows()] == [10]


def test_set_checked_unknown_pid():
    with pytest.raises(KeyError):
        _table().set_checked(999)


def test_uncheck():
    table = _table()
    table.set_checked(10)
    table.set_checked(10, False)
    assert table.checked_rows() == []


def test_filter_ignores_case_and_matches_any_column():
    table = _table()
    assert [row.pid for row in table.filter("BROWSER")] == [20]
    assert [row.pid for row in table.filter("30")] == [30]
    assert table.filter("nothing-like-this") == []
    assert len(table.filter("")) == 3


def test_update_lifts_filter():
    table = _table()
    table.filter("shell")
    table.update(_rows())
    assert len(table.visible_rows()) == 3


def test_confirmation_single():
    table = _table()
    table.set_checked(10)
    assert table.confirmation_message() == "确定要结束进程 editor (PID: 10) 吗?"


def test_confirmation_many_lists_first_five():
    table = ProcessTable()
    table.update([ProcessRow(pid=p, name=f"p{p}") for p in range(1, 8)])
    for pid in range(1, 8):
        table.set_checked(pid)
    message = table.confirmation_message()
    assert message.startswith("确定要结束以下 7 个进程吗?\n")
    assert "p5 (PID: 5)\n" in message
    assert "p6 (PID: 6)" not in message
    assert message.endswith("...以及其他 2 个进程")


def test_confirmation_without_selection():
    with pytest.raises(NoSelectionError) as info:
        _table().confirmation_message()
    assert str(info.value) == NO_SELECTION


def test_terminate_checked_collects_failures():
    table = _table()
    for pid in (10, 20, 30):
        table.set_checked(pid)
    ended = []

    def fake_terminate(pid):
        if pid == 20:
            raise ProcessTerminationError(pid, "无法打开进程")
        ended.append(pid)

    successes, failures = table.terminate_checked(fake_terminate)
    assert successes == 2
    assert sorted(ended) == [10, 30]
    assert failures == ["Browser (PID: 20, 错误: 无法打开进程)"]


def test_terminate_checked_without_selection():
    with pytest.raises(NoSelectionError):
        _table().terminate_checked(lambda pid: None)


def test_termination_report():
    assert termination_report(3, []) == "已成功终止 3 个进程"
    report = termination_report(1, ["a (PID: 2, 错误: x)"])
    assert report == "已成功终止 1 个进程，但以下进程终止失败:\na (PID: 2, 错误: x)\n"


def test_terminate_missing_process():
    pid = max(psutil.pids()) + 100000
    while psutil.pid_exists(pid):
        pid += 1
    with pytest.raises(ProcessTerminationError) as info:
        terminate_process(pid)
    assert info.value.reason == "无法打开进程"
    assert info.value.pid == pid


def test_read_processes_includes_self():
    rows = read_processes()
    assert os.getpid() in {row.pid for row in rows}
    assert all(row.memory >= 0 and row.cpu_time >= 0 for row in rows)


def test_sample_sets_labels():
    table = ProcessTable()
    rows = table.sample()
    assert rows == table.rows
    assert os.getpid() in {row.pid for row in rows}
    assert table.total_label.startswith("进程总数: ")
    assert table.cpu_label.startswith("CPU使用: ") and table.cpu_label.endswith("%")
    assert table.memory_label.startswith("内存使用: ")