"""Process table: listing, filtering, check marks and termination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

import psutil

from perfwatch.cpu import CpuTimes, cpu_usage, read_cpu_times
from perfwatch.formatting import format_memory_size

HEADERS = ("选择", "PID", "进程名", "CPU使用率", "内存使用", "状态")
RUNNING = "运行中"
HIGHLIGHT_CPU = 5.0
HIGHLIGHT_COLOR = (255, 235, 235)
NO_SELECTION = "请先选择至少一个进程"
_LISTED_IN_CONFIRMATION = 5


class NoSelectionError(ValueError):
    """Raised when an action needs checked processes and none are checked."""

    def __init__(self) -> None:
        super().__init__(NO_SELECTION)


class ProcessTerminationError(OSError):
    """A process could not be ended; ``reason`` says why."""

    def __init__(self, pid: int, reason: str):
        super().__init__(f"PID {pid}: {reason}")
        self.pid = pid
        self.reason = reason


@dataclass(frozen=True)
class ProcessRow:
    """One listed process: total CPU seconds and working-set bytes."""

    pid: int
    name: str
    cpu_time: float = 0.0
    memory: int = 0

    @property
    def cpu_text(self) -> str:
        return f"{self.cpu_time:.1f}%"

    @property
    def memory_text(self) -> str:
        return format_memory_size(self.memory)

    @property
    def highlighted(self) -> bool:
        """Rows with heavy CPU use are shown with a tinted background."""
        return self.cpu_time > HIGHLIGHT_CPU

    @property
    def cells(self) -> tuple[str, str, str, str, str, str]:
        """The table cells in column order; the check column has no text."""
        return ("", str(self.pid), self.name, self.cpu_text, self.memory_text, RUNNING)


def read_processes() -> list[ProcessRow]:
    """List the processes whose memory use can be read."""
    rows: list[ProcessRow] = []
    for process in psutil.process_iter(["pid", "name", "cpu_times", "memory_info"]):
        info = process.info
        memory = info.get("memory_info")
        if memory is None:
            continue
        times = info.get("cpu_times")
        cpu_time = (times.user + times.system) if times is not None else 0.0
        rows.append(
            ProcessRow(
                pid=info["pid"],
                name=info.get("name") or "",
                cpu_time=cpu_time,
                memory=memory.rss,
            )
        )
    return rows


def terminate_process(pid: int) -> None:
    """End a process at once; raise ProcessTerminationError on failure."""
    try:
        process = psutil.Process(pid)
    except (psutil.NoSuchProcess, psutil.AccessDenied, ValueError) as error:
        raise ProcessTerminationError(pid, "无法打开进程") from error
    try:
        process.kill()
    except psutil.Error as error:
        raise ProcessTerminationError(pid, str(error) or type(error).__name__) from error


def termination_report(success_count: int, failures: Iterable[str]) -> str:
    """Summary shown after an attempt to end processes."""
    failures = list(failures)
    if not failures:
        return f"已成功终止 {success_count} 个进程"
    lines = "".join(f"{failure}\n" for failure in failures)
    return f"已成功终止 {success_count} 个进程，但以下进程终止失败:\n{lines}"


class ProcessTable:
    """The process list with check marks, filtering and system totals."""

    def __init__(self) -> None:
        self.rows: list[ProcessRow] = []
        self._checked: set[int] = set()
        self._hidden: set[int] = set()
        self._previous_times = CpuTimes(0.0, 0.0, 0.0)
        self.total_label = ""
        self.cpu_label = ""
        self.memory_label = ""

    def update(self, rows: Iterable[ProcessRow]) -> list[ProcessRow]:
        """Replace the rows, keeping check marks of PIDs still listed.

        Rows are ordered by CPU time, highest first; any filter is lifted.
        """
        new_rows = sorted(rows, key=lambda row: row.cpu_time, reverse=True)
        pids = {row.pid for row in new_rows}
        self._checked &= pids
        self._hidden.clear()
        self.rows = new_rows
        return self.rows

    def _update_stats(self) -> None:
        self.total_label = f"进程总数: {len(psutil.pids())}"
        self.memory_label = f"内存使用: {int(psutil.virtual_memory().percent)}%"
        times = read_cpu_times()
        usage = int(cpu_usage(self._previous_times, times))
        self._previous_times = times
        self.cpu_label = f"CPU使用: {usage}%"

    def sample(self) -> list[ProcessRow]:
        """Refresh the system totals and the process list."""
        self._update_stats()
        return self.update(read_processes())

    def filter(self, text: str) -> list[ProcessRow]:
        """Hide rows none of whose cells contain the text, ignoring case."""
        needle = text.casefold()
        self._hidden = {
            row.pid
            for row in self.rows
            if not any(needle in cell.casefold() for cell in row.cells)
        }
        return self.visible_rows()

    def visible_rows(self) -> list[ProcessRow]:
        """Rows not hidden by the filter, in table order."""
        return [row for row in self.rows if row.pid not in self._hidden]

    def set_checked(self, pid: int, checked: bool = True) -> None:
        """Check or uncheck the row of a listed PID."""
        if not any(row.pid == pid for row in self.rows):
            raise KeyError(pid)
        if checked:
            self._checked.add(pid)
        else:
            self._checked.discard(pid)

    def checked_rows(self) -> list[ProcessRow]:
        """Checked rows in table order."""
        return [row for row in self.rows if row.pid in self._checked]

    def confirmation_message(self) -> str:
        """Question asked before ending the checked processes."""
        rows = self.checked_rows()
        if not rows:
            raise NoSelectionError()
        if len(rows) == 1:
            row = rows[0]
            return f"确定要结束进程 {row.name} (PID: {row.pid}) 吗?"
        message = f"确定要结束以下 {len(rows)} 个进程吗?\n"
        message += "".join(
            f"{row.name} (PID: {row.pid})\n" for row in rows[:_LISTED_IN_CONFIRMATION]
        )
        if len(rows) > _LISTED_IN_CONFIRMATION:
            message += f"...以及其他 {len(rows) - _LISTED_IN_CONFIRMATION} 个进程"
        return message

    def terminate_checked(
        self, terminate: Callable[[int], None] = terminate_process
    ) -> tuple[int, list[str]]:
        """End every checked process; return the success count and failure lines."""
        rows = self.checked_rows()
        if not rows:
            raise NoSelectionError()
        successes = 0
        failures: list[str] = []
        for row in rows:
            try:
                terminate(row.pid)
            except ProcessTerminationError as error:
                failures.append(f"{row.name} (PID: {row.pid}, 错误: {error.reason})")
            except OSError as error:
                failures.append(f"{row.name} (PID: {row.pid}, 错误: {error})")
            else:
                successes += 1
        return successes, failures