"""Disk capacity table, selected-disk usage and average usage history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import psutil

from perfwatch.formatting import GREEN, ORANGE, RED, progress_bar_style

KB = 1024
MB = 1024 * KB
GB = 1024 * MB
TB = 1024 * GB

HEADERS = ("盘符", "总容量", "已用空间", "可用空间", "使用率")
DEFAULT_DETAIL = "请选择磁盘以查看详细信息"


def format_size(num_bytes: int) -> str:
    """Render a byte count in B, KB, MB, GB or TB with two decimals above bytes."""
    for unit, size in (("TB", TB), ("GB", GB), ("MB", MB), ("KB", KB)):
        if num_bytes >= size:
            return f"{num_bytes / size:.2f} {unit}"
    return f"{num_bytes} B"


def disk_color(percent: float) -> str:
    """Colour for a disk usage percentage: green, orange or red."""
    if percent < 50:
        return GREEN
    if percent < 85:
        return ORANGE
    return RED


@dataclass(frozen=True)
class DiskRow:
    """One mounted volume: its path, capacity and free space in bytes."""

    path: str
    total: int
    free: int

    @property
    def used(self) -> int:
        return self.total - self.free

    @property
    def usage_percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.used / self.total * 100

    @property
    def usage_text(self) -> str:
        return f"{self.usage_percent:.1f}%"

    @property
    def cells(self) -> tuple[str, str, str, str, str]:
        """The table cells in column order."""
        return (
            self.path,
            format_size(self.total),
            format_size(self.used),
            format_size(self.free),
            self.usage_text,
        )


def _shown_usage(row: DiskRow) -> float:
    # the view works from the rounded figure it displays
    return float(row.usage_text[:-1])


def read_disks() -> list[DiskRow]:
    """Read capacity and free space of every mounted volume."""
    rows: list[DiskRow] = []
    seen: set[str] = set()
    for partition in psutil.disk_partitions(all=False):
        if partition.mountpoint in seen:
            continue
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except OSError:
            continue
        seen.add(partition.mountpoint)
        rows.append(DiskRow(partition.mountpoint, usage.total, usage.free))
    return rows


class DiskMonitor:
    """Holds what the disk view shows, updated from volume readings."""

    def __init__(self, history_size: int = 60):
        if history_size <= 0:
            raise ValueError("history_size must be positive")
        self.history: deque[float] = deque([0.0] * history_size, maxlen=history_size)
        self.rows: list[DiskRow] = []
        self.selected: int | None = None
        self.progress = 0
        self.color = ORANGE
        self.style = progress_bar_style(self.color)
        self._detail = DEFAULT_DETAIL

    def _show_progress(self, percent: float) -> None:
        self.progress = int(percent)
        self.color = disk_color(percent)
        self.style = progress_bar_style(self.color)

    def update(self, rows) -> float:
        """Replace the table and return the average usage added to the history."""
        self.rows = list(rows)
        if self.selected is not None and self.selected >= len(self.rows):
            self.selected = None
        if self.selected is not None:
            self._show_progress(_shown_usage(self.rows[self.selected]))
        usages = [_shown_usage(row) for row in self.rows]
        average = sum(usages) / len(usages) if usages else 0.0
        self.history.append(average)
        return average

    def sample(self) -> float:
        """Read the mounted volumes and update."""
        return self.update(read_disks())

    def select(self, index: int) -> DiskRow:
        """Select a row: show its details and its usage in the progress bar."""
        if not 0 <= index < len(self.rows):
            raise IndexError(index)
        self.selected = index
        row = self.rows[index]
        path, total, used, free, usage = row.cells
        self._detail = (
            f"盘符: {path}\n总容量: {total}\n已用空间: {used}\n"
            f"可用空间: {free}\n使用率: {usage}"
        )
        self._show_progress(_shown_usage(row))
        return row

    def detail_text(self) -> str:
        """Details of the last selected disk, or a prompt to select one."""
        return self._detail