"""Physical memory status and usage history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import psutil

from perfwatch.formatting import format_memory_size, memory_color, progress_bar_style


@dataclass(frozen=True)
class MemoryStatus:
    """A memory reading in bytes, with the load as a whole percentage."""

    total: int
    available: int
    load: int
    page_file_total: int = 0

    @property
    def used(self) -> int:
        return self.total - self.available


def read_memory_status() -> MemoryStatus:
    """Read physical memory; the page file total is physical memory plus swap."""
    virtual = psutil.virtual_memory()
    swap = psutil.swap_memory()
    return MemoryStatus(
        total=virtual.total,
        available=virtual.available,
        load=int(virtual.percent),
        page_file_total=virtual.total + swap.total,
    )


class MemoryMonitor:
    """Holds what the memory view shows, updated from memory readings."""

    def __init__(self, history_size: int = 60):
        if history_size <= 0:
            raise ValueError("history_size must be positive")
        self.history: deque[int] = deque(maxlen=history_size)
        self.memory_type = "DDR4"
        self.total_label = ""
        self.used_label = ""
        self.free_label = ""
        self.percent = 0
        self.usage_label = "内存使用率: 0%"
        self.page_file_label = "页面文件: 0 GB"
        self.color = memory_color(0)
        self.style = progress_bar_style(self.color)

    @property
    def type_label(self) -> str:
        return f"内存类型: {self.memory_type}"

    @property
    def points(self) -> list[tuple[int, int]]:
        """Chart points: position in history and usage percentage."""
        return list(enumerate(self.history))

    def update(self, status: MemoryStatus) -> int:
        """Record a reading and return its load percentage."""
        self.total_label = format_memory_size(status.total)
        self.used_label = format_memory_size(status.used)
        self.free_label = format_memory_size(status.available)
        self.percent = status.load
        self.usage_label = f"内存使用率: {status.load}%"
        self.page_file_label = f"页面文件: {format_memory_size(status.page_file_total)}"
        self.color = memory_color(status.load)
        self.style = progress_bar_style(self.color)
        self.history.append(status.load)
        return status.load

    def sample(self) -> int:
        """Read the system's memory status and update."""
        return self.update(read_memory_status())