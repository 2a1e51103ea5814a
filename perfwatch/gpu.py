"""GPU status model: usage, temperature and memory readings with history."""

from collections import deque

from perfwatch.formatting import (
    format_memory_size,
    load_color,
    memory_color,
    temperature_color,
)

MISSING_STATUS = "GPU状态：未检测到GPU"
MISSING_DRIVER = "驱动版本：N/A"

MISSING_STYLE = "QFrame { background-color: #ffeeee; border-radius: 8px; border: 1px solid #ffcccc; }"
REPORTING_STYLE = "QFrame { background-color: #f8f8f8; border-radius: 8px; border: 1px solid #e0e0e0; }"
DETECTED_STYLE = "QFrame { background-color: #f1f8e9; border-radius: 8px; border: 1px solid #c5e1a5; }"


class GpuMonitor:
    """Holds what the GPU view shows, updated from reported statistics."""

    def __init__(self, history_size: int = 60):
        if history_size <= 0:
            raise ValueError("history_size must be positive")
        self.history: deque[float] = deque(maxlen=history_size)
        self.available = False
        self.status_text = MISSING_STATUS
        self.driver_text = MISSING_DRIVER
        self.status_style = MISSING_STYLE
        self.chart_visible = False
        self._reset_readings()

    def _reset_readings(self) -> None:
        self.usage = 0
        self.usage_label = "0%"
        self.usage_color = load_color(0)
        self.temperature = 0
        self.temperature_label = "0°C"
        self.temperature_color = temperature_color(0)
        self.temperature_visible = True
        self.memory_percent = 0
        self.memory_label = "0 / 0"
        self.memory_color = memory_color(0)
        self.memory_visible = True

    def update_stats(self, usage: float, temperature: float, memory_used: int, memory_total: int) -> None:
        """Record a new reading; a reading marks the GPU as available."""
        if not self.available:
            self.available = True
            self.status_style = REPORTING_STYLE
            self.chart_visible = True

        self.usage = int(usage)
        self.usage_label = f"{usage:.1f}%"
        self.usage_color = load_color(usage)

        if temperature > 0:
            self.temperature = int(temperature)
            self.temperature_label = f"{temperature:.1f}°C"
            self.temperature_visible = True
            self.temperature_color = temperature_color(temperature)
        else:
            self.temperature_visible = False

        if memory_total > 0:
            percent = memory_used / memory_total * 100.0
            self.memory_percent = int(percent)
            self.memory_label = f"{format_memory_size(memory_used)} / {format_memory_size(memory_total)}"
            self.memory_visible = True
            self.memory_color = memory_color(percent)
        else:
            self.memory_visible = False

        self.history.append(usage)

    def set_availability(self, available: bool, name: str, driver_version: str) -> None:
        """Show a detected GPU by name, or reset the view when none is present."""
        self.available = available
        if available:
            self.status_text = "GPU状态：" + name
            self.driver_text = "驱动版本：" + driver_version
            self.status_style = DETECTED_STYLE
            self.chart_visible = True
        else:
            self.status_text = MISSING_STATUS
            self.driver_text = MISSING_DRIVER
            self.status_style = MISSING_STYLE
            self.chart_visible = False
            self.usage = 0
            self.usage_label = "0%"
            self.temperature = 0
            self.temperature_label = "0°C"
            self.memory_percent = 0
            self.memory_label = "0 / 0"