"""CPU usage sampling, processor details and usage history."""

from __future__ import annotations

import platform
from collections import deque
from dataclasses import dataclass

import psutil

from perfwatch.formatting import load_color, progress_bar_style

PENDING_FREQUENCY = "CPU频率: 获取中..."
_FREQUENCY_EVERY = 5


@dataclass(frozen=True)
class CpuTimes:
    """Cumulative CPU times in seconds; ``kernel`` includes ``idle``."""

    idle: float
    kernel: float
    user: float


def cpu_usage(previous: CpuTimes, current: CpuTimes) -> float:
    """Busy percentage over the interval between two readings."""
    idle = current.idle - previous.idle
    total = (current.kernel - previous.kernel) + (current.user - previous.user)
    if total <= 0:
        return 0.0
    return (total - idle) * 100.0 / total


def read_cpu_times() -> CpuTimes:
    """Read the system-wide cumulative CPU times."""
    times = psutil.cpu_times()
    fields = times._asdict()
    # guest time is already accounted for in user time
    fields.pop("guest", None)
    fields.pop("guest_nice", None)
    total = sum(fields.values())
    user = fields.get("user", 0.0) + fields.get("nice", 0.0)
    idle = fields.get("idle", 0.0)
    return CpuTimes(idle=idle, kernel=total - user, user=user)


def _read_frequency() -> int | None:
    try:
        freq = psutil.cpu_freq()
    except (OSError, NotImplementedError, RuntimeError):
        return None
    if freq is None or freq.current <= 0:
        return None
    return int(freq.current)


@dataclass(frozen=True)
class CpuInfo:
    """Static facts about the processor."""

    cores: int
    model: str
    architecture: str
    frequency_mhz: int | None = None

    @property
    def cores_label(self) -> str:
        return f"CPU核心数: {self.cores}"

    @property
    def model_label(self) -> str:
        return f"CPU型号: {self.model}"

    @property
    def architecture_label(self) -> str:
        return f"CPU架构: {self.architecture}"

    @property
    def frequency_label(self) -> str:
        if not self.frequency_mhz or self.frequency_mhz <= 0:
            return PENDING_FREQUENCY
        return f"CPU频率: {self.frequency_mhz} MHz"


def read_cpu_info() -> CpuInfo:
    """Describe the local processor."""
    cores = psutil.cpu_count(logical=True) or 0
    model = platform.processor() or "未知"
    architecture = platform.machine() or "x86-64"
    return CpuInfo(
        cores=cores,
        model=model,
        architecture=architecture,
        frequency_mhz=_read_frequency(),
    )


def _round_half_up(value: float) -> int:
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)


class CpuMonitor:
    """Tracks CPU usage between successive time readings."""

    def __init__(self, history_size: int = 60):
        if history_size <= 0:
            raise ValueError("history_size must be positive")
        self.history: deque[float] = deque(maxlen=history_size)
        self._previous = CpuTimes(0.0, 0.0, 0.0)
        self._samples = 0
        self.usage = 0.0
        self.bar_value = 0
        self.color = load_color(0)
        self.style = progress_bar_style(self.color)
        self.frequency_label = PENDING_FREQUENCY

    @property
    def points(self) -> list[tuple[int, float]]:
        """Chart points: position in history and usage."""
        return list(enumerate(self.history))

    def update(self, times: CpuTimes) -> float:
        """Record a new time reading and return the usage since the last one."""
        usage = cpu_usage(self._previous, times)
        self._previous = times
        self.usage = usage
        self.history.append(usage)
        self.bar_value = _round_half_up(usage)
        self.color = load_color(usage)
        self.style = progress_bar_style(self.color)
        return usage

    def sample(self) -> float:
        """Read the system's CPU times, update, and refresh frequency periodically."""
        usage = self.update(read_cpu_times())
        if self._samples % _FREQUENCY_EVERY == 0:
            frequency = _read_frequency()
            if frequency:
                self.frequency_label = f"CPU频率: {frequency} MHz"
        self._samples += 1
        return usage