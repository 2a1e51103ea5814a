import pytest

from perfwatch.cpu import (
    CpuInfo,
    CpuMonitor,
    CpuTimes,
    cpu_usage,
    read_cpu_info,
    read_cpu_times,
)
from perfwatch.formatting import load_color, progress_bar_style


def test_all_idle_is_zero_usage():
    prev = CpuTimes(0, 0, 0)
    cur = CpuTimes(idle=40, kernel=40, user=0)
    assert cpu_usage(prev, cur) == 0.0


def test_no_idle_is_full_usage():
    prev = CpuTimes(0, 0, 0)
    cur = CpuTimes(idle=0, kernel=30, user=70)
    assert cpu_usage(prev, cur) == 100.0


def test_no_elapsed_time_is_zero():
    times = CpuTimes(5, 10, 10)
    assert cpu_usage(times, times) == 0.0


def test_usage_depends_only_on_differences():
    a = cpu_usage(CpuTimes(0, 0, 0), CpuTimes(10, 30, 20))
    b = cpu_usage(CpuTimes(100, 200, 300), CpuTimes(110, 230, 320))
    assert a == pytest.approx(b)
    assert 0 <= a <= 100


def test_monitor_starts_from_zero_reading():
    monitor = CpuMonitor()
    usage = monitor.update(CpuTimes(idle=50, kernel=60, user=40))
    assert usage == cpu_usage(CpuTimes(0, 0, 0), CpuTimes(50, 60, 40))
    assert list(monitor.history) == [usage]


def test_monitor_uses_previous_reading():
    monitor = CpuMonitor()
    first = CpuTimes(10, 20, 20)
    second = CpuTimes(20, 40, 40)
    monitor.update(first)
    assert monitor.update(second) == cpu_usage(first, second)


def test_history_is_bounded():
    monitor = CpuMonitor(history_size=3)
    for step in range(1, 6):
        monitor.update(CpuTimes(step, step * 2, step))
    assert len(monitor.history) == 3
    assert [x for x, _ in monitor.points] == [0, 1, 2]


def test_bar_value_rounds_half_up():
    monitor = CpuMonitor()
    # 99 busy out of 200 total
    monitor.update(CpuTimes(idle=101, kernel=101, user=99))
    assert monitor.bar_value == 50


@pytest.mark.parametrize("idle", [0, 25, 50, 90, 100])
def test_color_and_style_follow_usage(idle):
    monitor = CpuMonitor()
    usage = monitor.update(CpuTimes(idle=idle, kernel=100, user=0))
    assert monitor.color == load_color(usage)
    assert monitor.style == progress_bar_style(monitor.color)


def test_invalid_history_size():
    with pytest.raises(ValueError):
        CpuMonitor(history_size=0)


def test_frequency_label_pending_before_known():
    info = CpuInfo(cores=8, model="Test CPU", architecture="x86_64", frequency_mhz=None)
    assert info.frequency_label == "CPU频率: 获取中..."
    assert CpuMonitor().frequency_label == "CPU频率: 获取中..."


def test_info_labels():
    info = CpuInfo(cores=8, model="Test CPU", architecture="x86_64", frequency_mhz=3200)
    assert info.cores_label == "CPU核心数: 8"
    assert info.model_label == "CPU型号: Test CPU"
    assert info.architecture_label == "CPU架构: x86_64"
    assert info.frequency_label == "CPU频率: 3200 MHz"


def test_read_cpu_times_is_consistent():
    times = read_cpu_times()
    assert times.idle >= 0
    assert times.user >= 0
    assert times.kernel >= times.idle


def test_read_cpu_info_reports_cores():
    info = read_cpu_info()
    assert info.cores >= 1
    assert info.model


def test_sample_gives_percentage():
    monitor = CpuMonitor()
    monitor.sample()
    usage = monitor.sample()
    assert 0 <= usage <= 100
    assert len(monitor.history) == 2