# perfwatch

perfwatch collects the figures a system monitor displays and keeps the short
histories behind its charts. It covers CPU load, memory use, disk space,
network throughput, GPU statistics and the process list. Each monitor also
works out the labels, colours and progress-bar style sheets that go with its
figures.

Live readings come from `psutil`. Each monitor's `update` method also takes
readings you supply yourself, so the same logic works on recorded or
simulated data.

## Modules

- `perfwatch.formatting`
  - `format_memory_size` gives B, KB, MB or GB.
  - The colour thresholds are `load_color` (green below 30, amber below 70,
    red otherwise), `memory_color` (blue below 50, purple below 80, red
    otherwise) and `temperature_color` (green below 50, orange below 75, red
    otherwise).
  - `progress_bar_style` builds a style sheet for a given chunk colour.
- `perfwatch.cpu`
  - `CpuTimes` and `CpuInfo` hold readings and processor facts.
  - `cpu_usage(previous, current)` gives the busy percentage between two
    readings.
  - `read_cpu_times` and `read_cpu_info` read the local machine.
  - `CpuMonitor` keeps a usage history. Its `sample()` also refreshes the
    frequency label every fifth call.
- `perfwatch.memory`
  - `MemoryStatus` and `read_memory_status` give physical memory. The page
    file total is physical memory plus swap.
  - `MemoryMonitor` keeps the memory labels and a load history.
- `perfwatch.disk`
  - `DiskRow` holds one volume and `read_disks` reads the mounted volumes.
  - `format_size` goes up to TB. `disk_color` gives green below 50, orange
    below 85, red otherwise.
  - `DiskMonitor` records the average usage of all volumes in a history that
    starts filled with zeros. `select(index)` shows one volume, and
    `detail_text()` describes it.
- `perfwatch.network`
  - `InterfaceCounters` holds one interface's counters. `read_interfaces`
    reads every interface except loopback ones.
  - The formatters are `format_speed`, `format_data_size` and
    `format_mac_address`.
  - `NetworkMonitor` turns successive counter readings into upload and
    download speeds. The first reading after selecting an interface is only a
    baseline. If the selected interface is idle for five readings in a row,
    the monitor switches to the active interface.
- `perfwatch.gpu`
  - `GpuMonitor` holds usage, temperature and memory readings for the GPU
    view. `update_stats` records a reading. `set_availability` shows a
    detected GPU or resets the view.
- `perfwatch.processes`
  - `ProcessRow` holds one process and `read_processes` lists them.
  - `terminate_process` kills a process. It raises `ProcessTerminationError`
    on failure.
  - `termination_report` gives a summary of a termination attempt.
  - `ProcessTable` sorts rows by CPU time, highest first, and supports case-
    insensitive filtering and check marks.
  - `confirmation_message()` gives the text to confirm before ending
    processes. It lists at most five of them.
  - `terminate_checked()` ends the checked processes. It raises
    `NoSelectionError` when none are checked.
- `perfwatch.selection`
  - `ProcessInfo` and `ProcessSelection` form a checklist of processes.
    `accept()` returns the checked PIDs in list order.
- `perfwatch.infopanel`
  - `InfoPanel` and `Metric` make a titled group of "name: value" metrics,
    with optional progress values, and detail lines.

## Examples

Formatting sizes and speeds:

```python
from perfwatch.formatting import format_memory_size
from perfwatch.network import format_speed

format_memory_size(1536)      # '1.50 KB'
format_speed(2048)            # '2.00 KB/s'
```

Taking live samples:

```python
from perfwatch.cpu import CpuMonitor
from perfwatch.memory import MemoryMonitor

cpu = CpuMonitor(60)
memory = MemoryMonitor(60)
cpu.sample()
memory.sample()
print(cpu.points, memory.usage_label)
```

Feeding your own readings:

```python
from perfwatch.cpu import CpuMonitor, CpuTimes

cpu = CpuMonitor()
cpu.update(CpuTimes(idle=0.0, kernel=0.0, user=0.0))
cpu.update(CpuTimes(idle=5.0, kernel=10.0, user=10.0))   # returns 75.0
```

Working with the process table:

```python
from perfwatch.processes import ProcessTable

table = ProcessTable()
table.sample()
for row in table.filter("python"):
    print(row.pid, row.name, row.memory_text)
```

## What it does not do

perfwatch is a library of models. It has no windows or other graphical
screens and no command-line program. It does not store histories on disk;
each history lives in memory and holds a fixed number of readings, 60 by
default. It does not read GPU statistics from the system: `GpuMonitor` shows
whatever readings it is given. It does not detect anomalies, bottlenecks or
trends, and it does not answer questions about the system.