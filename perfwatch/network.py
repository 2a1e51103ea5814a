"""Network interface traffic: speeds, totals and speed history."""

from __future__ import annotations

import socket
from collections import deque
from dataclasses import dataclass

import psutil

DEFAULT_DETAIL = "请选择网络接口以查看详细信息"
IDLE_LIMIT = 5


def _scaled(num_bytes: float, suffix: str) -> str:
    kb = num_bytes / 1024.0
    if kb < 1024:
        return f"{kb:.2f} KB{suffix}"
    mb = kb / 1024.0
    if mb < 1024:
        return f"{mb:.2f} MB{suffix}"
    return f"{mb / 1024.0:.2f} GB{suffix}"


def format_speed(num_bytes: float) -> str:
    """Render bytes per second as KB/s, MB/s or GB/s."""
    return _scaled(num_bytes, "/s")


def format_data_size(num_bytes: float) -> str:
    """Render a byte total as KB, MB or GB."""
    return _scaled(num_bytes, "")


def format_mac_address(address) -> str:
    """Render hardware address bytes as upper-case hex pairs joined by colons."""
    if not address:
        return "未知"
    return ":".join(f"{octet:02X}" for octet in address)


@dataclass(frozen=True)
class InterfaceCounters:
    """A reading of one interface's cumulative traffic and link facts."""

    name: str
    bytes_sent: int
    bytes_recv: int
    is_up: bool | None = None
    mtu: int = 0
    mac: bytes = b""

    @property
    def status(self) -> str:
        if self.is_up is None:
            return "未知状态"
        return "连接" if self.is_up else "断开"


def _parse_mac(text: str) -> bytes:
    try:
        return bytes.fromhex(text.replace(":", "").replace("-", ""))
    except ValueError:
        return b""


def _is_loopback(name: str, addresses) -> bool:
    if name == "lo":
        return True
    for addr in addresses:
        if addr.family == socket.AF_INET and addr.address.startswith("127."):
            return True
        if addr.family == socket.AF_INET6 and addr.address.split("%")[0] == "::1":
            return True
    return False


def read_interfaces() -> dict[str, InterfaceCounters]:
    """Read traffic counters of every interface except loopback ones."""
    io_counters = psutil.net_io_counters(pernic=True)
    stats = psutil.net_if_stats()
    all_addresses = psutil.net_if_addrs()
    result: dict[str, InterfaceCounters] = {}
    for name, counters in io_counters.items():
        addresses = all_addresses.get(name, [])
        if _is_loopback(name, addresses):
            continue
        mac = b""
        for addr in addresses:
            if addr.family == psutil.AF_LINK and addr.address:
                mac = _parse_mac(addr.address)
        stat = stats.get(name)
        result[name] = InterfaceCounters(
            name=name,
            bytes_sent=counters.bytes_sent,
            bytes_recv=counters.bytes_recv,
            is_up=stat.isup if stat else None,
            mtu=stat.mtu if stat else 0,
            mac=mac,
        )
    return result


def _busiest(counters: dict[str, InterfaceCounters]) -> str | None:
    candidates = [
        c for c in counters.values() if c.is_up is not False and c.bytes_sent + c.bytes_recv > 0
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda c: c.bytes_sent + c.bytes_recv).name


class NetworkMonitor:
    """Tracks upload and download speed of the selected interface."""

    def __init__(self, history_size: int = 60):
        if history_size <= 0:
            raise ValueError("history_size must be positive")
        self.upload_history: deque[float] = deque(maxlen=history_size)
        self.download_history: deque[float] = deque(maxlen=history_size)
        self.interfaces: list[str] = []
        self.current: str | None = None
        self.upload_speed = 0
        self.download_speed = 0
        self.upload_label = ""
        self.download_label = ""
        self.detail = DEFAULT_DETAIL
        self._last_upload = 0
        self._last_download = 0
        self._idle_updates = 0

    def set_interfaces(self, names, active: str | None = None) -> str | None:
        """Offer these interfaces and select the active one, or else the first."""
        self.interfaces = list(names)
        if not self.interfaces:
            self.current = None
            return None
        choice = active if active in self.interfaces else self.interfaces[0]
        self.select(choice)
        return choice

    def select(self, name: str) -> None:
        """Switch to an interface; speeds restart from its next reading."""
        if name not in self.interfaces:
            raise KeyError(name)
        self.current = name
        self.detail = (
            f"接口: {name}\n上传速度: {self.upload_label}\n下载速度: {self.download_label}"
        )
        self._last_upload = 0
        self._last_download = 0

    def update(self, counters, active: str | None = None) -> tuple[int, int] | None:
        """Take a reading of all interfaces; return (upload, download) bytes since the last.

        Nothing is returned for a baseline reading, or when five idle readings in a
        row make the monitor move to the active interface.
        """
        if self.current is None:
            return None
        reading = counters.get(self.current)
        if reading is None:
            return None

        result = None
        if self._last_upload > 0 and self._last_download > 0:
            upload = reading.bytes_sent - self._last_upload
            download = reading.bytes_recv - self._last_download
            if upload == 0 and download == 0:
                self._idle_updates += 1
                if (
                    self._idle_updates >= IDLE_LIMIT
                    and active
                    and active != self.current
                    and active in self.interfaces
                ):
                    self.select(active)
                    self._idle_updates = 0
                    replacement = counters.get(active)
                    if replacement is not None:
                        self._last_upload = replacement.bytes_sent
                        self._last_download = replacement.bytes_recv
                    return None
            else:
                self._idle_updates = 0

            self.upload_speed = upload
            self.download_speed = download
            self.upload_label = format_speed(upload)
            self.download_label = format_speed(download)
            self.upload_history.append(upload / 1024.0)
            self.download_history.append(download / 1024.0)
            self.detail = self.detail_text(reading)
            result = (upload, download)

        self._last_upload = reading.bytes_sent
        self._last_download = reading.bytes_recv
        return result

    def detail_text(self, counters: InterfaceCounters) -> str:
        """Describe an interface reading together with the latest speeds."""
        name = self.current if self.current is not None else counters.name
        return (
            f"接口: {name}\n"
            f"状态: {counters.status}\n"
            f"上传速度: {format_speed(self.upload_speed)}\n"
            f"下载速度: {format_speed(self.download_speed)}\n"
            f"MAC地址: {format_mac_address(counters.mac)}\n"
            f"MTU: {counters.mtu}\n"
            f"总上传: {format_data_size(counters.bytes_sent)}\n"
            f"总下载: {format_data_size(counters.bytes_recv)}"
        )

    def sample(self) -> tuple[int, int] | None:
        """Read the system's interfaces and update."""
        counters = read_interfaces()
        active = _busiest(counters)
        if not self.interfaces:
            self.set_interfaces(list(counters), active)
        return self.update(counters, active)