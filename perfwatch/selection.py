"""Choosing processes from a list by checking them, then confirming."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessInfo:
    """A process offered for selection."""

    pid: int
    name: str
    usage_string: str = ""


class ProcessSelection:
    """A checklist of processes; accepting it yields the checked PIDs."""

    def __init__(self, processes, title: str = ""):
        self.title = title
        self.processes: list[ProcessInfo] = list(processes)
        self._checked = [False] * len(self.processes)
        self.selected_pids: list[int] = []
        self.accepted: bool | None = None

    def labels(self) -> list[tuple[str, str]]:
        """Each process as its name-and-PID text and its usage text."""
        return [(f"{p.name} (PID: {p.pid})", p.usage_string) for p in self.processes]

    def set_checked(self, pid: int, checked: bool = True) -> None:
        """Check or uncheck every entry with this PID."""
        found = False
        for position, process in enumerate(self.processes):
            if process.pid == pid:
                self._checked[position] = checked
                found = True
        if not found:
            raise KeyError(pid)

    def accept(self) -> list[int]:
        """Confirm the selection and return the checked PIDs in list order."""
        self.selected_pids = [
            process.pid for process, checked in zip(self.processes, self._checked) if checked
        ]
        self.accepted = True
        return self.selected_pids

    def reject(self) -> None:
        """Cancel the selection."""
        self.accepted = False