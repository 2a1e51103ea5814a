"""A titled panel of named metrics with optional progress and detail lines."""

from dataclasses import dataclass, field


@dataclass
class Metric:
    """A named value, with a progress value when one was given."""

    name: str
    value: str
    progress: int | None = None

    @property
    def label(self) -> str:
        return f"{self.name}: {self.value}"


def _progress_or_none(progress: int | None) -> int | None:
    if progress is None or progress < 0:
        return None
    return progress


@dataclass
class InfoPanel:
    """Metrics and detail items shown under a title."""

    title: str
    metrics: list[Metric] = field(default_factory=list)
    details: list[Metric] = field(default_factory=list)

    def add_metric(self, name: str, value: str, progress: int | None = None) -> Metric:
        """Add a metric; a negative or missing progress means no progress bar."""
        metric = Metric(name, value, _progress_or_none(progress))
        self.metrics.append(metric)
        return metric

    def update_metric(self, index: int, value: str, progress: int | None = None) -> None:
        """Replace a metric's value; out-of-range indices are ignored."""
        if not 0 <= index < len(self.metrics):
            return
        metric = self.metrics[index]
        metric.name = metric.label.partition(":")[0]
        metric.value = value
        new_progress = _progress_or_none(progress)
        if new_progress is not None and metric.progress is not None:
            metric.progress = new_progress

    def add_detail(self, name: str, value: str) -> Metric:
        """Add a detail line without progress."""
        detail = Metric(name, value)
        self.details.append(detail)
        return detail

    def update_detail(self, index: int, value: str) -> None:
        """Replace a detail's value; out-of-range indices are ignored."""
        if not 0 <= index < len(self.details):
            return
        detail = self.details[index]
        detail.name = detail.label.partition(":")[0]
        detail.value = value

    def clear(self) -> None:
        """Remove all metrics and details."""
        self.metrics.clear()
        self.details.clear()