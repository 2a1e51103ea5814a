"""Value formatting and colour thresholds shared by the monitor views."""

KB = 1024
MB = 1024 * KB
GB = 1024 * MB

GREEN = "#4CAF50"
AMBER = "#FFC107"
ORANGE = "#FF9800"
BLUE = "#2196F3"
PURPLE = "#9C27B0"
RED = "#F44336"


def format_memory_size(num_bytes: int) -> str:
    """Render a byte count in B, KB, MB or GB with two decimals above bytes."""
    for unit, size in (("GB", GB), ("MB", MB), ("KB", KB)):
        if num_bytes >= size:
            return f"{num_bytes / size:.2f} {unit}"
    return f"{num_bytes} B"


def load_color(usage: float) -> str:
    """Colour for a utilisation percentage: green, amber or red."""
    if usage < 30:
        return GREEN
    if usage < 70:
        return AMBER
    return RED


def memory_color(percent: float) -> str:
    """Colour for a memory usage percentage: blue, purple or red."""
    if percent < 50:
        return BLUE
    if percent < 80:
        return PURPLE
    return RED


def temperature_color(celsius: float) -> str:
    """Colour for a temperature in degrees Celsius: green, orange or red."""
    if celsius < 50:
        return GREEN
    if celsius < 75:
        return ORANGE
    return RED


def progress_bar_style(chunk_color: str) -> str:
    """Style sheet for a progress bar whose filled part has the given colour."""
    return (
        "QProgressBar {"
        "   border: 1px solid #e0e0e0;"
        "   border-radius: 5px;"
        "   background-color: #f5f5f5;"
        "   text-align: center;"
        "}"
        "QProgressBar::chunk {"
        f"background-color: {chunk_color};"
        "border-radius: 5px;}"
    )