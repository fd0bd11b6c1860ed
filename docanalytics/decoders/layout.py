"""Font-size heuristics over positioned text runs of a page."""

from collections.abc import Sequence
from dataclasses import dataclass

from docanalytics.decoders.models import TextRun

LINE_TOLERANCE = 2.0
TITLE_SIZE_RATIO = 0.8
MIN_TITLE_LENGTH = 4


@dataclass(frozen=True)
class Line:
    text: str
    y: float
    size: float


def font_size(transform: Sequence[float] | None, height: float | None) -> float:
    """Rendered size of a run: vertical scale of its transform, else its height."""
    if transform is not None and len(transform) >= 4 and transform[3]:
        return abs(float(transform[3]))
    if height:
        return abs(float(height))
    return 0.0


def group_lines(runs: Sequence[TextRun], tolerance: float = LINE_TOLERANCE) -> list[Line]:
    """Merge consecutive runs sharing a baseline into lines.

    A run whose y differs from the current line's by more than ``tolerance``
    starts a new line. Runs inside a line are joined in x order and the line
    takes the largest size among them.
    """
    groups: list[list[TextRun]] = []
    for run in runs:
        if not run.text.strip():
            continue
        if groups and abs(groups[-1][0].y - run.y) <= tolerance:
            groups[-1].append(run)
        else:
            groups.append([run])

    lines: list[Line] = []
    for group in groups:
        ordered = sorted(group, key=lambda r: r.x)
        text = " ".join(" ".join(r.text.split()) for r in ordered).strip()
        lines.append(Line(text=text, y=group[0].y, size=max(r.size for r in group)))
    return lines


def title_candidates(
    runs: Sequence[TextRun],
    threshold: float = TITLE_SIZE_RATIO,
    min_length: int = MIN_TITLE_LENGTH,
) -> list[str]:
    """Return lines set in a near-maximal font, largest first.

    Lines equal in size keep their reading order.
    """
    lines = group_lines(runs)
    if not lines:
        return []
    max_size = max(line.size for line in lines)
    if max_size <= 0:
        return []
    cutoff = max_size * threshold
    candidates = [
        line for line in lines if line.size >= cutoff and len(line.text) >= min_length
    ]
    candidates.sort(key=lambda line: line.size, reverse=True)
    return [line.text for line in candidates]
