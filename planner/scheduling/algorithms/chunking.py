"""
Sub-phase planning: break a task's estimated time into ordered, labelled phases.
"""

import re
from typing import List, Optional, Tuple
from ..core.constants import MIN_PHASE_MINUTES
from planner.models import PhasePlan

EXAM_KEYWORDS = ("מבחן", "בוחן", "exam", "quiz", "midterm", "final")

_BULLET = re.compile(r"^[-*•]\s*")
_DURATION_HINT = re.compile(r"^(?P<label>.*?)\s*[|,]\s*(?P<hours>\d+(?:\.\d+)?)\s*(?:h|hrs?|hours?)?\s*$", re.IGNORECASE)


def is_exam_title(title: str) -> bool:
    lowered = (title or "").lower()
    return any(keyword in lowered for keyword in EXAM_KEYWORDS)


def propose_phases(estimated_hours: float, title: str) -> List[str]:
    """
    Default phase sequence when the notes don't describe one.
    Exam-like titles get a review-oriented plan, everything else plan/work/review.
    """
    hours = estimated_hours or 0

    if is_exam_title(title):
        if hours <= 2:
            return ["Material review", "Sample questions", "Quick review before the exam"]
        return ["Topic mapping", "Practice exercises", "Mock exams", "Focused review before the exam"]

    if hours <= 1.5:
        return ["Understand the requirements", "Execute and wrap up"]
    if hours <= 3:
        return ["Reading and planning", "Main work", "Review and improvements"]
    return ["Plan and split into parts", "First draft", "Deepen and improve", "Edit and submit"]


def parse_phase_line(line: str) -> Tuple[str, Optional[int]]:
    """
    Split one notes line into (label, hinted minutes).
    A trailing '| 1.5' or ', 1.5' is read as a duration hint in hours.
    """
    line = _BULLET.sub("", line.strip()).strip()
    match = _DURATION_HINT.match(line)
    if match and match.group("label").strip():
        return match.group("label").strip(), round(float(match.group("hours")) * 60)
    return line, None


def parse_phase_notes(notes: str) -> List[Tuple[str, Optional[int]]]:
    """Every non-empty notes line as a (label, hint) pair, in order."""
    phases = []
    for raw in (notes or "").splitlines():
        if not raw.strip():
            continue
        label, hint = parse_phase_line(raw)
        if label:
            phases.append((label, hint))
    return phases


def split_phase_minutes(hints: List[Optional[int]], total_minutes: int) -> List[int]:
    """
    Hinted phases keep their minutes; unhinted phases share what's left evenly,
    with the remainder handed out a minute at a time from the first unhinted
    phase. Nothing drops below the minimum phase length.
    """
    minutes = [hint if hint and hint > 0 else (MIN_PHASE_MINUTES if hint is not None else None) for hint in hints]
    unhinted = [i for i, hint in enumerate(hints) if hint is None]

    if unhinted:
        hinted_total = sum(m for m in minutes if m is not None)
        left = max(0, total_minutes - hinted_total)
        share, extra = divmod(left, len(unhinted))
        for n, i in enumerate(unhinted):
            minutes[i] = max(MIN_PHASE_MINUTES, share + (1 if n < extra else 0))

    return minutes


def build_phase_plan(notes: str, estimated_hours: float, title: str, total_minutes: int) -> PhasePlan:
    phases = parse_phase_notes(notes)
    if len(phases) < 2:
        phases = [(label, None) for label in propose_phases(estimated_hours, title)]

    labels = [label for label, _ in phases]
    minutes = split_phase_minutes([hint for _, hint in phases], total_minutes)
    return PhasePlan(labels, minutes)
