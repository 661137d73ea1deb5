"""Reduce a 3-hourly forecast sample sequence into a short daily summary.

Samples are grouped by calendar date in local time (or in ``tz`` when given).
The same convention must be used for ``reference_date`` so that the current
day is excluded consistently near midnight.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, tzinfo

from weatherboard.models.weather import DailySummary, Sample

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
DEFAULT_HORIZON_DAYS = 3


def sample_date(sample: Sample, tz: tzinfo | None = None) -> date:
    """Calendar date of a sample. tz=None means the process's local time."""
    return datetime.fromtimestamp(sample.timestamp, tz).date()


def day_label(d: date) -> str:
    # isoweekday: Mon=1..Sun=7, so % 7 gives Sun=0
    return DAY_LABELS[d.isoweekday() % 7]


def most_frequent(codes: Iterable[int]) -> int:
    """Mode of the codes. Ties go to the code that reached the max count first."""
    counts: dict[int, int] = {}
    best: int | None = None
    best_count = 0
    for code in codes:
        counts[code] = counts.get(code, 0) + 1
        if counts[code] > best_count:
            best_count = counts[code]
            best = code
    if best is None:
        raise ValueError("most_frequent() of an empty sequence")
    return best


def summarize(
    samples: Sequence[Sample],
    reference_date: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    tz: tzinfo | None = None,
) -> list[DailySummary]:
    """Summarize up to ``horizon_days`` future days from the samples.

    Days keep their first-seen order from the input; the group for
    ``reference_date`` is skipped. Each day gets the mean temperature and the
    most frequent condition code of its samples.
    """
    if horizon_days <= 0:
        return []

    # dict preserves first-seen insertion order
    groups: dict[date, list[Sample]] = {}
    for s in samples:
        groups.setdefault(sample_date(s, tz), []).append(s)

    days = [d for d in groups if d != reference_date][:horizon_days]

    result: list[DailySummary] = []
    for d in days:
        day_samples = groups[d]
        temps = [s.temperature for s in day_samples]
        result.append(
            DailySummary(
                day_label=day_label(d),
                average_temp=sum(temps) / len(temps),
                condition_code=most_frequent(s.condition_code for s in day_samples),
            )
        )
    return result
