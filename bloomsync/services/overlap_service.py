import math
from numbers import Real
from typing import Sequence

from bloomsync.core.errors import InvalidDayOfYearError
from bloomsync.models.climate import ClimateRecord, ClimateSummary, OverlapBand

OVERLAP_WINDOW_DAYS = 15
GOOD_OVERLAP_ABOVE = 70
FAIR_OVERLAP_ABOVE = 40


def _check_day(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InvalidDayOfYearError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def synchrony_index(bloom_day: float, pollinator_day: float) -> int:
    """
    Percentage overlap between the bloom window and the pollinator window.

    Each window is OVERLAP_WINDOW_DAYS wide and centred on its peak day, so
    peaks 15 or more days apart score 0 and identical peaks score 100.
    """
    bloom_day = _check_day("bloom_day", bloom_day)
    pollinator_day = _check_day("pollinator_day", pollinator_day)

    half_window = OVERLAP_WINDOW_DAYS / 2
    bloom_start, bloom_end = bloom_day - half_window, bloom_day + half_window
    poll_start, poll_end = pollinator_day - half_window, pollinator_day + half_window

    overlap = max(0.0, min(bloom_end, poll_end) - max(bloom_start, poll_start))
    index = math.floor(overlap / OVERLAP_WINDOW_DAYS * 100 + 0.5)
    return max(0, min(100, index))


def _latest(records: Sequence[ClimateRecord]) -> ClimateRecord:
    return max(records, key=lambda record: record.year)


def latest_synchrony_index(records: Sequence[ClimateRecord]) -> int:
    """Synchrony index of the most recent year, 0 without any history."""
    if not records:
        return 0
    latest = _latest(records)
    return synchrony_index(latest.peak_bloom_day, latest.pollinator_peak_day)


def overlap_band(index: int) -> OverlapBand:
    if index > GOOD_OVERLAP_ABOVE:
        return OverlapBand.GOOD
    if index > FAIR_OVERLAP_ABOVE:
        return OverlapBand.FAIR
    return OverlapBand.POOR


def summarize_climate(records: Sequence[ClimateRecord]) -> ClimateSummary:
    if not records:
        return ClimateSummary(
            record_count=0,
            overlap_index=0,
            overlap_band=OverlapBand.POOR,
            avg_temp_shift=0.0,
            bloom_shift_days=0,
        )

    ordered = sorted(records, key=lambda record: record.year)
    first, latest = ordered[0], ordered[-1]
    index = synchrony_index(latest.peak_bloom_day, latest.pollinator_peak_day)
    return ClimateSummary(
        record_count=len(ordered),
        latest_year=latest.year,
        overlap_index=index,
        overlap_band=overlap_band(index),
        avg_temp_shift=round(latest.avg_temp - first.avg_temp, 1),
        bloom_shift_days=latest.peak_bloom_day - first.peak_bloom_day,
    )
