"""Provider-facing compliance classification for a single patient.

The label is a projection of the patient's goals and reminders for one
calendar day.  It is recomputed on every read and never stored.

Decision order, first match wins:

* any reminder with status ``missed`` -> ``missed-checkup``
* today's goals exist and fewer than half of them are complete
  -> ``needs-attention``
* otherwise -> ``on-track``

"Fewer than half" compares the completed count against ``total / 2`` using
real division, so exactly half complete is still ``on-track``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from wellness.schemas import ComplianceReport, ComplianceStatus, Goal, Reminder
from wellness.time_utils import DateLike, to_iso_date

ON_TRACK: ComplianceStatus = "on-track"
NEEDS_ATTENTION: ComplianceStatus = "needs-attention"
MISSED_CHECKUP: ComplianceStatus = "missed-checkup"


@dataclass(frozen=True)
class ComplianceResult:
    status: ComplianceStatus
    goals_completed: int
    total_goals: int
    pending_reminders: int
    missed_reminders: int

    def to_report(self) -> ComplianceReport:
        return ComplianceReport(
            status=self.status,
            goals_completed=self.goals_completed,
            total_goals=self.total_goals,
            pending_reminders=self.pending_reminders,
            missed_reminders=self.missed_reminders,
        )


def classify(
    goals: Iterable[Goal], reminders: Iterable[Reminder], today: DateLike
) -> ComplianceResult:
    """Classify a patient's compliance for ``today``."""

    day = to_iso_date(today)
    todays_goals = [goal for goal in goals if goal.date == day]
    completed = sum(1 for goal in todays_goals if goal.progress_value >= goal.target_value)

    pending = 0
    missed = 0
    for reminder in reminders:
        if reminder.status == "pending":
            pending += 1
        elif reminder.status == "missed":
            missed += 1

    total = len(todays_goals)
    if missed > 0:
        status = MISSED_CHECKUP
    elif total > 0 and completed < total / 2:
        status = NEEDS_ATTENTION
    else:
        status = ON_TRACK

    return ComplianceResult(
        status=status,
        goals_completed=completed,
        total_goals=total,
        pending_reminders=pending,
        missed_reminders=missed,
    )


__all__ = ["ComplianceResult", "classify", "ON_TRACK", "NEEDS_ATTENTION", "MISSED_CHECKUP"]
