"""Demo accounts, goals and reminders for local development.

Seeding goes through the public :class:`RecordStore` API so the demo data
obeys the same validation and hashing as real sign-ups.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Optional

import structlog

from wellness.schemas import (
    GoalCreate,
    ProfilePatch,
    ProfileUpdate,
    RegisterRequest,
    ReminderCreate,
    ReminderUpdate,
)
from wellness.store import RecordStore
from wellness.time_utils import utc_now

logger = structlog.get_logger(__name__)

DEMO_PROVIDER_PASSWORD = "provider123"
DEMO_PATIENT_PASSWORD = "patient123"


def seed_demo_data(store: RecordStore, today: Optional[date] = None) -> Dict[str, str]:
    """Populate ``store`` with one provider and three linked patients.

    Returns a mapping of demo email to account id.
    """

    day = today or utc_now().date()
    iso_today = day.isoformat()

    def days_from_today(offset: int) -> str:
        return (day + timedelta(days=offset)).isoformat()

    provider = store.create_account(
        RegisterRequest(
            email="provider@wellness.com",
            password=DEMO_PROVIDER_PASSWORD,
            name="Dr. Sarah Johnson",
            role="provider",
            data_consent=True,
        )
    )

    patients = [
        (
            "david@example.com",
            "David Miller",
            ProfilePatch(
                date_of_birth="1985-06-15",
                allergies=["Penicillin", "Peanuts"],
                medications=["Aspirin 100mg"],
                blood_type="A+",
                emergency_contact="555-0123",
            ),
        ),
        (
            "emma@example.com",
            "Emma Wilson",
            ProfilePatch(
                date_of_birth="1990-03-22",
                allergies=[],
                medications=["Vitamin D"],
                blood_type="O+",
            ),
        ),
        (
            "james@example.com",
            "James Brown",
            ProfilePatch(
                date_of_birth="1978-11-08",
                allergies=["Sulfa drugs"],
                medications=["Metformin 500mg", "Lisinopril 10mg"],
                blood_type="B+",
            ),
        ),
    ]

    ids: Dict[str, str] = {provider.email: provider.id}
    for email, name, profile in patients:
        patient = store.create_account(
            RegisterRequest(
                email=email,
                password=DEMO_PATIENT_PASSWORD,
                name=name,
                role="patient",
                data_consent=True,
                provider_id=provider.id,
            )
        )
        store.update_account(patient.id, ProfileUpdate(profile=profile))
        ids[email] = patient.id

    david = ids["david@example.com"]
    emma = ids["emma@example.com"]
    james = ids["james@example.com"]

    goals = [
        (david, "steps", 8000, 6240, "steps"),
        (david, "water", 8, 6, "glasses"),
        (david, "sleep", 8, 7.5, "hours"),
        (david, "activeTime", 60, 45, "minutes"),
        (emma, "steps", 10000, 8500, "steps"),
        (emma, "water", 10, 8, "glasses"),
        (james, "steps", 6000, 2000, "steps"),
        (james, "sleep", 7, 5, "hours"),
    ]
    for owner, goal_type, target, progress, unit in goals:
        store.create_goal(
            owner,
            GoalCreate(
                goal_type=goal_type,
                target_value=target,
                progress_value=progress,
                unit=unit,
                date=iso_today,
            ),
        )

    reminders = [
        (david, "Annual blood test", "Fasting blood work at City Medical Center", 14, "checkup", None),
        (david, "Flu vaccination", "Get seasonal flu shot", 7, "vaccination", None),
        (emma, "Eye exam", "Annual vision check", 30, "checkup", None),
        (james, "A1C test", "Quarterly diabetes monitoring", -14, "checkup", "missed"),
        (james, "Cardiology follow-up", "Review heart health with Dr. Smith", 21, "checkup", None),
    ]
    for owner, title, description, offset, category, status in reminders:
        reminder = store.create_reminder(
            owner,
            ReminderCreate(
                title=title,
                description=description,
                due_date=days_from_today(offset),
                category=category,
            ),
        )
        if status is not None:
            store.update_reminder(reminder.id, ReminderUpdate(status=status))

    logger.info("demo_data_seeded", accounts=len(ids), goals=len(goals), reminders=len(reminders))
    return ids


__all__ = ["seed_demo_data", "DEMO_PATIENT_PASSWORD", "DEMO_PROVIDER_PASSWORD"]
