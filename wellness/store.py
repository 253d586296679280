"""In-memory record store for accounts, goals, reminders and the audit log.

One :class:`RecordStore` is built per application (see
:func:`wellness.main.create_app`) and reached from handlers through the
:func:`get_store` dependency, so every test can run against its own store.

Every method completes without awaiting, which makes it atomic with respect
to the event loop.  Handlers that read a record, await, then write it back
can still interleave with another request; the later write wins.

Records are returned as deep copies.  Mutating a returned model never
changes stored state.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional

import structlog
from fastapi import Request

from wellness.auth import hash_password
from wellness.compliance import classify
from wellness.errors import ValidationFailed
from wellness.schemas import (
    Account,
    AuditAction,
    AuditEntry,
    Goal,
    GoalCreate,
    GoalUpdate,
    PatientDetails,
    PatientSummary,
    Profile,
    ProfileUpdate,
    RegisterRequest,
    Reminder,
    ReminderCreate,
    ReminderUpdate,
    SafeAccount,
)
from wellness.time_utils import DateLike, utc_timestamp, utc_today

logger = structlog.get_logger(__name__)

# Reminder fields that may be cleared by sending ``null``; the rest ignore it.
_NULLABLE_REMINDER_FIELDS = {"description"}


def _new_id() -> str:
    return str(uuid.uuid4())


class RecordStore:
    """Key-based CRUD over the four entity collections."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}
        self._goals: Dict[str, Goal] = {}
        self._reminders: Dict[str, Reminder] = {}
        self._audit_log: Dict[str, AuditEntry] = {}

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def create_account(self, payload: RegisterRequest) -> Account:
        """Register a new account, hashing the supplied password.

        Raises :class:`ValidationFailed` when the email is already taken
        (case-insensitive) or when the provider link is not acceptable.
        """

        if self._find_account_by_email(payload.email) is not None:
            raise ValidationFailed("Email already registered")

        if payload.provider_id is not None:
            if payload.role != "patient":
                raise ValidationFailed("Only patients can be linked to a provider")
            provider = self._accounts.get(payload.provider_id)
            if provider is None or provider.role != "provider":
                raise ValidationFailed("Provider not found")

        now = utc_timestamp()
        account = Account(
            id=_new_id(),
            email=payload.email,
            password_hash=hash_password(payload.password),
            name=payload.name,
            role=payload.role,
            profile=Profile(),
            provider_id=payload.provider_id,
            data_consent=payload.data_consent,
            created_at=now,
            updated_at=now,
        )
        self._accounts[account.id] = account
        logger.info("account_registered", account_id=account.id, role=account.role)
        return account.model_copy(deep=True)

    def get_account(self, account_id: str) -> Optional[Account]:
        account = self._accounts.get(account_id)
        return account.model_copy(deep=True) if account else None

    def get_account_by_email(self, email: str) -> Optional[Account]:
        account = self._find_account_by_email(email)
        return account.model_copy(deep=True) if account else None

    def get_safe_account(self, account_id: str) -> Optional[SafeAccount]:
        account = self._accounts.get(account_id)
        return account.to_safe() if account else None

    def update_account(self, account_id: str, update: ProfileUpdate) -> Optional[SafeAccount]:
        """Merge a profile update into the account.

        Only keys present in the payload replace stored profile values.
        """

        account = self._accounts.get(account_id)
        if account is None:
            return None

        changes: Dict[str, Any] = {"updated_at": utc_timestamp()}
        if update.name:
            changes["name"] = update.name
        if update.profile is not None:
            merged = account.profile.model_dump()
            merged.update(update.profile.model_dump(exclude_unset=True))
            changes["profile"] = Profile.model_validate(merged)

        updated = account.model_copy(update=changes)
        self._accounts[account_id] = updated
        return updated.to_safe()

    def list_patients_for_provider(self, provider_id: str) -> List[Account]:
        return [
            account.model_copy(deep=True)
            for account in self._accounts.values()
            if account.role == "patient" and account.provider_id == provider_id
        ]

    def _find_account_by_email(self, email: str) -> Optional[Account]:
        needle = email.strip().lower()
        for account in self._accounts.values():
            if account.email.lower() == needle:
                return account
        return None

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def create_goal(self, owner_id: str, payload: GoalCreate) -> Goal:
        now = utc_timestamp()
        goal = Goal(
            id=_new_id(),
            user_id=owner_id,
            goal_type=payload.goal_type,
            target_value=payload.target_value,
            progress_value=payload.progress_value or 0,
            unit=payload.unit,
            date=payload.date or utc_today(),
            created_at=now,
            updated_at=now,
        )
        self._goals[goal.id] = goal
        return goal.model_copy(deep=True)

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        goal = self._goals.get(goal_id)
        return goal.model_copy(deep=True) if goal else None

    def list_goals(self, owner_id: str) -> List[Goal]:
        """Return the owner's goals, most recent date first."""

        goals = [goal for goal in self._goals.values() if goal.user_id == owner_id]
        goals.sort(key=lambda goal: goal.date, reverse=True)
        return [goal.model_copy(deep=True) for goal in goals]

    def update_goal(self, goal_id: str, update: GoalUpdate) -> Optional[Goal]:
        goal = self._goals.get(goal_id)
        if goal is None:
            return None
        updated = goal.model_copy(
            update={"progress_value": update.progress_value, "updated_at": utc_timestamp()}
        )
        self._goals[goal_id] = updated
        return updated.model_copy(deep=True)

    def delete_goal(self, goal_id: str) -> bool:
        return self._goals.pop(goal_id, None) is not None

    # ------------------------------------------------------------------
    # Reminders
    # ------------------------------------------------------------------

    def create_reminder(self, owner_id: str, payload: ReminderCreate) -> Reminder:
        now = utc_timestamp()
        reminder = Reminder(
            id=_new_id(),
            user_id=owner_id,
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
            status="pending",
            category=payload.category or "other",
            created_at=now,
            updated_at=now,
        )
        self._reminders[reminder.id] = reminder
        return reminder.model_copy(deep=True)

    def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        reminder = self._reminders.get(reminder_id)
        return reminder.model_copy(deep=True) if reminder else None

    def list_reminders(self, owner_id: str) -> List[Reminder]:
        """Return the owner's reminders, earliest due date first."""

        reminders = [r for r in self._reminders.values() if r.user_id == owner_id]
        reminders.sort(key=lambda reminder: reminder.due_date)
        return [reminder.model_copy(deep=True) for reminder in reminders]

    def update_reminder(self, reminder_id: str, update: ReminderUpdate) -> Optional[Reminder]:
        reminder = self._reminders.get(reminder_id)
        if reminder is None:
            return None
        changes = {
            key: value
            for key, value in update.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_REMINDER_FIELDS
        }
        changes["updated_at"] = utc_timestamp()
        updated = reminder.model_copy(update=changes)
        self._reminders[reminder_id] = updated
        return updated.model_copy(deep=True)

    def delete_reminder(self, reminder_id: str) -> bool:
        return self._reminders.pop(reminder_id, None) is not None

    # ------------------------------------------------------------------
    # Audit log
    # ------------------------------------------------------------------

    def append_audit(
        self,
        user_id: str,
        action: AuditAction,
        *,
        target_resource: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> AuditEntry:
        entry = AuditEntry(
            id=_new_id(),
            user_id=user_id,
            action=action,
            target_resource=target_resource,
            metadata=dict(metadata) if metadata else None,
            timestamp=utc_timestamp(),
            ip_address=ip_address,
        )
        self._audit_log[entry.id] = entry
        return entry.model_copy(deep=True)

    def list_audit(self, user_id: str) -> List[AuditEntry]:
        """Return the actor's audit entries, newest first."""

        entries = [e for e in self._audit_log.values() if e.user_id == user_id]
        entries.reverse()
        return [entry.model_copy(deep=True) for entry in entries]

    # ------------------------------------------------------------------
    # Provider projections
    # ------------------------------------------------------------------

    def patient_summaries(self, provider_id: str, today: DateLike) -> List[PatientSummary]:
        summaries: List[PatientSummary] = []
        for patient in self.list_patients_for_provider(provider_id):
            result = classify(
                self.list_goals(patient.id), self.list_reminders(patient.id), today
            )
            summaries.append(
                PatientSummary(
                    id=patient.id,
                    name=patient.name,
                    email=patient.email,
                    last_activity=patient.updated_at,
                    compliance_status=result.status,
                    goals_completed=result.goals_completed,
                    total_goals=result.total_goals,
                    upcoming_reminders=result.pending_reminders,
                    missed_reminders=result.missed_reminders,
                )
            )
        return summaries

    def patient_details(self, patient_id: str, today: DateLike) -> Optional[PatientDetails]:
        patient = self._accounts.get(patient_id)
        if patient is None or patient.role != "patient":
            return None
        goals = self.list_goals(patient_id)
        reminders = self.list_reminders(patient_id)
        return PatientDetails(
            id=patient.id,
            name=patient.name,
            email=patient.email,
            goals=goals,
            reminders=reminders,
            profile=patient.profile.model_copy(deep=True),
            compliance=classify(goals, reminders, today).to_report(),
        )


def get_store(request: Request) -> RecordStore:
    """FastAPI dependency returning the application's record store."""

    return request.app.state.store


__all__ = ["RecordStore", "get_store"]
