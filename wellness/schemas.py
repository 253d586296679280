"""Pydantic models for stored entities and inbound payloads.

Entities serialise with camelCase keys (``progressValue``, ``dueDate``) and
accept either spelling on input.  Inbound payload models carry the
human-readable messages that are surfaced verbatim on a 400 response.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wellness.time_utils import parse_iso_date

Role = Literal["patient", "provider"]
GoalType = Literal["steps", "water", "sleep", "activeTime"]
ReminderStatus = Literal["pending", "completed", "missed"]
ReminderCategory = Literal["checkup", "vaccination", "medication", "other"]
ComplianceStatus = Literal["on-track", "needs-attention", "missed-checkup"]
ContentCategory = Literal["covid", "flu", "mental-health", "nutrition", "exercise", "other"]
AuditAction = Literal[
    "login",
    "logout",
    "viewProfile",
    "updateProfile",
    "viewGoals",
    "createGoal",
    "updateGoal",
    "deleteGoal",
    "viewReminders",
    "createReminder",
    "updateReminder",
    "deleteReminder",
    "viewPatients",
    "viewPatientDetails",
]

# Integers stay integers in responses; 7.5 hours of sleep stays a float.
Number = Union[int, float]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_number(value: Any, message: str) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(message)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(message)
    return value


def _check_iso_date(value: Optional[str], message: str) -> Optional[str]:
    if value is None:
        return None
    try:
        return parse_iso_date(value).isoformat()
    except ValueError:
        raise ValueError(message) from None


class CamelModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------


class Profile(CamelModel):
    date_of_birth: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    emergency_contact: Optional[str] = None
    blood_type: Optional[str] = None

    @field_validator("allergies", "medications", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SafeAccount(CamelModel):
    """Account projection returned to clients; never carries the hash."""

    id: str
    email: str
    name: str
    role: Role
    profile: Profile = Field(default_factory=Profile)
    provider_id: Optional[str] = None
    data_consent: bool = False
    created_at: str
    updated_at: str


class Account(SafeAccount):
    password_hash: str

    def to_safe(self) -> SafeAccount:
        return SafeAccount.model_validate(self.model_dump(exclude={"password_hash"}))


class Goal(CamelModel):
    id: str
    user_id: str
    goal_type: GoalType
    target_value: Number
    progress_value: Number = 0
    unit: str
    date: str
    created_at: str
    updated_at: str

    @property
    def completed(self) -> bool:
        return self.progress_value >= self.target_value


class Reminder(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    due_date: str
    status: ReminderStatus = "pending"
    category: ReminderCategory = "other"
    created_at: str
    updated_at: str


class AuditEntry(CamelModel):
    id: str
    user_id: str
    action: AuditAction
    target_resource: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    timestamp: str
    ip_address: Optional[str] = None


# ---------------------------------------------------------------------------
# Inbound payloads
# ---------------------------------------------------------------------------


class RegisterRequest(CamelModel):
    email: str
    password: str
    name: str
    role: Role
    data_consent: bool = Field(default=False, validate_default=True)
    provider_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        value = value.strip()
        if not _EMAIL_RE.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        return value

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    # Only a literal JSON true counts as consent.
    @field_validator("data_consent", mode="before")
    @classmethod
    def _consent_given(cls, value: Any) -> Any:
        if value is not True:
            raise ValueError("You must consent to data usage to register")
        return value


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        value = value.strip()
        if not _EMAIL_RE.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("password")
    @classmethod
    def _password_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class ProfilePatch(CamelModel):
    date_of_birth: Optional[str] = None
    allergies: Optional[List[str]] = None
    medications: Optional[List[str]] = None
    emergency_contact: Optional[str] = None
    blood_type: Optional[str] = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("date_of_birth")
    @classmethod
    def _valid_birth_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_iso_date(value, "Date of birth must be a valid date (YYYY-MM-DD)")


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    profile: Optional[ProfilePatch] = None

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value


class GoalCreate(CamelModel):
    goal_type: GoalType
    target_value: Number
    progress_value: Number = 0
    unit: str
    date: Optional[str] = None

    @field_validator("target_value", mode="before")
    @classmethod
    def _positive_target(cls, value: Any) -> Any:
        value = _check_number(value, "Target must be a positive number")
        if value <= 0:
            raise ValueError("Target must be a positive number")
        return value

    @field_validator("progress_value", mode="before")
    @classmethod
    def _non_negative_progress(cls, value: Any) -> Any:
        value = _check_number(value, "Progress must be zero or greater")
        if value < 0:
            raise ValueError("Progress must be zero or greater")
        return value

    @field_validator("date")
    @classmethod
    def _valid_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_iso_date(value, "Date must be a valid date (YYYY-MM-DD)")


class GoalUpdate(CamelModel):
    progress_value: Number

    @field_validator("progress_value", mode="before")
    @classmethod
    def _non_negative_progress(cls, value: Any) -> Any:
        value = _check_number(value, "Progress must be zero or greater")
        if value < 0:
            raise ValueError("Progress must be zero or greater")
        return value


class ReminderCreate(CamelModel):
    title: str
    description: Optional[str] = None
    due_date: str
    category: ReminderCategory = "other"

    @field_validator("title")
    @classmethod
    def _title_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("due_date")
    @classmethod
    def _valid_due_date(cls, value: str) -> str:
        return _check_iso_date(value, "Due date must be a valid date (YYYY-MM-DD)")


class ReminderUpdate(CamelModel):
    """Fields a reminder owner may change; identity fields are not listed."""

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[ReminderStatus] = None
    category: Optional[ReminderCategory] = None

    @field_validator("title")
    @classmethod
    def _title_present(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("due_date")
    @classmethod
    def _valid_due_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_iso_date(value, "Due date must be a valid date (YYYY-MM-DD)")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class AuthResponse(CamelModel):
    user: SafeAccount
    token: str


class PatientSummary(CamelModel):
    id: str
    name: str
    email: str
    last_activity: Optional[str] = None
    compliance_status: ComplianceStatus
    goals_completed: int
    total_goals: int
    upcoming_reminders: int
    missed_reminders: int


class ComplianceReport(CamelModel):
    status: ComplianceStatus
    goals_completed: int
    total_goals: int
    pending_reminders: int
    missed_reminders: int


class PatientDetails(CamelModel):
    id: str
    name: str
    email: str
    goals: List[Goal]
    reminders: List[Reminder]
    profile: Profile
    compliance: ComplianceReport


class HealthTip(CamelModel):
    id: str
    tip: str
    category: str
    icon: str


class PublicContent(CamelModel):
    id: str
    title: str
    summary: str
    body: str
    category: ContentCategory
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    published_at: str
    updated_at: str


__all__ = [
    "Account",
    "AuditAction",
    "AuditEntry",
    "AuthResponse",
    "ComplianceReport",
    "ComplianceStatus",
    "Goal",
    "GoalCreate",
    "GoalType",
    "GoalUpdate",
    "HealthTip",
    "LoginRequest",
    "PatientDetails",
    "PatientSummary",
    "Profile",
    "ProfilePatch",
    "ProfileUpdate",
    "PublicContent",
    "RegisterRequest",
    "Reminder",
    "ReminderCreate",
    "ReminderUpdate",
    "Role",
    "SafeAccount",
]
