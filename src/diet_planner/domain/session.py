"""Planning session states, events and views.

A session is always in exactly one state. Each state maps to exactly one
view, so the form, loading indicator, error, questions, dashboard and
tracker can never be shown together.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from diet_planner.domain.plan import DietPlan
from diet_planner.domain.profile import UserProfile


class View(StrEnum):
    """What the client should render for a session."""

    FORM = "form"
    LOADING = "loading"
    ERROR = "error"
    QUESTIONS = "questions"
    DASHBOARD = "dashboard"
    TRACKER = "tracker"


@dataclass(frozen=True)
class Idle:
    """Nothing captured yet; show the profile form."""


@dataclass(frozen=True)
class Submitting:
    """A planner request is in flight."""

    profile: UserProfile
    stage: Literal["analyze", "finalize"]


@dataclass(frozen=True)
class AwaitingAnswers:
    """The planner asked clarifying questions."""

    profile: UserProfile
    questions: tuple[str, ...]


@dataclass(frozen=True)
class PlanReady:
    """A finished plan is on display."""

    profile: UserProfile
    plan: DietPlan


@dataclass(frozen=True)
class Failed:
    """The last planner request failed."""

    message: str


@dataclass(frozen=True)
class TrackerOpen:
    """The weight tracker is open."""


SessionState = Idle | Submitting | AwaitingAnswers | PlanReady | Failed | TrackerOpen


@dataclass(frozen=True)
class SubmitProfile:
    profile: UserProfile


@dataclass(frozen=True)
class SubmitAnswers:
    answers: dict[str, str]


@dataclass(frozen=True)
class QuestionsReceived:
    questions: tuple[str, ...]


@dataclass(frozen=True)
class PlanReceived:
    plan: DietPlan


@dataclass(frozen=True)
class RequestFailed:
    message: str


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class ToggleTracker:
    pass


SessionEvent = (
    SubmitProfile
    | SubmitAnswers
    | QuestionsReceived
    | PlanReceived
    | RequestFailed
    | Reset
    | ToggleTracker
)
