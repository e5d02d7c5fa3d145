import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Union

from apps.core.domain.exceptions import NotFound, ValidationFailure

# Trwałe ID nadaje repozytorium (UUID4). Wszystko inne to ID tymczasowe.
DURABLE_ID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$'
)


def is_durable_id(value: Optional[str]) -> bool:
    return bool(value) and DURABLE_ID_PATTERN.match(value) is not None


def temporary_id(prefix: str = 'temp') -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class MilestoneStatus(str, Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    MISSED = 'missed'
    ADJUSTED = 'adjusted'


class Difficulty(str, Enum):
    MICRO = 'micro'
    SMALL = 'small'
    MEDIUM = 'medium'
    LARGE = 'large'

    @property
    def weight(self) -> int:
        """Waga wysiłku 1-4 (micro -> large)."""
        return list(Difficulty).index(self) + 1


class GoalCategory(str, Enum):
    WORK = 'WORK'
    STUDY = 'STUDY'
    HOBBY = 'HOBBY'
    HEALTH = 'HEALTH'
    FINANCE = 'FINANCE'
    OTHER = 'OTHER'


DEFAULT_COLOR = "hsl(250, 80%, 60%)"

CATEGORY_COLORS = {
    GoalCategory.WORK: "hsl(220, 80%, 60%)",
    GoalCategory.STUDY: "hsl(280, 70%, 60%)",
    GoalCategory.HEALTH: "hsl(140, 70%, 50%)",
}


def color_for_category(category: GoalCategory) -> str:
    return CATEGORY_COLORS.get(GoalCategory(category), DEFAULT_COLOR)


# --- Stan kamienia milowego ---
# Jeden wariant zamiast trzech niezależnych pól (status, completed_date, progress).
# Dzięki temu nie da się zbudować np. "completed" z progress < 100.

def _check_open_progress(progress: int):
    if not 0 <= progress < 100:
        raise ValidationFailure(f"Progress of an open milestone must be in 0-99, got {progress}")


@dataclass(frozen=True)
class Pending:
    progress: int = 0
    status = MilestoneStatus.PENDING
    completed_at = None

    def __post_init__(self):
        _check_open_progress(self.progress)


@dataclass(frozen=True)
class Completed:
    completed_at: datetime
    status = MilestoneStatus.COMPLETED
    progress = 100


@dataclass(frozen=True)
class Missed:
    progress: int = 0
    status = MilestoneStatus.MISSED
    completed_at = None

    def __post_init__(self):
        _check_open_progress(self.progress)


@dataclass(frozen=True)
class Adjusted:
    progress: int = 0
    status = MilestoneStatus.ADJUSTED
    completed_at = None

    def __post_init__(self):
        _check_open_progress(self.progress)


MilestoneState = Union[Pending, Completed, Missed, Adjusted]


@dataclass
class MilestoneEntity:
    id: Optional[str]
    title: str
    target_date: datetime
    description: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    state: MilestoneState = field(default_factory=Pending)

    @property
    def status(self) -> MilestoneStatus:
        return self.state.status

    @property
    def completed_date(self) -> Optional[datetime]:
        return self.state.completed_at

    @property
    def progress(self) -> int:
        return self.state.progress

    def is_completed(self) -> bool:
        return self.status == MilestoneStatus.COMPLETED

    # Przejścia stanów. Każde zwraca NOWĄ encję, oryginał zostaje nietknięty.

    def complete(self, now: datetime) -> 'MilestoneEntity':
        if self.is_completed():
            # Powtórne ukończenie nie nadpisuje daty
            return self
        return replace(self, state=Completed(completed_at=now))

    def reopen(self) -> 'MilestoneEntity':
        """Wraca do pending (np. po Extend). Ukończone zostają ukończone."""
        if self.is_completed() or self.status == MilestoneStatus.PENDING:
            return self
        return replace(self, state=Pending(progress=self.progress))

    def mark_missed(self) -> 'MilestoneEntity':
        if self.is_completed():
            raise ValidationFailure("A completed milestone cannot be marked as missed")
        return replace(self, state=Missed(progress=self.progress))

    def mark_adjusted(self) -> 'MilestoneEntity':
        if self.is_completed():
            raise ValidationFailure("A completed milestone cannot be marked as adjusted")
        return replace(self, state=Adjusted(progress=self.progress))

    def advance_progress(self, value: int, now: datetime) -> 'MilestoneEntity':
        if self.status != MilestoneStatus.PENDING:
            raise ValidationFailure("Only pending milestones can report progress")
        if value < self.progress:
            raise ValidationFailure(
                f"Progress cannot go back (current {self.progress}, got {value})"
            )
        if value >= 100:
            return self.complete(now)
        return replace(self, state=Pending(progress=value))

    def shifted(self, days: int) -> 'MilestoneEntity':
        return replace(self, target_date=self.target_date + timedelta(days=days))


def build_milestone(
        title: str,
        target_date: Optional[datetime],
        description: str = "",
        difficulty: Difficulty = Difficulty.MEDIUM,
        milestone_id: Optional[str] = None
) -> MilestoneEntity:
    """Tworzy nowy kamień milowy (pending, 0%) z tymczasowym ID."""
    if not title or not title.strip():
        raise ValidationFailure("Milestone title cannot be empty")
    if target_date is None:
        raise ValidationFailure("Milestone target date is required")

    return MilestoneEntity(
        id=milestone_id or temporary_id(),
        title=title.strip(),
        target_date=target_date,
        description=description or "",
        difficulty=Difficulty(difficulty),
    )


@dataclass
class GoalEntity:
    id: Optional[str]
    title: str
    start_date: datetime
    deadline: datetime
    category: GoalCategory = GoalCategory.OTHER
    description: str = ""
    # Kolejność zapisu ma znaczenie dla Extend. Kolejność wyświetlania -> TimelineService.
    milestones: List[MilestoneEntity] = field(default_factory=list)
    progress: int = 0  # 0-100, wyliczane przez ProgressAggregator
    color: str = DEFAULT_COLOR

    @property
    def is_durable(self) -> bool:
        return is_durable_id(self.id)

    def validate(self):
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationFailure("Goal title cannot be empty")
        if self.start_date > self.deadline:
            raise ValidationFailure("Goal start date must not be after its deadline")

    def index_of(self, milestone_id: str) -> int:
        for index, milestone in enumerate(self.milestones):
            if milestone.id == milestone_id:
                return index
        raise NotFound(f"Milestone {milestone_id} does not belong to goal {self.id}")

    def get_milestone(self, milestone_id: str) -> MilestoneEntity:
        return self.milestones[self.index_of(milestone_id)]

    def days_left(self, now: datetime) -> int:
        """Pełne dni do deadline'u (ujemne po terminie)."""
        return int((self.deadline - now) / timedelta(days=1))
