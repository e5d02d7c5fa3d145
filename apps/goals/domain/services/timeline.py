from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from apps.goals.domain.entities import GoalEntity, MilestoneEntity, MilestoneStatus


def is_late(milestone: MilestoneEntity, now: datetime) -> bool:
    """
    Czy kamień milowy jest "spóźniony" (tylko do wyświetlania).
    To NIE jest status - pending może być jednocześnie late.
    Przejście w MISSED decyduje wywołujący (mark_missed).
    """
    return now > milestone.target_date and milestone.status != MilestoneStatus.COMPLETED


@dataclass
class TimelineEntry:
    milestone: MilestoneEntity
    is_late: bool = False
    is_current: bool = False


@dataclass
class Timeline:
    entries: List[TimelineEntry] = field(default_factory=list)
    current: Optional[MilestoneEntity] = None

    @property
    def late_count(self) -> int:
        return sum(1 for e in self.entries if e.is_late)

    @property
    def completed_count(self) -> int:
        return sum(1 for e in self.entries if e.milestone.is_completed())

    @property
    def remaining_effort(self) -> int:
        """Suma wag trudności (1-4) nieukończonych kamieni."""
        return sum(e.milestone.difficulty.weight for e in self.entries if not e.milestone.is_completed())


class TimelineService:
    def sort_milestones(self, milestones: Iterable[MilestoneEntity]) -> List[MilestoneEntity]:
        # sorted() jest stabilny -> równe daty zachowują kolejność wejściową
        return sorted(milestones, key=lambda m: m.target_date)

    def find_current(self, milestones: Iterable[MilestoneEntity]) -> Optional[MilestoneEntity]:
        """Pierwszy pending w kolejności dat ("dzisiejszy fokus") albo None."""
        for milestone in self.sort_milestones(milestones):
            if milestone.status == MilestoneStatus.PENDING:
                return milestone
        return None

    def build_timeline(self, goal: GoalEntity, now: datetime) -> Timeline:
        ordered = self.sort_milestones(goal.milestones)
        current = self.find_current(ordered)

        entries = [
            TimelineEntry(
                milestone=m,
                is_late=is_late(m, now),
                is_current=current is not None and m.id == current.id,
            )
            for m in ordered
        ]
        return Timeline(entries=entries, current=current)
