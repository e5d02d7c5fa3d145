import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from apps.core.domain.exceptions import NotFound, ValidationFailure
from apps.goals.adapters.records import goal_from_record
from apps.goals.domain.entities import (
    Difficulty, GoalCategory, GoalEntity, MilestoneEntity, MilestoneStatus, build_milestone,
    color_for_category, temporary_id
)
from apps.goals.domain.services.adjustment import AdjustmentEngine, AdjustmentMode
from apps.goals.domain.services.progress import ProgressAggregator
from apps.goals.domain.services.timeline import TimelineService, is_late
from apps.goals.ports.repositories import IGoalRepository

logger = logging.getLogger(__name__)


def load_goal(repository: IGoalRepository, user_id: int, goal_id: str) -> GoalEntity:
    goal = repository.get_goal(user_id, goal_id)
    if goal is None:
        raise NotFound(f"Goal {goal_id} not found")
    return goal


@dataclass
class MilestoneInput:
    title: str
    target_date: Optional[datetime]
    description: str = ""
    difficulty: str = Difficulty.MEDIUM.value


@dataclass
class CreateGoalInput:
    user_id: int
    title: str
    start_date: datetime
    deadline: datetime
    category: str = GoalCategory.OTHER.value
    description: str = ""
    milestones: List[MilestoneInput] = field(default_factory=list)


class CreateGoalUseCase:
    def __init__(self, repository: IGoalRepository, timeline: TimelineService = None):
        self.repository = repository
        self.timeline = timeline or TimelineService()

    def execute(self, input_dto: CreateGoalInput) -> GoalEntity:
        try:
            category = GoalCategory(input_dto.category)
            milestones = [
                build_milestone(
                    title=m.title,
                    target_date=m.target_date,
                    description=m.description,
                    difficulty=Difficulty(m.difficulty),
                )
                for m in input_dto.milestones
            ]
        except ValueError as e:
            raise ValidationFailure(str(e)) from e

        goal = GoalEntity(
            id=temporary_id('goal'),
            title=(input_dto.title or "").strip(),
            description=input_dto.description or "",
            category=category,
            start_date=input_dto.start_date,
            deadline=input_dto.deadline,
            # Przy tworzeniu kolejność zapisu = kolejność dat
            milestones=self.timeline.sort_milestones(milestones),
            color=color_for_category(category),
        )
        goal.validate()

        saved = self.repository.save_goal(goal, input_dto.user_id)
        logger.info("Goal %s created with %d milestones", saved.id, len(saved.milestones))
        return saved


class CompleteMilestoneUseCase:
    def __init__(self, repository: IGoalRepository, aggregator: ProgressAggregator = None):
        self.repository = repository
        self.aggregator = aggregator or ProgressAggregator()

    def execute(self, user_id: int, goal_id: str, milestone_id: str, now: datetime) -> GoalEntity:
        goal = load_goal(self.repository, user_id, goal_id)
        updated = self.aggregator.complete(goal, milestone_id, now)

        saved = self.repository.save_goal(updated, user_id)
        logger.info("Milestone %s completed, goal %s at %d%%", milestone_id, goal_id, saved.progress)
        return saved


class AdjustMilestoneUseCase:
    """Extend / Squeeze - tylko dla spóźnionych i nieukończonych kamieni milowych."""

    def __init__(self, repository: IGoalRepository, engine: AdjustmentEngine):
        self.repository = repository
        self.engine = engine

    def execute(
            self,
            user_id: int,
            goal_id: str,
            milestone_id: str,
            mode: str,
            now: datetime
    ) -> GoalEntity:
        try:
            mode = AdjustmentMode(mode)
        except ValueError as e:
            raise ValidationFailure(f"Unknown adjustment mode: {mode!r}") from e

        goal = load_goal(self.repository, user_id, goal_id)
        milestone = goal.get_milestone(milestone_id)
        if not is_late(milestone, now):
            raise ValidationFailure(f"Milestone {milestone_id} is not behind schedule")

        updated = self.engine.adjust(goal, milestone_id, mode)

        saved = self.repository.save_goal(updated, user_id)
        logger.info("Goal %s adjusted (%s) from milestone %s", goal_id, mode.value, milestone_id)
        return saved


class ImportGoalUseCase:
    """Import dokumentu JSON (camelCase) - np. celu zapisanego wcześniej w przeglądarce."""

    def __init__(self, repository: IGoalRepository, aggregator: ProgressAggregator = None):
        self.repository = repository
        self.aggregator = aggregator or ProgressAggregator()

    def execute(self, user_id: int, record: Dict[str, Any]) -> GoalEntity:
        goal = goal_from_record(record)
        goal.validate()

        # Obcy dokument -> zawsze nowe rekordy; postęp liczymy sami
        milestones = [replace(m, id=temporary_id()) for m in goal.milestones]
        goal = self.aggregator.recalculate(replace(goal, id=temporary_id('goal'), milestones=milestones))

        saved = self.repository.save_goal(goal, user_id)
        logger.info("Goal %s imported with %d milestones", saved.id, len(saved.milestones))
        return saved


class MarkMilestoneUseCase:
    """
    Ręczna zmiana statusu przez użytkownika (missed / adjusted / pending).
    Sam system nigdy nie oznacza kamienia jako missed.
    Ukończenie idzie osobną ścieżką (CompleteMilestoneUseCase).
    """

    def __init__(self, repository: IGoalRepository):
        self.repository = repository

    def execute(self, user_id: int, goal_id: str, milestone_id: str, status: str) -> GoalEntity:
        try:
            status = MilestoneStatus(status)
        except ValueError as e:
            raise ValidationFailure(f"Unknown milestone status: {status!r}") from e

        transitions = {
            MilestoneStatus.MISSED: MilestoneEntity.mark_missed,
            MilestoneStatus.ADJUSTED: MilestoneEntity.mark_adjusted,
            MilestoneStatus.PENDING: MilestoneEntity.reopen,
        }
        if status not in transitions:
            raise ValidationFailure(f"Status '{status.value}' cannot be set by hand")

        goal = load_goal(self.repository, user_id, goal_id)
        index = goal.index_of(milestone_id)

        milestones = list(goal.milestones)
        milestones[index] = transitions[status](milestones[index])

        saved = self.repository.save_goal(replace(goal, milestones=milestones), user_id)
        logger.info("Milestone %s marked as %s", milestone_id, status.value)
        return saved


class ReportProgressUseCase:
    """Częściowy postęp kamienia (0-100). 100 = ukończenie."""

    def __init__(self, repository: IGoalRepository, aggregator: ProgressAggregator = None):
        self.repository = repository
        self.aggregator = aggregator or ProgressAggregator()

    def execute(
            self,
            user_id: int,
            goal_id: str,
            milestone_id: str,
            value,
            now: datetime
    ) -> GoalEntity:
        try:
            value = int(value)
        except (TypeError, ValueError) as e:
            raise ValidationFailure(f"Invalid progress value: {value!r}") from e
        if not 0 <= value <= 100:
            raise ValidationFailure(f"Progress must be in 0-100, got {value}")

        goal = load_goal(self.repository, user_id, goal_id)
        index = goal.index_of(milestone_id)

        milestones = list(goal.milestones)
        milestones[index] = milestones[index].advance_progress(value, now)
        updated = self.aggregator.recalculate(replace(goal, milestones=milestones))

        saved = self.repository.save_goal(updated, user_id)
        logger.info("Milestone %s progress %d%%, goal %s at %d%%", milestone_id, value, goal_id, saved.progress)
        return saved
