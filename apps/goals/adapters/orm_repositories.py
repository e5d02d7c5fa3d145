import logging
import uuid
from dataclasses import replace
from typing import List, Optional

from django.db import DatabaseError, transaction

from apps.core.domain.exceptions import RepositoryFailure
from apps.goals.adapters.records import goal_from_row, goal_to_row, milestone_from_row, milestone_to_row
from apps.goals.domain.entities import GoalEntity, MilestoneEntity, is_durable_id
from apps.goals.models import Goal as GoalModel, Milestone as MilestoneModel
from apps.goals.ports.repositories import IGoalRepository

logger = logging.getLogger(__name__)


class DjangoGoalRepository(IGoalRepository):
    def milestone_to_entity(self, model: MilestoneModel) -> MilestoneEntity:
        return milestone_from_row({
            'id': str(model.id),
            'title': model.title,
            'description': model.description,
            'target_date': model.target_date,
            'completed_date': model.completed_date,
            'status': model.status,
            'difficulty': model.difficulty,
            'progress': model.progress,
        })

    def to_entity(self, model: GoalModel) -> GoalEntity:
        """Konwertuje Model Django -> Czystą Encję (razem z kamieniami, w kolejności zapisu)."""
        milestones = [self.milestone_to_entity(m) for m in model.milestones.all()]
        return goal_from_row({
            'id': str(model.id),
            'title': model.title,
            'description': model.description,
            'category': model.category,
            'start_date': model.start_date,
            'deadline': model.deadline,
            'progress': model.progress,
            'color': model.color,
        }, milestones)

    def load_latest_goal(self, user_id: int) -> Optional[GoalEntity]:
        try:
            model = GoalModel.objects.filter(user_id=user_id) \
                .prefetch_related('milestones') \
                .order_by('-created_at') \
                .first()
        except DatabaseError as e:
            logger.exception("Loading latest goal of user %s failed", user_id)
            raise RepositoryFailure("Could not load goal", cause=e) from e

        return self.to_entity(model) if model else None

    def get_goal(self, user_id: int, goal_id: str) -> Optional[GoalEntity]:
        if not is_durable_id(goal_id):
            return None
        try:
            model = GoalModel.objects.prefetch_related('milestones').get(id=goal_id, user_id=user_id)
        except GoalModel.DoesNotExist:
            return None
        except DatabaseError as e:
            logger.exception("Loading goal %s failed", goal_id)
            raise RepositoryFailure("Could not load goal", cause=e) from e
        return self.to_entity(model)

    def save_goal(self, goal: GoalEntity, user_id: int) -> GoalEntity:
        data = goal_to_row(goal)
        del data['id']

        try:
            with transaction.atomic():
                if goal.is_durable:
                    # Aktualizacja istniejącego
                    obj, _ = GoalModel.objects.update_or_create(id=goal.id, user_id=user_id, defaults=data)
                else:
                    # Tymczasowe ID (np. "goal-123") -> nowy rekord z UUID
                    obj = GoalModel.objects.create(id=uuid.uuid4(), user_id=user_id, **data)

                goal_id = str(obj.id)
                self.delete_milestones(goal_id)
                milestones = self.insert_milestones(goal_id, goal.milestones)
        except DatabaseError as e:
            logger.exception("Saving goal %s failed", goal.id)
            raise RepositoryFailure("Could not save goal", cause=e) from e

        logger.debug("Saved goal %s with %d milestones", goal_id, len(milestones))
        return replace(goal, id=goal_id, milestones=milestones)

    def delete_milestones(self, goal_id: str) -> None:
        MilestoneModel.objects.filter(goal_id=goal_id).delete()

    def insert_milestones(self, goal_id: str, milestones: List[MilestoneEntity]) -> List[MilestoneEntity]:
        to_create = []
        saved = []
        for position, milestone in enumerate(milestones):
            # ID tymczasowe ("temp-...") zastępujemy trwałym
            milestone_id = milestone.id if is_durable_id(milestone.id) else str(uuid.uuid4())
            row = milestone_to_row(milestone)
            row['id'] = milestone_id

            to_create.append(MilestoneModel(goal_id=goal_id, position=position, **row))
            saved.append(replace(milestone, id=milestone_id))

        # Bulk insert dla wydajności
        MilestoneModel.objects.bulk_create(to_create)
        return saved
