import math
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from apps.goals.domain.entities import GoalEntity, MilestoneEntity


class ProgressAggregator:
    def calculate(self, milestones: Iterable[MilestoneEntity]) -> int:
        """
        round(100 * ukończone / wszystkie), 0 dla pustej listy.
        Zaokrąglenie "half up" (12.5 -> 13), nie bankierskie.
        """
        milestones = list(milestones)
        total = len(milestones)
        if total == 0:
            return 0

        done = sum(1 for m in milestones if m.is_completed())
        return int(math.floor(100 * done / total + 0.5))

    def recalculate(self, goal: GoalEntity) -> GoalEntity:
        return replace(goal, progress=self.calculate(goal.milestones))

    def complete(self, goal: GoalEntity, milestone_id: str, now: datetime) -> GoalEntity:
        """
        Oznacza kamień milowy jako ukończony i przelicza postęp celu.
        NotFound (bez żadnej zmiany), jeśli ID nie należy do celu.
        """
        index = goal.index_of(milestone_id)

        milestones = list(goal.milestones)
        milestones[index] = milestones[index].complete(now)

        return self.recalculate(replace(goal, milestones=milestones))
