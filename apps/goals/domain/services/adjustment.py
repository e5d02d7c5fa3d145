from dataclasses import replace
from datetime import timedelta
from enum import Enum

from apps.core.ports.translator import ITranslator
from apps.goals.domain.entities import Difficulty, GoalEntity

EXTEND_SHIFT_DAYS = 5

INTENSIFIED_KEY = 'adjustment.intensified'


class AdjustmentMode(str, Enum):
    EXTEND = 'extend'
    SQUEEZE = 'squeeze'


class AdjustmentEngine:
    """
    Dwa tryby przeplanowania dla spóźnionego kamienia milowego:
    - EXTEND: przesuwa harmonogram (od wskazanego elementu) i deadline do przodu,
    - SQUEEZE: zostawia daty, ale podnosi wymagany wysiłek.

    Żaden z trybów nie jest idempotentny: ponowny Extend przesuwa daty jeszcze raz,
    ponowny Squeeze dokleja adnotację jeszcze raz.
    """

    def __init__(self, translator: ITranslator, shift_days: int = EXTEND_SHIFT_DAYS):
        self.translator = translator
        self.shift_days = shift_days

    def extend(self, goal: GoalEntity, milestone_id: str, shift_days: int = None) -> GoalEntity:
        days = self.shift_days if shift_days is None else shift_days

        # Pozycja w kolejności ZAPISU (bez sortowania po dacie)
        k = goal.index_of(milestone_id)

        milestones = list(goal.milestones)
        for i in range(k, len(milestones)):
            shifted = milestones[i].shifted(days)
            if i == k:
                # Spóźniony element znowu jest "do zrobienia"
                shifted = shifted.reopen()
            milestones[i] = shifted

        return replace(
            goal,
            milestones=milestones,
            deadline=goal.deadline + timedelta(days=days),
        )

    def squeeze(self, goal: GoalEntity, milestone_id: str) -> GoalEntity:
        k = goal.index_of(milestone_id)
        target = goal.milestones[k]

        annotation = self.translator.translate(INTENSIFIED_KEY)
        description = f"{target.description} {annotation}" if target.description else annotation

        milestones = list(goal.milestones)
        milestones[k] = replace(target, difficulty=Difficulty.LARGE, description=description)

        return replace(goal, milestones=milestones)

    def adjust(self, goal: GoalEntity, milestone_id: str, mode: AdjustmentMode) -> GoalEntity:
        if AdjustmentMode(mode) == AdjustmentMode.EXTEND:
            return self.extend(goal, milestone_id)
        return self.squeeze(goal, milestone_id)
