from abc import ABC, abstractmethod
from typing import List, Optional

from apps.goals.domain.entities import GoalEntity, MilestoneEntity


class IGoalRepository(ABC):
    @abstractmethod
    def load_latest_goal(self, user_id: int) -> Optional[GoalEntity]:
        """Aktywny (najnowszy) cel użytkownika albo None."""
        pass

    @abstractmethod
    def get_goal(self, user_id: int, goal_id: str) -> Optional[GoalEntity]:
        pass

    @abstractmethod
    def save_goal(self, goal: GoalEntity, user_id: int) -> GoalEntity:
        """
        Zapisuje cel razem z kamieniami milowymi i zwraca go z trwałymi ID.
        Zestaw kamieni jest ZASTĘPOWANY (delete + insert), nie scalany.
        """
        pass

    @abstractmethod
    def delete_milestones(self, goal_id: str) -> None:
        pass

    @abstractmethod
    def insert_milestones(self, goal_id: str, milestones: List[MilestoneEntity]) -> List[MilestoneEntity]:
        pass
