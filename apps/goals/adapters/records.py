"""
Mapowanie rekordów <-> encje.

Dwa formaty po stronie zapisu:
- wiersze snake_case (ORM, eksport do bazy),
- dokument camelCase (JSON z przeglądarki: {"startDate": ..., "milestones": [...]}).

Każde pole jest wymienione jawnie. Żadnego automatycznego przepisywania nazw.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz
from dateutil.parser import isoparse

from apps.core.domain.exceptions import ValidationFailure
from apps.goals.domain.entities import (
    Adjusted, Completed, Difficulty, GoalCategory, GoalEntity, MilestoneEntity,
    MilestoneState, MilestoneStatus, Missed, Pending, color_for_category
)

# (snake_case, camelCase)
MILESTONE_FIELDS = [
    ('id', 'id'),
    ('title', 'title'),
    ('description', 'description'),
    ('target_date', 'targetDate'),
    ('completed_date', 'completedDate'),
    ('status', 'status'),
    ('difficulty', 'difficulty'),
    ('progress', 'progress'),
]

GOAL_FIELDS = [
    ('id', 'id'),
    ('title', 'title'),
    ('description', 'description'),
    ('category', 'category'),
    ('start_date', 'startDate'),
    ('deadline', 'deadline'),
    ('progress', 'progress'),
    ('color', 'color'),
]


def snake_to_camel(row: Dict[str, Any], fields) -> Dict[str, Any]:
    return {camel: row[snake] for snake, camel in fields if snake in row}


def camel_to_snake(record: Dict[str, Any], fields) -> Dict[str, Any]:
    return {snake: record[camel] for snake, camel in fields if camel in record}


# --- Daty ---

def parse_datetime(value) -> Optional[datetime]:
    """ISO string / datetime -> aware datetime (naive traktujemy jako UTC)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        raise ValidationFailure(f"Invalid date: {value!r}")
    else:
        try:
            parsed = isoparse(value)
        except (TypeError, ValueError) as e:
            raise ValidationFailure(f"Invalid date: {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=pytz.UTC)
    return parsed


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(pytz.UTC).isoformat().replace('+00:00', 'Z')


# --- Wartości z obcego dokumentu ---

def parse_int(value, name: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValidationFailure(f"Invalid {name}: {value!r}") from e


def parse_text(value, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationFailure(f"{name} must be a string, got {value!r}")
    return value


# --- Stan kamienia milowego ---

def state_from_fields(status, progress, completed_date) -> MilestoneState:
    try:
        status = MilestoneStatus(status or MilestoneStatus.PENDING)
    except ValueError as e:
        raise ValidationFailure(f"Unknown milestone status: {status!r}") from e
    progress = parse_int(progress, 'milestone progress')

    if status == MilestoneStatus.COMPLETED:
        if completed_date is None:
            raise ValidationFailure("Completed milestone without completion date")
        return Completed(completed_at=completed_date)

    if completed_date is not None:
        raise ValidationFailure(f"Milestone in status '{status.value}' cannot have a completion date")

    # Postęp otwartego kamienia nie może dojść do 100
    progress = min(progress, 99)
    if status == MilestoneStatus.MISSED:
        return Missed(progress=progress)
    if status == MilestoneStatus.ADJUSTED:
        return Adjusted(progress=progress)
    return Pending(progress=progress)


# --- snake_case ---

def milestone_to_row(milestone: MilestoneEntity) -> Dict[str, Any]:
    return {
        'id': milestone.id,
        'title': milestone.title,
        'description': milestone.description,
        'target_date': milestone.target_date,
        'completed_date': milestone.completed_date,
        'status': milestone.status.value,
        'difficulty': milestone.difficulty.value,
        'progress': milestone.progress,
    }


def milestone_from_row(row: Dict[str, Any]) -> MilestoneEntity:
    title = parse_text(row.get('title'), 'Milestone title')
    target_date = parse_datetime(row.get('target_date'))
    if not title or target_date is None:
        raise ValidationFailure("Milestone record needs a title and a target date")

    try:
        difficulty = Difficulty(row.get('difficulty') or Difficulty.MEDIUM)
    except ValueError as e:
        raise ValidationFailure(f"Unknown difficulty: {row.get('difficulty')!r}") from e

    return MilestoneEntity(
        id=str(row['id']) if row.get('id') is not None else None,
        title=title,
        description=parse_text(row.get('description'), 'Milestone description'),
        target_date=target_date,
        difficulty=difficulty,
        state=state_from_fields(
            row.get('status'),
            row.get('progress'),
            parse_datetime(row.get('completed_date')),
        ),
    )


def goal_to_row(goal: GoalEntity) -> Dict[str, Any]:
    """Bez kamieni milowych (osobna tabela)."""
    return {
        'id': goal.id,
        'title': goal.title,
        'description': goal.description,
        'category': goal.category.value,
        'start_date': goal.start_date,
        'deadline': goal.deadline,
        'progress': goal.progress,
        'color': goal.color,
    }


def goal_from_row(row: Dict[str, Any], milestones: List[MilestoneEntity]) -> GoalEntity:
    try:
        category = GoalCategory(row.get('category') or GoalCategory.OTHER)
    except ValueError as e:
        raise ValidationFailure(f"Unknown category: {row.get('category')!r}") from e

    start_date = parse_datetime(row.get('start_date'))
    deadline = parse_datetime(row.get('deadline'))
    if start_date is None or deadline is None:
        raise ValidationFailure("Goal record needs a start date and a deadline")

    return GoalEntity(
        id=str(row['id']) if row.get('id') is not None else None,
        title=parse_text(row.get('title'), 'Goal title'),
        description=parse_text(row.get('description'), 'Goal description'),
        category=category,
        start_date=start_date,
        deadline=deadline,
        milestones=milestones,
        progress=parse_int(row.get('progress'), 'goal progress'),
        color=parse_text(row.get('color'), 'Goal color') or color_for_category(category),
    )


# --- camelCase (dokument JSON) ---

def milestone_to_record(milestone: MilestoneEntity) -> Dict[str, Any]:
    row = milestone_to_row(milestone)
    row['target_date'] = format_datetime(row['target_date'])
    row['completed_date'] = format_datetime(row['completed_date'])
    if row['completed_date'] is None:
        del row['completed_date']
    return snake_to_camel(row, MILESTONE_FIELDS)


def milestone_from_record(record: Dict[str, Any]) -> MilestoneEntity:
    return milestone_from_row(camel_to_snake(record, MILESTONE_FIELDS))


def goal_to_record(goal: GoalEntity) -> Dict[str, Any]:
    row = goal_to_row(goal)
    row['start_date'] = format_datetime(row['start_date'])
    row['deadline'] = format_datetime(row['deadline'])
    record = snake_to_camel(row, GOAL_FIELDS)
    record['milestones'] = [milestone_to_record(m) for m in goal.milestones]
    return record


def goal_from_record(record: Dict[str, Any]) -> GoalEntity:
    if not isinstance(record, dict):
        raise ValidationFailure("Goal record must be a JSON object")
    items = record.get('milestones') or []
    if not isinstance(items, list) or not all(isinstance(m, dict) for m in items):
        raise ValidationFailure("Goal milestones must be a list of JSON objects")
    milestones = [milestone_from_record(m) for m in items]
    return goal_from_row(camel_to_snake(record, GOAL_FIELDS), milestones)
