"""Encje: stan kamienia milowego, walidacja, ID."""
import pytest

from apps.core.domain.exceptions import NotFound, ValidationFailure
from apps.goals.domain.entities import (
    Completed, Difficulty, GoalCategory, MilestoneStatus, Pending, build_milestone,
    color_for_category, is_durable_id
)
from factories import NOW, at, make_goal, make_milestone


def test_durable_id_pattern():
    assert is_durable_id('3f2b8c1e-9a4d-4e2b-8f6a-1c2d3e4f5a6b')
    assert not is_durable_id('goal-1718000000000')
    assert not is_durable_id('temp-1')
    assert not is_durable_id('3F2B8C1E-9A4D-4E2B-8F6A-1C2D3E4F5A6B')
    assert not is_durable_id(None)
    assert not is_durable_id('')


def test_completed_state_always_has_full_progress_and_date():
    milestone = make_milestone('a', 2).complete(NOW)

    assert milestone.status == MilestoneStatus.COMPLETED
    assert milestone.progress == 100
    assert milestone.completed_date == NOW


def test_open_states_have_no_completion_date():
    milestone = make_milestone('a', 2)

    assert milestone.status == MilestoneStatus.PENDING
    assert milestone.completed_date is None
    assert milestone.progress == 0


def test_pending_progress_cannot_reach_100():
    with pytest.raises(ValidationFailure):
        Pending(progress=100)


def test_complete_twice_keeps_first_date():
    first = make_milestone('a', 2).complete(NOW)
    second = first.complete(at(3))

    assert second.completed_date == NOW
    assert second.progress == 100


def test_complete_returns_new_entity():
    original = make_milestone('a', 2)
    original.complete(NOW)

    assert original.status == MilestoneStatus.PENDING


def test_advance_progress_is_monotonic():
    milestone = make_milestone('a', 2).advance_progress(40, NOW)
    assert milestone.progress == 40

    with pytest.raises(ValidationFailure):
        milestone.advance_progress(30, NOW)


def test_advance_progress_to_100_completes():
    milestone = make_milestone('a', 2).advance_progress(60, NOW).advance_progress(100, NOW)

    assert milestone.is_completed()
    assert milestone.state == Completed(completed_at=NOW)


def test_mark_missed_keeps_progress():
    milestone = make_milestone('a', -1).advance_progress(20, NOW).mark_missed()

    assert milestone.status == MilestoneStatus.MISSED
    assert milestone.progress == 20


def test_completed_milestone_cannot_be_missed():
    with pytest.raises(ValidationFailure):
        make_milestone('a', -1, status='completed').mark_missed()


def test_reopen_does_not_touch_completed():
    done = make_milestone('a', -1, status='completed')
    assert done.reopen() is done

    reopened = make_milestone('b', -1, status='missed').reopen()
    assert reopened.status == MilestoneStatus.PENDING


@pytest.mark.parametrize("title,target_date", [("", NOW), ("   ", NOW), ("Draft", None)])
def test_build_milestone_rejects_missing_title_or_date(title, target_date):
    with pytest.raises(ValidationFailure):
        build_milestone(title, target_date)


def test_build_milestone_gets_temporary_id():
    milestone = build_milestone(" Draft chapter 1 ", NOW, difficulty='small')

    assert milestone.id.startswith('temp-')
    assert not is_durable_id(milestone.id)
    assert milestone.title == "Draft chapter 1"
    assert milestone.difficulty == Difficulty.SMALL
    assert milestone.status == MilestoneStatus.PENDING


def test_difficulty_weight_is_ordinal():
    weights = [d.weight for d in (Difficulty.MICRO, Difficulty.SMALL, Difficulty.MEDIUM, Difficulty.LARGE)]
    assert weights == [1, 2, 3, 4]


@pytest.mark.parametrize("category,color", [
    (GoalCategory.WORK, "hsl(220, 80%, 60%)"),
    (GoalCategory.STUDY, "hsl(280, 70%, 60%)"),
    (GoalCategory.HEALTH, "hsl(140, 70%, 50%)"),
    (GoalCategory.HOBBY, "hsl(250, 80%, 60%)"),
    (GoalCategory.FINANCE, "hsl(250, 80%, 60%)"),
    (GoalCategory.OTHER, "hsl(250, 80%, 60%)"),
])
def test_color_for_category(category, color):
    assert color_for_category(category) == color


def test_goal_validate():
    goal = make_goal()
    goal.validate()

    goal.start_date = at(30)
    with pytest.raises(ValidationFailure):
        goal.validate()

    goal = make_goal()
    goal.title = " "
    with pytest.raises(ValidationFailure):
        goal.validate()


def test_goal_index_of_unknown_milestone():
    goal = make_goal([make_milestone('a', 1)])

    assert goal.index_of('a') == 0
    with pytest.raises(NotFound):
        goal.index_of('nope')


def test_days_left():
    goal = make_goal()

    assert goal.days_left(NOW) == 20
    assert goal.days_left(at(25)) == -5
