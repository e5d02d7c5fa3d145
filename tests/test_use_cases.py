"""Use case'y na repozytoriach w pamięci."""
import logging
from datetime import timedelta

import pytest

from apps.core.application.use_cases import RecordLoginUseCase, SetupProfileInput, SetupProfileUseCase
from apps.core.domain.entities import PersonalityType, UserProfileEntity
from apps.core.domain.exceptions import NotFound, RepositoryFailure, ValidationFailure
from apps.goals.application.use_cases import (
    AdjustMilestoneUseCase, CompleteMilestoneUseCase, CreateGoalInput, CreateGoalUseCase,
    ImportGoalUseCase, MarkMilestoneUseCase, MilestoneInput, ReportProgressUseCase
)
from apps.goals.domain.entities import Difficulty, MilestoneStatus, is_durable_id
from apps.goals.domain.services.adjustment import AdjustmentEngine
from apps.notifications.application.use_cases import SendProgressUpdateInput, SendProgressUpdateUseCase
from factories import (
    NOW, TODAY, FakeTranslator, InMemoryGoalRepository, InMemoryProfileRepository,
    RecordingNotifier, at, make_goal, make_milestone
)
from test_records import GOAL_RECORD

USER = 1


def stored_goal(repo, milestones):
    return repo.save_goal(make_goal(milestones), USER)


# --- Tworzenie celu ---

def test_create_goal_assigns_durable_ids_and_sorts_milestones():
    repo = InMemoryGoalRepository()
    input_dto = CreateGoalInput(
        user_id=USER,
        title="  Pass JLPT N3 ",
        category='STUDY',
        start_date=at(0),
        deadline=at(30),
        milestones=[
            MilestoneInput(title="Mock exam", target_date=at(20), difficulty='large'),
            MilestoneInput(title="Kanji 300", target_date=at(5)),
        ],
    )

    goal = CreateGoalUseCase(repo).execute(input_dto)

    assert is_durable_id(goal.id)
    assert goal.title == "Pass JLPT N3"
    assert goal.color == "hsl(280, 70%, 60%)"
    assert goal.progress == 0
    assert [m.title for m in goal.milestones] == ["Kanji 300", "Mock exam"]
    assert all(is_durable_id(m.id) for m in goal.milestones)
    assert goal.milestones[1].difficulty == Difficulty.LARGE


@pytest.mark.parametrize("changes", [
    {'title': ''},
    {'start_date': at(40)},
    {'category': 'SPORT'},
    {'milestones': [MilestoneInput(title="", target_date=at(3))]},
    {'milestones': [MilestoneInput(title="No date", target_date=None)]},
])
def test_create_goal_validation(changes):
    repo = InMemoryGoalRepository()
    fields = dict(user_id=USER, title="Goal", start_date=at(0), deadline=at(30))
    fields.update(changes)

    with pytest.raises(ValidationFailure):
        CreateGoalUseCase(repo).execute(CreateGoalInput(**fields))

    assert repo.saved == []


# --- Ukończenie ---

def test_complete_milestone_persists_progress():
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', 2), make_milestone('b', -5, status='completed')])
    target_id = goal.milestones[0].id

    updated = CompleteMilestoneUseCase(repo).execute(USER, goal.id, target_id, NOW)

    assert updated.progress == 100
    assert repo.get_goal(USER, goal.id).get_milestone(target_id).status == MilestoneStatus.COMPLETED


def test_complete_milestone_unknown_goal_or_milestone():
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', 2)])
    saves = len(repo.saved)

    with pytest.raises(NotFound):
        CompleteMilestoneUseCase(repo).execute(USER, 'nope', 'a', NOW)
    with pytest.raises(NotFound):
        CompleteMilestoneUseCase(repo).execute(USER, goal.id, 'nope', NOW)
    with pytest.raises(NotFound):
        CompleteMilestoneUseCase(repo).execute(2, goal.id, goal.milestones[0].id, NOW)

    assert len(repo.saved) == saves


# --- Dostosowanie ---

@pytest.fixture
def adjust():
    def run(repo, goal_id, milestone_id, mode, now=NOW):
        use_case = AdjustMilestoneUseCase(repo, AdjustmentEngine(FakeTranslator()))
        return use_case.execute(USER, goal_id, milestone_id, mode, now)
    return run


def test_adjust_extend_late_milestone(adjust):
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', -2, status='missed'), make_milestone('b', 3)])
    late_id = goal.milestones[0].id

    updated = adjust(repo, goal.id, late_id, 'extend')

    assert updated.get_milestone(late_id).target_date == at(3)
    assert updated.get_milestone(late_id).status == MilestoneStatus.PENDING
    assert updated.deadline == at(25)


def test_adjust_squeeze_late_milestone(adjust):
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', -2)])

    updated = adjust(repo, goal.id, goal.milestones[0].id, 'squeeze')

    assert updated.milestones[0].difficulty == Difficulty.LARGE
    assert updated.milestones[0].description == "(INTENSIFIED)"


def test_adjust_rejects_on_time_or_completed_milestones(adjust):
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', 2), make_milestone('b', -2, status='completed')])
    saves = len(repo.saved)

    for milestone in goal.milestones:
        with pytest.raises(ValidationFailure):
            adjust(repo, goal.id, milestone.id, 'extend')

    assert len(repo.saved) == saves


def test_adjust_rejects_unknown_mode(adjust):
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', -2)])

    with pytest.raises(ValidationFailure):
        adjust(repo, goal.id, goal.milestones[0].id, 'panic')


# --- Ręczne statusy i postęp częściowy ---

def test_mark_milestone_missed_and_reopen():
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', -2)])
    milestone_id = goal.milestones[0].id
    use_case = MarkMilestoneUseCase(repo)

    missed = use_case.execute(USER, goal.id, milestone_id, 'missed')
    assert missed.get_milestone(milestone_id).status == MilestoneStatus.MISSED

    adjusted = use_case.execute(USER, goal.id, milestone_id, 'adjusted')
    assert adjusted.get_milestone(milestone_id).status == MilestoneStatus.ADJUSTED

    reopened = use_case.execute(USER, goal.id, milestone_id, 'pending')
    assert repo.get_goal(USER, goal.id).get_milestone(milestone_id).status == MilestoneStatus.PENDING
    assert reopened.progress == 0


@pytest.mark.parametrize("status", ['completed', 'lost', None])
def test_mark_milestone_rejects_other_statuses(status):
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', -2)])
    saves = len(repo.saved)

    with pytest.raises(ValidationFailure):
        MarkMilestoneUseCase(repo).execute(USER, goal.id, goal.milestones[0].id, status)

    assert len(repo.saved) == saves


def test_completed_milestone_cannot_be_marked_missed():
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', -2, status='completed')])

    with pytest.raises(ValidationFailure):
        MarkMilestoneUseCase(repo).execute(USER, goal.id, goal.milestones[0].id, 'missed')


def test_report_progress_then_complete():
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', 2), make_milestone('b', 5)])
    milestone_id = goal.milestones[0].id
    use_case = ReportProgressUseCase(repo)

    partial = use_case.execute(USER, goal.id, milestone_id, '40', NOW)
    assert partial.get_milestone(milestone_id).progress == 40
    assert partial.progress == 0

    done = use_case.execute(USER, goal.id, milestone_id, 100, NOW)
    assert done.get_milestone(milestone_id).completed_date == NOW
    assert done.progress == 50


@pytest.mark.parametrize("value", ['abc', None, -1, 101])
def test_report_progress_rejects_bad_values(value):
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', 2)])

    with pytest.raises(ValidationFailure):
        ReportProgressUseCase(repo).execute(USER, goal.id, goal.milestones[0].id, value, NOW)


def test_report_progress_cannot_go_back():
    repo = InMemoryGoalRepository()
    goal = stored_goal(repo, [make_milestone('a', 2)])
    use_case = ReportProgressUseCase(repo)
    use_case.execute(USER, goal.id, goal.milestones[0].id, 60, NOW)

    with pytest.raises(ValidationFailure):
        use_case.execute(USER, goal.id, goal.milestones[0].id, 30, NOW)


# --- Import ---

def test_import_goal_replaces_ids_and_recalculates_progress():
    repo = InMemoryGoalRepository()
    record = dict(GOAL_RECORD, progress=0)

    goal = ImportGoalUseCase(repo).execute(USER, record)

    assert is_durable_id(goal.id)
    assert all(is_durable_id(m.id) for m in goal.milestones)
    assert goal.progress == 50
    assert repo.load_latest_goal(USER).id == goal.id


def test_import_rejects_inverted_dates():
    record = dict(GOAL_RECORD, startDate='2024-08-01T00:00:00Z')

    with pytest.raises(ValidationFailure):
        ImportGoalUseCase(InMemoryGoalRepository()).execute(USER, record)


# --- Profil i seria ---

def test_setup_profile():
    repo = InMemoryProfileRepository()
    input_dto = SetupProfileInput(user_id=USER, name="Aki", homework_style='front_load', notification_method='BROWSER')

    saved = SetupProfileUseCase(repo).execute(input_dto, TODAY)

    assert saved.personality_type == PersonalityType.SPRINTER
    assert repo.load_profile(USER).streak == 1


@pytest.mark.parametrize("style,method", [('panic', 'NONE'), ('steady', 'PIGEON')])
def test_setup_profile_rejects_unknown_answers(style, method):
    input_dto = SetupProfileInput(user_id=USER, name="Aki", homework_style=style, notification_method=method)

    with pytest.raises(ValidationFailure):
        SetupProfileUseCase(InMemoryProfileRepository()).execute(input_dto, TODAY)


def test_record_login_updates_once_per_day():
    yesterday = TODAY - timedelta(days=1)
    repo = InMemoryProfileRepository({USER: UserProfileEntity(name="Aki", streak=4, last_login_date=yesterday)})
    use_case = RecordLoginUseCase(repo)

    first = use_case.execute(USER, TODAY)
    second = use_case.execute(USER, TODAY)

    assert first.streak == second.streak == 5
    assert repo.streak_updates == [(USER, 5, TODAY)]


def test_record_login_without_profile():
    assert RecordLoginUseCase(InMemoryProfileRepository()).execute(USER, TODAY) is None


def test_record_login_propagates_repository_failure():
    class BrokenRepository(InMemoryProfileRepository):
        def update_streak(self, user_id, streak, last_login_date):
            raise RepositoryFailure("down")

    repo = BrokenRepository({USER: UserProfileEntity(name="Aki", streak=1, last_login_date=None)})

    with pytest.raises(RepositoryFailure):
        RecordLoginUseCase(repo).execute(USER, TODAY)


# --- Powiadomienia ---

def test_send_progress_update_builds_payload():
    goal = make_goal([make_milestone('a', -1, status='completed'), make_milestone('b', 2)])
    goal.progress = 50
    goals = InMemoryGoalRepository([goal], user_id=USER)
    profiles = InMemoryProfileRepository({USER: UserProfileEntity(name="Aki")})
    notifier = RecordingNotifier()

    sent = SendProgressUpdateUseCase(goals, profiles, notifier, FakeTranslator()).execute(
        SendProgressUpdateInput(user_id=USER, email="aki@example.com")
    )

    assert sent
    payload = notifier.sent[0]
    assert payload.email == "aki@example.com"
    assert payload.username == "Aki"
    assert payload.goal_title == "Learn Japanese"
    assert payload.progress_percent == 50
    assert payload.message == 'email.default_message'


def test_send_progress_update_reports_failure(caplog):
    goals = InMemoryGoalRepository()
    goals.save_goal(make_goal(), USER)
    notifier = RecordingNotifier(result=False)

    with caplog.at_level(logging.WARNING):
        sent = SendProgressUpdateUseCase(goals, InMemoryProfileRepository(), notifier, FakeTranslator()).execute(
            SendProgressUpdateInput(user_id=USER, email="x@example.com", message="Keep going")
        )

    assert not sent
    assert notifier.sent[0].username == "User"
    assert notifier.sent[0].message == "Keep going"
    assert "was not sent" in caplog.text


def test_send_progress_update_without_goal():
    with pytest.raises(NotFound):
        SendProgressUpdateUseCase(
            InMemoryGoalRepository(), InMemoryProfileRepository(), RecordingNotifier(), FakeTranslator()
        ).execute(SendProgressUpdateInput(user_id=USER, email="x@example.com"))
