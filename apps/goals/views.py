import json
from datetime import timedelta

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpResponse, JsonResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from apps.core.adapters.translator import CatalogTranslator
from apps.core.decorators import domain_errors
from apps.core.domain.exceptions import NotFound
from .adapters.orm_repositories import DjangoGoalRepository
from .adapters.records import goal_to_record
from .application.use_cases import (
    AdjustMilestoneUseCase, CompleteMilestoneUseCase, CreateGoalInput, CreateGoalUseCase,
    ImportGoalUseCase, MarkMilestoneUseCase, MilestoneInput, ReportProgressUseCase
)
from .domain.services.adjustment import AdjustmentEngine
from .domain.services.timeline import TimelineService
from .filters import MilestoneFilter
from .forms import GoalForm, MilestoneFormSet, to_datetime
from .models import Goal, Milestone


def render_timeline(request, goal):
    """Fragment HTML z osią czasu (podmieniany po akcji)."""
    timeline = TimelineService().build_timeline(goal, timezone.now())
    return render(request, 'goals/partials/timeline.html', {'goal': goal, 'timeline': timeline})


@login_required
@domain_errors
def goal_create_view(request):
    if request.method == 'POST':
        form = GoalForm(request.POST)
        formset = MilestoneFormSet(request.POST, prefix='milestones')

        if form.is_valid() and formset.is_valid():
            milestones = [
                MilestoneInput(
                    title=row['title'],
                    target_date=to_datetime(row['target_date']),
                    description=row.get('description', ''),
                    difficulty=row['difficulty'],
                )
                for row in formset.cleaned_data if row  # pusty wiersz -> {}
            ]

            # 1. DTO
            input_dto = CreateGoalInput(
                user_id=request.user.id,
                title=form.cleaned_data['title'],
                description=form.cleaned_data['description'],
                category=form.cleaned_data['category'],
                start_date=to_datetime(form.cleaned_data['start_date']),
                deadline=to_datetime(form.cleaned_data['deadline']),
                milestones=milestones,
            )

            # 2. Use Case (Manual Dependency Injection)
            CreateGoalUseCase(repository=DjangoGoalRepository()).execute(input_dto)

            messages.success(request, CatalogTranslator().translate('goal.created'))
            return redirect('home')
    else:
        today = timezone.localdate()
        form = GoalForm(initial={
            'start_date': today,
            'deadline': today + timedelta(days=30),
        })
        formset = MilestoneFormSet(prefix='milestones')

    return render(request, 'goals/goal_form.html', {'form': form, 'formset': formset})


@require_http_methods(["POST"])
@login_required
@domain_errors
def milestone_complete_view(request, pk, mid):
    use_case = CompleteMilestoneUseCase(repository=DjangoGoalRepository())
    goal = use_case.execute(request.user.id, str(pk), str(mid), timezone.now())

    return render_timeline(request, goal)


@require_http_methods(["POST"])
@login_required
@domain_errors
def milestone_adjust_view(request, pk, mid):
    engine = AdjustmentEngine(
        translator=CatalogTranslator(),
        shift_days=settings.PACEMAKER_EXTEND_SHIFT_DAYS
    )
    use_case = AdjustMilestoneUseCase(repository=DjangoGoalRepository(), engine=engine)
    goal = use_case.execute(request.user.id, str(pk), str(mid), request.POST.get('mode'), timezone.now())

    return render_timeline(request, goal)


@require_http_methods(["POST"])
@login_required
@domain_errors
def milestone_mark_view(request, pk, mid):
    use_case = MarkMilestoneUseCase(repository=DjangoGoalRepository())
    goal = use_case.execute(request.user.id, str(pk), str(mid), request.POST.get('status'))

    return render_timeline(request, goal)


@require_http_methods(["POST"])
@login_required
@domain_errors
def milestone_progress_view(request, pk, mid):
    use_case = ReportProgressUseCase(repository=DjangoGoalRepository())
    goal = use_case.execute(request.user.id, str(pk), str(mid), request.POST.get('value'), timezone.now())

    return render_timeline(request, goal)


@login_required
def milestone_list_view(request, pk):
    goal = get_object_or_404(Goal, pk=pk, user=request.user)
    qs = Milestone.objects.filter(goal=goal).order_by('target_date', 'position')

    f = MilestoneFilter(request.GET, queryset=qs)

    return render(request, 'goals/milestone_list.html', {'goal': goal, 'filter': f})


@login_required
@domain_errors
def goal_export_view(request):
    goal = DjangoGoalRepository().load_latest_goal(request.user.id)
    if goal is None:
        raise NotFound(f"User {request.user.id} has no goal")

    return JsonResponse(goal_to_record(goal))


@require_http_methods(["POST"])
@login_required
@domain_errors
def goal_import_view(request):
    try:
        record = json.loads(request.body or b'{}')
    except ValueError as e:
        # JSONDecodeError i UnicodeDecodeError (niepoprawne bajty)
        return HttpResponse(f"Error: invalid JSON ({e})", status=400)

    goal = ImportGoalUseCase(repository=DjangoGoalRepository()).execute(request.user.id, record)

    return JsonResponse(goal_to_record(goal), status=201)
