import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect
from django.utils import timezone

from apps.core.adapters.orm_repositories import DjangoProfileRepository
from apps.core.adapters.translator import CatalogTranslator
from apps.core.application.use_cases import RecordLoginUseCase, SetupProfileInput, SetupProfileUseCase
from apps.core.decorators import domain_errors
from apps.core.domain.exceptions import RepositoryFailure
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.domain.services.timeline import TimelineService
from .forms import SetupForm

logger = logging.getLogger(__name__)


@login_required
@domain_errors
def dashboard_view(request):
    profiles = DjangoProfileRepository()

    # Seria liczona raz dziennie (ponowne wejście tego samego dnia nic nie zmienia)
    try:
        profile = RecordLoginUseCase(profiles).execute(request.user.id, timezone.localdate())
    except RepositoryFailure:
        # Nie krytyczne - dashboard ma się pokazać nawet bez aktualizacji serii
        logger.warning("Streak update failed for user %s", request.user.id, exc_info=True)
        profile = profiles.load_profile(request.user.id)

    if profile is None:
        return redirect('setup')

    goal = DjangoGoalRepository().load_latest_goal(request.user.id)
    if goal is None:
        return redirect('goal_create')

    now = timezone.now()
    timeline = TimelineService().build_timeline(goal, now)

    return render(request, 'core/dashboard.html', {
        'profile': profile,
        'goal': goal,
        'timeline': timeline,
        'focus': timeline.current,
        'days_left': goal.days_left(now),
        'today': timezone.localdate(),
    })


@login_required
@domain_errors
def setup_view(request):
    if request.method == 'POST':
        form = SetupForm(request.POST)
        if form.is_valid():
            input_dto = SetupProfileInput(
                user_id=request.user.id,
                name=form.cleaned_data['name'],
                homework_style=form.cleaned_data['homework_style'],
                notification_method=form.cleaned_data['notification_method'],
            )
            SetupProfileUseCase(DjangoProfileRepository()).execute(input_dto, timezone.localdate())

            messages.success(request, CatalogTranslator().translate('profile.saved'))
            # Po ankiecie od razu do tworzenia celu
            return redirect('goal_create')
    else:
        form = SetupForm()

    return render(request, 'core/setup.html', {'form': form})
