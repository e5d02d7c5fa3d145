from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from apps.core.adapters.orm_repositories import DjangoProfileRepository
from apps.core.adapters.translator import CatalogTranslator
from apps.core.decorators import domain_errors
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from .adapters.email_notifier import DjangoEmailNotifier
from .application.use_cases import SendProgressUpdateInput, SendProgressUpdateUseCase


@require_http_methods(["POST"])
@login_required
@domain_errors
def send_update_view(request):
    translator = CatalogTranslator()
    use_case = SendProgressUpdateUseCase(
        goals=DjangoGoalRepository(),
        profiles=DjangoProfileRepository(),
        notifier=DjangoEmailNotifier(translator),
        translator=translator,
    )

    input_dto = SendProgressUpdateInput(
        user_id=request.user.id,
        email=request.POST.get('email') or request.user.email,
        message=request.POST.get('message'),
    )

    if use_case.execute(input_dto):
        return JsonResponse({'message': 'Email sent successfully'})
    return JsonResponse({'error': 'Email could not be sent'}, status=500)
