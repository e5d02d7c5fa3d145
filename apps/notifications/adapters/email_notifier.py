import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from apps.core.domain.exceptions import ValidationFailure
from apps.core.ports.translator import ITranslator
from apps.notifications.ports.notifier import EmailPayload, INotifier

logger = logging.getLogger(__name__)


class DjangoEmailNotifier(INotifier):
    def __init__(self, translator: ITranslator, from_email: str = None):
        self.translator = translator
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send(self, payload: EmailPayload) -> bool:
        if not payload.email:
            raise ValidationFailure("Email is required")

        subject = self.translator.translate('email.subject').format(goal_title=payload.goal_title)
        context = {
            'username': payload.username,
            'goal_title': payload.goal_title,
            'message': payload.message,
            # Pasek postępu w HTML - przycinamy do 0-100
            'progress': max(0, min(100, int(payload.progress_percent))),
            'dashboard_url': settings.PACEMAKER_DASHBOARD_URL,
        }

        try:
            sent = send_mail(
                subject=subject,
                message=render_to_string('notifications/progress_update.txt', context),
                from_email=self.from_email,
                recipient_list=[payload.email],
                html_message=render_to_string('notifications/progress_update.html', context),
            )
        except (SMTPException, OSError):
            # Błąd transportu (SMTP, API) -> porażka, ale bez wywracania widoku
            logger.exception("Sending progress update to %s failed", payload.email)
            return False

        logger.info("Progress update sent to %s (%s)", payload.email, payload.goal_title)
        return sent > 0
