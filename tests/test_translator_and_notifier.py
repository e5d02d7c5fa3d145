from smtplib import SMTPException

import pytest
from django.utils import translation

from apps.core.adapters.translator import CATALOG, CatalogTranslator
from apps.core.domain.exceptions import ValidationFailure
from apps.notifications.adapters.email_notifier import DjangoEmailNotifier
from apps.notifications.ports.notifier import EmailPayload


def test_catalogs_have_the_same_keys():
    assert set(CATALOG['ja']) == set(CATALOG['en'])


@pytest.mark.parametrize("language,expected", [
    ('en', "Milestone completed!"),
    ('ja', "マイルストーン達成！"),
    ('ja-jp', "マイルストーン達成！"),
    ('fr', "Milestone completed!"),
])
def test_translate_by_language(language, expected):
    assert CatalogTranslator(language).translate('milestone.completed') == expected


def test_unknown_key_falls_back_to_key():
    assert CatalogTranslator('ja').translate('no.such.key') == 'no.such.key'


def test_active_django_language_is_used():
    with translation.override('ja'):
        assert CatalogTranslator().translate('timeline.status.missed') == "未達"


def payload(**changes):
    fields = dict(
        email="aki@example.com",
        username="Aki",
        goal_title="Learn Japanese",
        message="Keep going",
        progress_percent=67,
    )
    fields.update(changes)
    return EmailPayload(**fields)


@pytest.fixture
def notifier():
    return DjangoEmailNotifier(CatalogTranslator('en'), from_email="PaceMaker <test@example.com>")


def test_send_renders_progress_email(notifier, mailoutbox):
    assert notifier.send(payload())

    assert len(mailoutbox) == 1
    mail = mailoutbox[0]
    assert mail.subject == "PaceMaker Update: Learn Japanese"
    assert mail.to == ["aki@example.com"]
    assert mail.from_email == "PaceMaker <test@example.com>"
    assert "Hi Aki" in mail.body
    assert "Current Progress: 67%" in mail.body
    html, mimetype = mail.alternatives[0]
    assert mimetype == 'text/html'
    assert "Learn Japanese" in html


def test_progress_is_clamped(notifier, mailoutbox):
    notifier.send(payload(progress_percent=140))

    assert "Current Progress: 100%" in mailoutbox[0].body


def test_send_requires_email(notifier, mailoutbox):
    with pytest.raises(ValidationFailure):
        notifier.send(payload(email=""))

    assert mailoutbox == []


def test_transport_failure_returns_false(notifier, monkeypatch):
    def broken_send_mail(**kwargs):
        raise SMTPException("connection refused")

    monkeypatch.setattr('apps.notifications.adapters.email_notifier.send_mail', broken_send_mail)

    assert notifier.send(payload()) is False
