from django import forms

from .models import UserProfile


class SetupForm(forms.Form):
    """Ankieta startowa: imię, styl pracy, powiadomienia."""

    HOMEWORK_STYLE_CHOICES = [
        ('last_minute', 'At the last minute'),
        ('steady', 'A little every day'),
        ('front_load', 'Right at the start'),
    ]

    name = forms.CharField(
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'autofocus': True})
    )
    homework_style = forms.ChoiceField(
        choices=HOMEWORK_STYLE_CHOICES,
        widget=forms.RadioSelect
    )
    notification_method = forms.ChoiceField(
        choices=UserProfile.NotificationMethodChoices.choices,
        initial=UserProfile.NotificationMethodChoices.NONE,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
