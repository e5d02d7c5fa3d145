from datetime import datetime, time

from django import forms
from django.utils import timezone

from .models import Goal, Milestone


def to_datetime(day):
    """Data z formularza -> aware datetime (północ w strefie aplikacji)."""
    if day is None:
        return None
    return timezone.make_aware(datetime.combine(day, time.min))


class GoalForm(forms.Form):
    title = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )
    category = forms.ChoiceField(
        choices=Goal.CategoryChoices.choices,
        initial=Goal.CategoryChoices.WORK,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    start_date = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))
    deadline = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))

    def clean(self):
        cleaned = super().clean()
        start, deadline = cleaned.get('start_date'), cleaned.get('deadline')
        if start and deadline and start > deadline:
            raise forms.ValidationError("The deadline cannot be before the start date.")
        return cleaned


class MilestoneForm(forms.Form):
    title = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    target_date = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))
    difficulty = forms.ChoiceField(
        choices=Milestone.DifficultyChoices.choices,
        initial=Milestone.DifficultyChoices.MEDIUM,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )


# Puste dodatkowe wiersze są pomijane, częściowo wypełnione -> błąd (brak tytułu / daty)
MilestoneFormSet = forms.formset_factory(MilestoneForm, extra=3)
