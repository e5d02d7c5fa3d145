import django_filters
from django import forms
from .models import Milestone

class MilestoneFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(
        lookup_expr='icontains',
        label="Title contains",
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Search...'})
    )
    status = django_filters.ChoiceFilter(
        choices=Milestone.StatusChoices.choices,
        label="Status",
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    difficulty = django_filters.ChoiceFilter(
        choices=Milestone.DifficultyChoices.choices,
        label="Difficulty",
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    class Meta:
        model = Milestone
        fields = ['title', 'status', 'difficulty']
