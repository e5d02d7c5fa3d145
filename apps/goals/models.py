import uuid

from django.db import models
from django.conf import settings


class Goal(models.Model):
    # UUID4 jako trwałe ID (encja rozpoznaje "trwałość" po formacie)
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='goals')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    class CategoryChoices(models.TextChoices):
        WORK = 'WORK', 'Work'
        STUDY = 'STUDY', 'Study'
        HOBBY = 'HOBBY', 'Hobby'
        HEALTH = 'HEALTH', 'Health'
        FINANCE = 'FINANCE', 'Finance'
        OTHER = 'OTHER', 'Other'

    category = models.CharField(
        max_length=10,
        choices=CategoryChoices.choices,
        default=CategoryChoices.OTHER
    )

    start_date = models.DateTimeField()
    deadline = models.DateTimeField()
    progress = models.IntegerField(default=0, help_text="Postęp w procentach (0-100)")
    color = models.CharField(max_length=30, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Milestone(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    goal = models.ForeignKey(Goal, on_delete=models.CASCADE, related_name='milestones')

    # Kolejność zapisu (Extend działa na tej kolejności, nie na datach)
    position = models.PositiveIntegerField(default=0)

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    target_date = models.DateTimeField()
    completed_date = models.DateTimeField(null=True, blank=True)

    class StatusChoices(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'
        MISSED = 'missed', 'Missed'
        ADJUSTED = 'adjusted', 'Adjusted'

    status = models.CharField(
        max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING
    )

    class DifficultyChoices(models.TextChoices):
        MICRO = 'micro', 'Micro'
        SMALL = 'small', 'Small'
        MEDIUM = 'medium', 'Medium'
        LARGE = 'large', 'Large'

    difficulty = models.CharField(
        max_length=10,
        choices=DifficultyChoices.choices,
        default=DifficultyChoices.MEDIUM
    )
    progress = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position']

    def __str__(self):
        return self.title
