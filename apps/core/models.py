from django.db import models
from django.conf import settings


class UserProfile(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profile')
    name = models.CharField(max_length=100)

    class PersonalityChoices(models.TextChoices):
        STEADY = 'STEADY', 'Steady'
        SPRINTER = 'SPRINTER', 'Sprinter'
        PROCRASTINATOR = 'PROCRASTINATOR', 'Procrastinator'

    # Wyliczane raz, przy ankiecie startowej
    personality_type = models.CharField(
        max_length=20,
        choices=PersonalityChoices.choices,
        default=PersonalityChoices.STEADY
    )
    pacing_multiplier = models.FloatField(default=1.0)

    # Powiadomienia
    class NotificationMethodChoices(models.TextChoices):
        BROWSER = 'BROWSER', 'Browser'
        EMAIL = 'EMAIL', 'Email'
        LINE = 'LINE', 'LINE'
        NONE = 'NONE', 'None'

    notifications_enabled = models.BooleanField(default=False)
    notification_method = models.CharField(
        max_length=10,
        choices=NotificationMethodChoices.choices,
        default=NotificationMethodChoices.NONE
    )
    notification_time = models.CharField(max_length=5, default="09:00", help_text="HH:MM")

    # Seria logowań
    streak = models.PositiveIntegerField(default=0)
    last_login_date = models.DateField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Profile of {self.name}"
