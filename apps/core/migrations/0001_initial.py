import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('personality_type', models.CharField(choices=[('STEADY', 'Steady'), ('SPRINTER', 'Sprinter'), ('PROCRASTINATOR', 'Procrastinator')], default='STEADY', max_length=20)),
                ('pacing_multiplier', models.FloatField(default=1.0)),
                ('notifications_enabled', models.BooleanField(default=False)),
                ('notification_method', models.CharField(choices=[('BROWSER', 'Browser'), ('EMAIL', 'Email'), ('LINE', 'LINE'), ('NONE', 'None')], default='NONE', max_length=10)),
                ('notification_time', models.CharField(default='09:00', help_text='HH:MM', max_length=5)),
                ('streak', models.PositiveIntegerField(default=0)),
                ('last_login_date', models.DateField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
