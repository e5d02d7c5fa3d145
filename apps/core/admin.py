from django.contrib import admin
from .models import UserProfile

@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'personality_type', 'streak', 'last_login_date')
    list_filter = ('personality_type', 'notification_method')
    search_fields = ('name', 'user__username')
