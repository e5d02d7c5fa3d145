from django.contrib import admin
from .models import Goal, Milestone


class MilestoneInline(admin.TabularInline):
    model = Milestone
    extra = 0
    fields = ('position', 'title', 'target_date', 'status', 'difficulty', 'progress')


@admin.register(Goal)
class GoalAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'category', 'start_date', 'deadline', 'progress')
    list_filter = ('category',)
    search_fields = ('title',)
    inlines = [MilestoneInline]


@admin.register(Milestone)
class MilestoneAdmin(admin.ModelAdmin):
    list_display = ('title', 'goal', 'target_date', 'status', 'difficulty', 'progress')
    list_filter = ('status', 'difficulty')
    search_fields = ('title',)
