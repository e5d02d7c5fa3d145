from django.urls import path
from . import views

urlpatterns = [
    path('new/', views.goal_create_view, name='goal_create'),
    path('export/', views.goal_export_view, name='goal_export'),
    path('import/', views.goal_import_view, name='goal_import'),
    path('<uuid:pk>/milestones/', views.milestone_list_view, name='milestone_list'),
    path('<uuid:pk>/milestones/<uuid:mid>/complete/', views.milestone_complete_view, name='milestone_complete'),
    path('<uuid:pk>/milestones/<uuid:mid>/adjust/', views.milestone_adjust_view, name='milestone_adjust'),
    path('<uuid:pk>/milestones/<uuid:mid>/mark/', views.milestone_mark_view, name='milestone_mark'),
    path('<uuid:pk>/milestones/<uuid:mid>/progress/', views.milestone_progress_view, name='milestone_progress'),
]
