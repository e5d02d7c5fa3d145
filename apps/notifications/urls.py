from django.urls import path
from . import views

urlpatterns = [
    path('send-update/', views.send_update_view, name='send_update'),
]
