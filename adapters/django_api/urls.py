"""
Ops Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("housekeeping/today", views.housekeeping_today_view),
    path("housekeeping/mark", views.housekeeping_mark_view),
    path("housekeeping/seed", views.housekeeping_seed_view),
]
