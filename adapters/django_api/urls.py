"""
Wegesa Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("items", views.items_view),
    path("items/<str:item_id>", views.item_detail_view),
    path("dispatches", views.dispatch_create_view),
    path("movements", views.movements_list_view),
    path("movements/<str:movement_id>", views.movement_detail_view),
    path("movements/<str:movement_id>/returns", views.return_register_view),
    path("reports/dashboard", views.dashboard_stats_view),
    path("reports/period", views.period_report_view),
]
