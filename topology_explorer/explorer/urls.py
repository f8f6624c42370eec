from django.urls import path

from . import views

app_name = "explorer"

urlpatterns = [
    path("", views.index, name="index"),
    path("api/peers/", views.peers_api, name="peers-api"),
    path("api/report/", views.report_api, name="report-api"),
    path("api/workspace/undo/", views.workspace_undo_api, name="workspace-undo-api"),
]
