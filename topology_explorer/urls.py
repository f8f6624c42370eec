from django.urls import include, path

urlpatterns = [
    path("", include("topology_explorer.explorer.urls", namespace="explorer")),
]
