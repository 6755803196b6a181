# Routes (prefix: /api/v1/ape-keys/):
# - GET / -> ApeKeyListCreateView (list)
# - POST / -> ApeKeyListCreateView (generate)
# - PATCH /<ape_key_id> -> ApeKeyDetailView (edit)
# - DELETE /<ape_key_id> -> ApeKeyDetailView (delete)
#
# The detail route's trailing slash is optional: clients do not follow
# APPEND_SLASH redirects for PATCH or DELETE.
# `ape_key_id` is matched loosely here and validated as a token string inside
# the guard pipeline, so malformed ids get a 400 envelope rather than a 404.

from django.urls import path, re_path

from .views import ApeKeyDetailView, ApeKeyListCreateView

urlpatterns = [
    path("", ApeKeyListCreateView.as_view(), name="ape-key-list-create"),
    re_path(
        r"^(?P<ape_key_id>[^/]+)/?$",
        ApeKeyDetailView.as_view(),
        name="ape-key-detail",
    ),
]
