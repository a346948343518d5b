"""tacticube_play/urls.py  –  HTTP views (create / join / inspect a match)."""

from django.urls import path
from . import views

app_name = 'tacticube_play'

urlpatterns = [
    path('match/',                          views.create_match, name='create_match'),
    path('match/<uuid:match_key>/',         views.match_status, name='match_status'),
    path('match/<uuid:match_key>/join/',    views.join_match,   name='join_match'),
]
