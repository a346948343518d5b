"""
tacticube_portal/urls.py  –  Root URL configuration
"""

from django.urls import path, include

urlpatterns = [
    # Match lobby endpoints (create / join / status)
    path('play/', include('tacticube_play.urls')),
]
