from django.urls import path
from . import views

app_name = 'rides'

urlpatterns = [
    # Polled by the in-instance dispatch trigger
    path('matching', views.internal_matching, name='internal-matching'),
]
