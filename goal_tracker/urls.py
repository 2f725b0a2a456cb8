# goal_tracker/urls.py
from django.contrib import admin
from django.urls import path

# API HTTP jest poza tym projektem - zostaje tylko admin do podglądu danych
urlpatterns = [
    path('admin/', admin.site.urls),
]
