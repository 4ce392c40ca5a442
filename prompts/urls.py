from django.urls import path
from . import views

urlpatterns = [
    # Public: gallery query (GET) / Authenticated: upload (POST)
    path('', views.prompts_collection, name='prompts_collection'),

    # Public: prompts by one creator (?email=)
    path('creator/', views.creator_prompts, name='creator_prompts'),

    # Public: get / Owner: update, delete
    path('<str:prompt_id>/', views.prompt_detail, name='prompt_detail'),

    # Public: like (POST) / unlike (DELETE) with an anonymous token
    path('<str:prompt_id>/like/', views.prompt_like, name='prompt_like'),
]
