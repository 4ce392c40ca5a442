from django.urls import path, include
from prompts import admin_views as prompt_admin_views
from users import admin_views as user_admin_views
from users import views as user_views

urlpatterns = [
    # Gallery: query, CRUD, like toggle
    path('api/prompts/', include('prompts.urls')),
    # Profiles and stats
    path('api/user/', include('users.urls')),
    # Authenticated image upload (avatars)
    path('api/upload/', user_views.upload_user_image, name='upload_user_image'),
    # Admin management endpoints
    path('api/admin/users/', user_admin_views.admin_users, name='admin_users'),
    path('api/admin/users/<str:user_id>/', user_admin_views.admin_user_detail, name='admin_user_detail'),
    path('api/admin/prompts/', prompt_admin_views.admin_prompts, name='admin_prompts'),
    path('api/admin/prompts/<str:prompt_id>/', prompt_admin_views.admin_prompt_detail, name='admin_prompt_detail'),
]
