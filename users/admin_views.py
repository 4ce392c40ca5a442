"""
Admin user management: list, edit and delete profiles.
Every endpoint requires a valid session.
"""
from django.http import JsonResponse
from rest_framework.decorators import api_view
from django.views.decorators.csrf import csrf_exempt
from mongoengine.errors import ValidationError as MongoValidationError
import logging
from common import errors
from common.error_reporter import report_handled_exception
from common.middleware import authenticate, read_json_body
from prompts.utils import delete_prompts_by_creator
from .models import User

logger = logging.getLogger(__name__)


def _get_user(user_id):
    try:
        user = User.objects(id=user_id).first()
    except MongoValidationError:
        user = None
    if user is None:
        raise errors.NotFoundError('User not found')
    return user


# =====================
# Admin: List Users
# =====================
@api_view(['GET'])
@csrf_exempt
@authenticate
def admin_users(request):
    """All profiles, newest first."""
    try:
        users = User.objects().order_by('-created_at')
        return JsonResponse([u.to_dict() for u in users], safe=False, status=200)
    except Exception as e:
        logger.exception("Failed to fetch users")
        report_handled_exception(e, request=request)
        return errors.error_response(errors.UnknownError('Failed to fetch users'))


# =====================
# Admin: Update / Delete User
# =====================
@api_view(['PUT', 'DELETE'])
@csrf_exempt
@authenticate
def admin_user_detail(request, user_id):
    """
    PUT {name, bio}: partial profile edit.
    DELETE: removes the profile and every prompt it created.
    """
    try:
        user = _get_user(user_id)

        if request.method == 'DELETE':
            email = user.email
            user.delete()
            deleted_prompts = delete_prompts_by_creator(email)
            logger.info(f"Admin {request.user.email} deleted user {email} and {deleted_prompts} prompts")
            return JsonResponse({'success': True, 'deletedPrompts': deleted_prompts}, status=200)

        data = read_json_body(request)

        if 'name' in data:
            user.name = data.get('name') or ''
        if 'bio' in data:
            user.bio = data.get('bio') or ''
        user.save()
        return JsonResponse(user.to_dict(), status=200)

    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        logger.exception(f"Admin change to user {user_id} failed")
        report_handled_exception(e, request=request, context={"user_id": user_id})
        message = 'Failed to delete user' if request.method == 'DELETE' else 'Failed to update user'
        return errors.error_response(errors.UnknownError(message))
