from django.http import JsonResponse
from rest_framework.decorators import api_view
from django.views.decorators.csrf import csrf_exempt
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
import logging
from common import errors
from common.error_reporter import report_handled_exception, report_all_exceptions
from common.media import upload_image
from common.middleware import authenticate, read_json_body
from prompts.models import Prompt
from .models import User

logger = logging.getLogger(__name__)


# =====================
# User Profile: Get / Upsert
# =====================
@api_view(['GET', 'PUT'])
@csrf_exempt
def user_profile(request):
    """
    GET ?email= returns the profile.
    PUT upserts the signed-in user's profile and marks it complete.
    """
    if request.method == 'PUT':
        return _save_profile(request)

    email = request.GET.get('email')
    if not email:
        return errors.error_response(errors.ValidationError('Email is required'))

    try:
        user = User.objects(email=email).first()
        if not user:
            return errors.error_response(errors.NotFoundError('User not found'))
        return JsonResponse(user.to_dict(), status=200)
    except Exception as e:
        logger.exception("[USER GET ERROR]")
        report_handled_exception(e, request=request)
        return errors.error_response(errors.UnknownError('Failed to fetch user'))


@authenticate
def _save_profile(request):
    try:
        data = read_json_body(request)

        email = data.get('email') or request.user.email
        if not isinstance(email, str):
            raise errors.ValidationError('Invalid email')
        email = email.strip()
        if not email:
            raise errors.ValidationError('Email is required')
        if email.lower() != request.user.email.lower():
            raise errors.ForbiddenError('You can only edit your own profile')
        try:
            validate_email(email)
        except DjangoValidationError:
            raise errors.ValidationError('Invalid email')

        user = User.upsert_profile(
            email,
            name=data.get('name') or request.user.name,
            bio=data.get('bio'),
            image=data.get('image'),
        )
        logger.info(f"Profile saved for {email}")
        return JsonResponse(user.to_dict(), status=200)

    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        logger.exception("[USER PROFILE ERROR]")
        report_handled_exception(e, request=request)
        return errors.error_response(errors.UnknownError('Failed to update profile'))


# =====================
# User Stats
# =====================
@api_view(['GET'])
@csrf_exempt
@report_all_exceptions
def user_stats(request):
    """Number of prompts a user created and the likes those prompts collected."""
    email = request.GET.get('email')
    if not email:
        return errors.error_response(errors.ValidationError('Email is required'))

    user_prompts = Prompt.objects(created_by=email).only('likes')
    prompt_count = 0
    total_likes = 0
    for prompt in user_prompts:
        prompt_count += 1
        total_likes += max(0, prompt.likes or 0)

    return JsonResponse({
        'promptCount': prompt_count,
        'totalLikes': total_likes,
        'email': email,
    }, status=200)


# =====================
# Image Upload (avatars)
# =====================
@api_view(['POST'])
@csrf_exempt
@authenticate
def upload_user_image(request):
    """Upload one image for the signed-in user; returns {secure_url, public_id}."""
    file = request.FILES.get('file')
    if not file:
        return errors.error_response(errors.ValidationError('No file provided'))

    try:
        media = upload_image(file, folder='avatars')
        return JsonResponse(media.to_dict(), status=200)
    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        logger.exception("[UPLOAD IMAGE ERROR]")
        report_handled_exception(e, request=request)
        return errors.error_response(errors.UnknownError('Failed to upload image'))
