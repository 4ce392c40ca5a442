"""
Public prompt API: gallery query, creator listing, owner CRUD and the like toggle.
"""
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from rest_framework.decorators import api_view

from common import errors
from common.error_reporter import report_handled_exception
from common.middleware import authenticate, get_session_user, read_json_body
from common.user_friendly_errors import get_user_friendly_message
from users.models import User
from . import likes
from .query import find_prompts, find_creator_prompts
from .utils import get_prompt, create_prompt, update_prompt, delete_prompt

logger = logging.getLogger(__name__)


def _creator_from_session(session_user):
    """createdBy fields: stored profile first, then the session claims."""
    profile = User.objects(email=session_user.email).first()
    return {
        "email": session_user.email,
        "name": (profile.name if profile and profile.name else session_user.name),
        "image": (profile.image if profile and profile.image else session_user.image),
    }


def _require_owner(request, prompt):
    if prompt.created_by != request.user.email:
        raise errors.ForbiddenError("Only the creator can change this prompt")


def _failure(request, exc, message, context=None):
    logger.exception(message)
    report_handled_exception(exc, request=request, context=context)
    return errors.error_response(
        errors.UnknownError(message),
        detail=get_user_friendly_message(exc, context="store"),
    )


# =====================
# Gallery listing / Create Prompt
# =====================
@api_view(['GET', 'POST'])
@csrf_exempt
def prompts_collection(request):
    """
    GET: gallery query (?search=&category=), full result set as a JSON array.
    POST: create a prompt for the signed-in user (multipart form).
    """
    if request.method == 'POST':
        return _create_prompt(request)

    try:
        prompts = find_prompts(
            search=request.GET.get('search', ''),
            category=request.GET.get('category'),
        )
        return JsonResponse([p.to_dict() for p in prompts], safe=False, status=200)
    except Exception as e:
        return _failure(request, e, 'Failed to fetch prompts')


@authenticate
def _create_prompt(request):
    try:
        prompt = create_prompt(
            request.data,
            request.FILES.get('image'),
            _creator_from_session(request.user),
        )
        return JsonResponse(prompt.to_dict(), status=201)
    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        return _failure(request, e, 'Failed to upload prompt')


# =====================
# Prompts by Creator
# =====================
@api_view(['GET'])
@csrf_exempt
def creator_prompts(request):
    """All prompts created by ?email= (default: the signed-in user), newest first."""
    email = request.GET.get('email')
    if not email:
        session_user = get_session_user(request)
        email = session_user.email if session_user else None
    if not email:
        return errors.error_response(errors.ValidationError('Email is required'))

    try:
        prompts = find_creator_prompts(email)
        return JsonResponse([p.to_dict() for p in prompts], safe=False, status=200)
    except Exception as e:
        return _failure(request, e, 'Failed to fetch creator prompts')


# =====================
# Single Prompt: Get / Update / Delete
# =====================
@api_view(['GET', 'PUT', 'DELETE'])
@csrf_exempt
def prompt_detail(request, prompt_id):
    if request.method == 'PUT':
        return _update_prompt(request, prompt_id)
    if request.method == 'DELETE':
        return _delete_prompt(request, prompt_id)

    try:
        return JsonResponse(get_prompt(prompt_id).to_dict(), status=200)
    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        return _failure(request, e, 'Failed to fetch prompt', {"prompt_id": prompt_id})


@authenticate
def _update_prompt(request, prompt_id):
    """Owner-only partial update; replaces the image only when a new file is sent."""
    try:
        prompt = get_prompt(prompt_id)
        _require_owner(request, prompt)
        prompt = update_prompt(prompt, request.data, request.FILES.get('image'))
        return JsonResponse(prompt.to_dict(), status=200)
    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        return _failure(request, e, 'Failed to update prompt', {"prompt_id": prompt_id})


@authenticate
def _delete_prompt(request, prompt_id):
    try:
        prompt = get_prompt(prompt_id)
        _require_owner(request, prompt)
        delete_prompt(prompt)
        return JsonResponse({'success': True, 'message': 'Prompt deleted successfully'}, status=200)
    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        return _failure(request, e, 'Failed to delete prompt', {"prompt_id": prompt_id})


# =====================
# Like / Unlike
# =====================
@api_view(['POST', 'DELETE'])
@csrf_exempt
def prompt_like(request, prompt_id):
    """
    POST likes the prompt for the anonymous token in the body, DELETE unlikes it.
    Body: {"identity": "<token>"}. Response: {"likes": n, "likedBy": [...]}.
    """
    try:
        data = read_json_body(request)
        token = likes.AnonymousToken.from_body(data)

        if request.method == 'POST':
            result = likes.like(prompt_id, token)
        else:
            result = likes.unlike(prompt_id, token)
        return JsonResponse(result.to_dict(), status=200)

    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        message = 'Failed to like prompt' if request.method == 'POST' else 'Failed to unlike prompt'
        return _failure(request, e, message, {"prompt_id": prompt_id})
