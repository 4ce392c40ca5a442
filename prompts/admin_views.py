"""
Admin prompt management. Same operations as the public API without the
ownership check; every endpoint requires a valid session.
"""
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from rest_framework.decorators import api_view

from common import errors
from common.error_reporter import report_handled_exception
from common.middleware import authenticate
from .query import find_prompts
from .utils import get_prompt, create_prompt, update_prompt, delete_prompt

logger = logging.getLogger(__name__)


# =====================
# Admin: List / Upload Prompts
# =====================
@api_view(['GET', 'POST'])
@csrf_exempt
@authenticate
def admin_prompts(request):
    try:
        if request.method == 'POST':
            creator = {
                "email": request.data.get('createdBy') or request.user.email,
                "name": request.data.get('creatorName') or request.user.name or 'Admin',
                "image": request.data.get('creatorImage') or request.user.image,
            }
            prompt = create_prompt(request.data, request.FILES.get('image'), creator)
            logger.info(f"Admin {request.user.email} uploaded prompt {prompt.id}")
            return JsonResponse(prompt.to_dict(), status=201)

        prompts = find_prompts(
            search=request.GET.get('search', ''),
            category=request.GET.get('category'),
        )
        return JsonResponse([p.to_dict() for p in prompts], safe=False, status=200)

    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        logger.exception("Admin prompt listing/upload failed")
        report_handled_exception(e, request=request)
        message = 'Failed to upload prompt' if request.method == 'POST' else 'Failed to fetch prompts'
        return errors.error_response(errors.UnknownError(message))


# =====================
# Admin: Update / Delete Prompt
# =====================
@api_view(['PUT', 'DELETE'])
@csrf_exempt
@authenticate
def admin_prompt_detail(request, prompt_id):
    try:
        prompt = get_prompt(prompt_id)

        if request.method == 'DELETE':
            delete_prompt(prompt)
            logger.info(f"Admin {request.user.email} deleted prompt {prompt_id}")
            return JsonResponse({'success': True, 'message': 'Prompt deleted successfully'}, status=200)

        prompt = update_prompt(prompt, request.data, request.FILES.get('image'))
        return JsonResponse(prompt.to_dict(), status=200)

    except errors.GalleryError as e:
        return errors.error_response(e)
    except Exception as e:
        logger.exception(f"Admin change to prompt {prompt_id} failed")
        report_handled_exception(e, request=request, context={"prompt_id": prompt_id})
        message = 'Failed to delete prompt' if request.method == 'DELETE' else 'Failed to update prompt'
        return errors.error_response(errors.UnknownError(message))
