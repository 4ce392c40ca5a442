import os
import django
import json
import sys

# Setup Django Environment
sys.path.append(os.getcwd())
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'promptgallery.settings')
django.setup()

from django.test import RequestFactory
from prompts.models import Prompt
from prompts.views import prompt_like


def _call(factory, method, prompt_id, identity):
    build = factory.post if method == 'POST' else factory.delete
    request = build(f'/api/prompts/{prompt_id}/like/', data=json.dumps({'identity': identity}),
                    content_type='application/json')
    response = prompt_like(request, prompt_id=prompt_id)
    return response.status_code, json.loads(response.content.decode())


def verify_like_api():
    print(">> Verifying like ledger against the configured database...")

    prompt = Prompt(
        title="Like ledger check",
        prompt="temporary record",
        image_url="https://placehold.co/600x400.png",
        category=["Test"],
    )
    prompt.save()
    pid = str(prompt.id)
    factory = RequestFactory()

    try:
        steps = [
            ('POST', 'verify_a', 200, {'likes': 1, 'likedBy': ['verify_a']}),
            ('POST', 'verify_a', 400, None),
            ('DELETE', 'verify_a', 200, {'likes': 0, 'likedBy': []}),
            ('POST', 'verify_a', 200, None),
            ('POST', 'verify_b', 200, {'likes': 2, 'likedBy': ['verify_a', 'verify_b']}),
            ('DELETE', 'verify_b', 400, None),
        ]
        for method, identity, expected_status, expected_body in steps:
            status, body = _call(factory, method, pid, identity)
            ok = status == expected_status and (expected_body is None or body == expected_body)
            print(f"[{'OK' if ok else 'FAIL'}] {method} as {identity}: {status} {body}")
    finally:
        prompt.delete()
        print(">> Removed temporary prompt")


if __name__ == "__main__":
    verify_like_api()
