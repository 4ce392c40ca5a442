"""
Django management command to ensure MongoDB indexes are created.
Run with: python manage.py ensure_indexes
"""
from django.core.management.base import BaseCommand
from prompts.models import Prompt
from users.models import User


class Command(BaseCommand):
    help = 'Ensure MongoDB indexes for the prompts and users collections'

    def handle(self, *args, **options):
        self.stdout.write('Ensuring MongoDB indexes...')

        for document in (Prompt, User):
            try:
                document.ensure_indexes()
                self.stdout.write(
                    self.style.SUCCESS(f'Ensured indexes for {document._meta["collection"]}')
                )
            except Exception as e:
                self.stdout.write(
                    self.style.WARNING(f'Warning: {document.__name__}: {e}')
                )
