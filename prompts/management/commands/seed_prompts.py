"""
Seed the gallery with a handful of sample prompts.
Run with: python manage.py seed_prompts [--creator EMAIL]
"""
from django.core.management.base import BaseCommand
from prompts.models import Prompt

PLACEHOLDER_IMAGE = "https://placehold.co/600x400.png"

SAMPLE_PROMPTS = [
    {
        "title": "Cosmic Ocean",
        "prompt": "A breathtaking cosmic ocean where the waves are made of swirling galaxies and the foam is made "
                  "of shimmering stars. In the distance, a lone astronaut floats in a small boat, fishing for "
                  "stardust. The color palette should be deep blues, purples, and gold.",
        "category": ["Space", "Fantasy"],
    },
    {
        "title": "Steampunk Metropolis",
        "prompt": "An intricate, bustling steampunk metropolis at dusk. Clockwork airships fill the sky, and "
                  "steam-powered automatons walk the cobblestone streets below. The architecture is a mix of "
                  "Victorian and futuristic, with brass, copper, and glowing vacuum tubes everywhere.",
        "category": ["City", "Steampunk"],
    },
    {
        "title": "Enchanted Forest Library",
        "prompt": "A magical library hidden deep within an ancient, enchanted forest. The bookshelves are carved "
                  "from living trees, and bioluminescent fungi provide a soft, warm glow.",
        "category": ["Nature", "Fantasy"],
    },
    {
        "title": "Cybernetic Samurai",
        "prompt": "A lone cybernetic samurai standing on a neon-drenched rooftop overlooking a futuristic Tokyo. "
                  "Rain is falling, reflecting the vibrant city lights on his metallic armor and katana.",
        "category": ["Sci-fi", "City"],
    },
    {
        "title": "The Crystal Caverns",
        "prompt": "A vast, subterranean cavern filled with giant, luminous crystals of every color. A river of "
                  "liquid light flows through the center of the cavern.",
        "category": ["Nature"],
    },
    {
        "title": "Desert Planet Market",
        "prompt": "A sprawling, chaotic marketplace on a desert planet. Strange alien species haggle over exotic "
                  "goods under the twin suns.",
        "category": ["Space", "Sci-fi"],
    },
    {
        "title": "Floating Sky Castle",
        "prompt": "A magnificent castle floating high in the clouds, with waterfalls cascading from its sides into "
                  "the abyss below. The lighting is soft and ethereal, as if at sunrise.",
        "category": ["Fantasy"],
    },
    {
        "title": "Underwater City of Bioluminescence",
        "prompt": "A futuristic city deep beneath the ocean, built inside a massive air dome and lit by the "
                  "bioluminescence of the surrounding marine life.",
        "category": ["City", "Nature"],
    },
]


def seed_prompts(creator_email, creator_name):
    """Create missing sample prompts and refresh existing ones. Returns (created, updated)."""
    created = updated = 0
    for item in SAMPLE_PROMPTS:
        obj = Prompt.objects(title=item["title"], created_by=creator_email).first()
        if not obj:
            Prompt(
                image_url=PLACEHOLDER_IMAGE,
                cloudinary_id="",
                created_by=creator_email,
                creator_name=creator_name,
                **item
            ).save()
            created += 1
        else:
            obj.prompt = item["prompt"]
            obj.category = item["category"]
            obj.save()
            updated += 1
    return created, updated


class Command(BaseCommand):
    help = 'Insert the sample prompts into the gallery'

    def add_arguments(self, parser):
        parser.add_argument('--creator', default='gallery@promptgallery.local')
        parser.add_argument('--creator-name', default='Prompt Gallery')

    def handle(self, *args, **options):
        created, updated = seed_prompts(options['creator'], options['creator_name'])
        self.stdout.write(self.style.SUCCESS(f'Created {created}, updated {updated} sample prompts'))
