"""
Management command to initialize default hardware categories.
Run with: python manage.py init_default_categories
"""
from django.core.management.base import BaseCommand
from store.models import Category


DEFAULT_CATEGORIES = [
    {'slug': 'processors', 'name': 'Processors', 'description': 'Desktop and workstation CPUs'},
    {'slug': 'motherboards', 'name': 'Motherboards', 'description': 'Mainboards for Intel and AMD platforms'},
    {'slug': 'graphics-cards', 'name': 'Graphics Cards', 'description': 'Discrete GPUs for gaming and compute'},
    {'slug': 'memory', 'name': 'Memory', 'description': 'DDR4 and DDR5 RAM modules'},
    {'slug': 'storage', 'name': 'Storage', 'description': 'SSDs, NVMe drives and hard disks'},
    {'slug': 'power-supplies', 'name': 'Power Supplies', 'description': 'ATX and SFX power supply units'},
    {'slug': 'cases', 'name': 'Cases', 'description': 'Tower, mid-tower and small form factor cases'},
    {'slug': 'cooling', 'name': 'Cooling', 'description': 'Air coolers, AIO liquid coolers and case fans'},
    {'slug': 'monitors', 'name': 'Monitors', 'description': 'Gaming and office displays'},
    {'slug': 'peripherals', 'name': 'Peripherals', 'description': 'Keyboards, mice and headsets'},
    {'slug': 'laptops', 'name': 'Laptops', 'description': 'Notebooks for work and gaming'},
    {'slug': 'networking', 'name': 'Networking', 'description': 'Routers, switches and network adapters'},
]


class Command(BaseCommand):
    help = 'Initialize default hardware categories'

    def handle(self, *args, **options):
        created_count = 0
        existing_count = 0

        for category_data in DEFAULT_CATEGORIES:
            name = category_data['name']

            exists = (
                Category.objects.filter(slug=category_data['slug']).exists()
                or Category.objects.filter(name=name).exists()
            )
            if exists:
                existing_count += 1
                self.stdout.write(self.style.WARNING(f'Category already exists: {name}'))
                continue

            Category.objects.create(
                slug=category_data['slug'],
                name=name,
                description=category_data['description'],
            )
            created_count += 1
            self.stdout.write(self.style.SUCCESS(f'Created category: {name}'))

        total = created_count + existing_count
        self.stdout.write(
            self.style.SUCCESS(f'Done! Created: {created_count}, Already existed: {existing_count}, Total: {total}')
        )
