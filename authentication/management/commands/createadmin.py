"""
Management command to create an administrator account.
Usage: python manage.py createadmin --email admin@datkomp.lv --first-name Ada --last-name Admin
"""
import getpass
import logging

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

User = get_user_model()
logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create an administrator account for the admin panel'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, required=True, help='Login email of the administrator')
        parser.add_argument('--first-name', type=str, default='Admin')
        parser.add_argument('--last-name', type=str, default='')
        parser.add_argument(
            '--password',
            type=str,
            help='Password (prompted for when omitted)',
        )

    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        try:
            validate_email(email)
        except ValidationError:
            raise CommandError(f"Invalid email address: {email}")

        if User.objects.filter(email__iexact=email).exists():
            raise CommandError(f"A user with email {email} already exists")

        password = options.get('password')
        if not password:
            password = getpass.getpass('Password: ')
            if password != getpass.getpass('Password (again): '):
                raise CommandError("Passwords do not match")

        if len(password) < 8:
            raise CommandError("Password must be at least 8 characters")

        user = User.objects.create_superuser(
            email=email,
            password=password,
            first_name=options['first_name'],
            last_name=options['last_name'],
        )
        logger.info(f"Administrator created from command line: {user.email}")
        self.stdout.write(self.style.SUCCESS(f'Administrator {user.email} created'))
