# filehub/management/commands/runserver.py

from django.conf import settings
from django.core.management.commands.runserver import Command as BaseRunserverCommand


class Command(BaseRunserverCommand):
    """`runserver` listening on the configured PORT (default 5000) instead of 8000."""

    def handle(self, *args, **options):
        self.default_port = str(settings.PORT)
        super().handle(*args, **options)
