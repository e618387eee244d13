from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import (
    Command as StaticfilesRunserverCommand,
)


class Command(StaticfilesRunserverCommand):
    """`runserver` that listens on settings.PORT unless an address is given."""

    default_port = str(settings.PORT)
