"""
WSGI config for the hospital dashboard project.

It exposes the WSGI callable as a module-level variable named
``application``.  The change feed needs the ASGI entrypoint; plain
HTTP deployments can use this one.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')

application = get_wsgi_application()
