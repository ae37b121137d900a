"""
WSGI config for the home rental backend.

The project is served over ASGI (Uvicorn) so chat WebSockets work; this WSGI
entry point serves the HTTP API alone for traditional deployments.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
