"""ASGI entrypoint. Chairs only receive server-pushed events, so HTTP is the sole protocol routed here."""

import os

from channels.routing import ProtocolTypeRouter
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "app_backend.settings.settings")

application = ProtocolTypeRouter({
    "http": get_asgi_application(),
})
