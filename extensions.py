"""
Shared Flask extension instances, bound to the app in app_init.create_app()
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
