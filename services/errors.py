"""
Domain errors raised by repositories and services.
Routes translate them into JSON envelopes (see portal.utils.responses).
"""


class NotFoundError(Exception):
    """A referenced dealer, quote or record does not exist."""
    status_code = 404


class AuthenticationError(Exception):
    """Wrong password or unknown credentials."""
    status_code = 401


class AccessDeniedError(Exception):
    """Valid credentials, but not allowed here (portal country, sender role)."""
    status_code = 403
