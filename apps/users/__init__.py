"""Users app package.

Defines the custom user model with a single role per account (guest,
hotel administrator, service provider, superuser). Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
