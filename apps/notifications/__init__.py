"""Notifications app package.

Fans booking lifecycle events out to guests and providers over email and
WhatsApp. Dispatch runs in a Celery worker after the booking transaction
has committed; a failing channel is recorded and never affects the
booking.
"""
