"""Bookings app package.

This app encapsulates the settlement core: markup resolution, pricing,
the booking and payment state machine, the cancellation window and
review-driven provider ratings. Handlers in ``application`` run each
operation in one transaction and publish domain events after commit.
"""
