"""Providers app package.

Service providers fulfil bookings for a hotel. External providers are
independent businesses and may negotiate their own markup; internal
providers are operated by the hotel itself and never carry a markup.
"""
