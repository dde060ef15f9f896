"""Services app package.

Bookable offerings of a provider at a hotel: base price, optional express
surcharge, item catalog for itemised categories and the weekly schedule
consulted by the availability gate.
"""
