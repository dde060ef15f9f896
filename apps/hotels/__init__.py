"""Hotels app package.

A hotel is the tenant that sells provider services to its guests and owns
the markup policy applied on top of provider prices.
"""
