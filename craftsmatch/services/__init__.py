"""Business logic services package.

Contains the shipping calculator, checkout summary, carrier integration,
storefront theming and catalog access.
"""
