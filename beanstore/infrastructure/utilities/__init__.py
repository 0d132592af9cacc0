"""
Infrastructure utilities

Constants, exceptions and localization helpers.
"""
