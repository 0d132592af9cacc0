"""
beanstore - client core of a coffee bean storefront
"""

__version__ = "1.0.0"
