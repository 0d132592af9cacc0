"""
Domain layer

Entities, value objects and repository interfaces of the storefront.
"""
