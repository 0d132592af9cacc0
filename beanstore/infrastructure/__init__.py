"""
Infrastructure layer

Configuration, logging, HTTP adapters and shared utilities.
"""
