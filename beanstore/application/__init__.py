"""
Application layer

Use cases, DTOs and the ports the presentation layer implements.
"""
