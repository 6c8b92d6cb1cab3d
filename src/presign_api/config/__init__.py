"""
Configuration management for the Presign API.

Contains the Pydantic settings and the loader that validates them once at startup.
"""
