"""
campusnav.api - HTTP Transport Layer
======================================
"""

from campusnav.api.app import create_app, get_service

__all__ = ["create_app", "get_service"]
