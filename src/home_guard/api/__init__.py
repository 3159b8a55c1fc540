"""Home Guard REST API"""

from .manager import create_app

__all__ = ['create_app']
