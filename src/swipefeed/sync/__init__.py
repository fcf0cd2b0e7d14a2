"""
SwipeFeed Sync Module

Backend calls for interaction persistence and product loading.
"""
from .client import ApiClient, Identity, run_in_thread

__all__ = [
    'ApiClient',
    'Identity',
    'run_in_thread',
]
