"""
SwipeFeed Ranking Module

Interaction history and the local preference model it feeds.
"""
from .interaction_log import InteractionLog
from .preferences import PreferenceModel

__all__ = [
    'InteractionLog',
    'PreferenceModel',
]
