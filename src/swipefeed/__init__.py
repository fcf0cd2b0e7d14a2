"""
SwipeFeed - swipe-to-like recommendation feed engine.
"""
from typing import Optional, Sequence

from .config import Config, ConfigError, load_config
from .feed import ManualScheduler, QtScheduler, Scheduler, SwipeFeedController
from .models import Decision, InteractionRecord, Item, Offset
from .ranking import InteractionLog, PreferenceModel
from .sync import ApiClient, Identity

__version__ = "0.1.0"


def create_feed(
    config: Config,
    scheduler: Scheduler,
    items: Optional[Sequence[Item]] = None,
    model: Optional[PreferenceModel] = None,
    api: Optional[ApiClient] = None,
) -> SwipeFeedController:
    """
    Wire a controller with its interaction log, ranking model and backend sink.

    Args:
        config: Loaded configuration
        scheduler: Timer source
        items: Initial feed
        model: Ranking model receiving every decision (a fresh one if None)
        api: Backend client; None keeps the session offline
    """
    if model is None:
        model = PreferenceModel(config.ranking.learning_rate)
    log = InteractionLog(config.history.max_records, ranking=model, remote=api)
    return SwipeFeedController(config, scheduler, log, items=items)


__all__ = [
    'ApiClient',
    'Config',
    'ConfigError',
    'Decision',
    'Identity',
    'InteractionLog',
    'InteractionRecord',
    'Item',
    'ManualScheduler',
    'Offset',
    'PreferenceModel',
    'QtScheduler',
    'Scheduler',
    'SwipeFeedController',
    'create_feed',
    'load_config',
]
