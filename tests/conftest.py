import pytest

from swipefeed.config import Config
from swipefeed.feed import ManualScheduler, SwipeFeedController
from swipefeed.models import Item
from swipefeed.ranking import InteractionLog


class RecordingRanking:
    """Stands in for the preference model."""
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def update(self, action, item):
        self.calls.append((action, item))
        if self.fail:
            raise RuntimeError("ranking down")


class RecordingRemote:
    """Stands in for the backend client."""
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def send_interaction(self, action, item_id):
        self.calls.append((action, item_id))
        if self.fail:
            raise ConnectionError("backend unreachable")


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def items():
    return [
        Item(id="a", title="Linen Shirt", brand="Arket", price=45.0, price_tier="low", tags=("casual", "linen")),
        Item(id="b", title="Wool Blazer", brand="Cos", price=180.0, price_tier="high", tags=("formal",)),
        Item(id="c", title="Cargo Pants", brand="Carhartt", price=95.0, price_tier="mid", tags=("street",)),
    ]


@pytest.fixture
def ranking():
    return RecordingRanking()


@pytest.fixture
def remote():
    return RecordingRemote()


@pytest.fixture
def make_feed(config, scheduler, ranking, remote):
    def factory(items, remote_sink=None, ranking_sink=None):
        log = InteractionLog(config.history.max_records,
                             ranking=ranking_sink if ranking_sink is not None else ranking,
                             remote=remote_sink if remote_sink is not None else remote)
        ticks = iter(range(1_000, 10_000_000, 1_000))
        return SwipeFeedController(config, scheduler, log, items=items, clock=lambda: next(ticks))
    return factory


@pytest.fixture
def feed(make_feed, items):
    return make_feed(items)


def _drag(feed, dx, dy, x0=200.0, y0=400.0):
    """Press, move in two steps and release; returns the decision."""
    if not feed.press(x0, y0):
        return None
    feed.move(x0 + dx / 2, y0 + dy / 2)
    feed.move(x0 + dx, y0 + dy)
    return feed.release()


@pytest.fixture
def drag():
    return _drag


@pytest.fixture
def failing_remote():
    return RecordingRemote(fail=True)


@pytest.fixture
def failing_ranking():
    return RecordingRanking(fail=True)
