from unittest.mock import MagicMock, patch

import pytest
import requests

from swipefeed.config import BackendConfig
from swipefeed.models import Decision
from swipefeed.sync import ApiClient, Identity


def _response(ok=True, status=200, body=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status
    response.text = "" if ok else "boom"
    response.json.return_value = body
    if not ok:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return response


def _sync(fn, *args):
    fn(*args)


@pytest.fixture
def user_client():
    return ApiClient("http://shop.test/", Identity(token="tok-123"), timeout=2.0, dispatch=_sync)


@pytest.fixture
def guest_client():
    return ApiClient("http://shop.test", Identity(guest_id="guest-9"), dispatch=_sync)


class TestInteractionSync:
    @patch("swipefeed.sync.client.requests.post")
    def test_like_posts_with_bearer_token(self, mock_post, user_client):
        mock_post.return_value = _response(status=201)

        assert user_client.post_interaction(Decision.LIKE, "p1") is True

        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == "http://shop.test/api/likes/p1"
        assert kwargs["headers"]["Authorization"] == "Bearer tok-123"
        assert "x-guest-id" not in kwargs["headers"]
        assert kwargs["json"] == {"productId": "p1"}
        assert kwargs["timeout"] == 2.0

    @patch("swipefeed.sync.client.requests.delete")
    def test_guest_dislike_deletes_like(self, mock_delete, guest_client):
        mock_delete.return_value = _response()

        assert guest_client.post_interaction(Decision.DISLIKE, "p2") is True

        _, kwargs = mock_delete.call_args
        assert kwargs["headers"]["x-guest-id"] == "guest-9"
        assert kwargs["json"] == {"productId": "p2", "guestId": "guest-9"}

    @patch("swipefeed.sync.client.requests.post")
    def test_network_error_is_logged(self, mock_post, user_client, caplog):
        mock_post.side_effect = requests.ConnectionError("down")

        assert user_client.post_interaction(Decision.LIKE, "p1") is False
        assert "Interaction sync failed for p1" in caplog.text

    @patch("swipefeed.sync.client.requests.post")
    def test_rejected_call_is_logged(self, mock_post, user_client, caplog):
        mock_post.return_value = _response(ok=False, status=404)

        assert user_client.post_interaction(Decision.LIKE, "missing") is False
        assert "HTTP 404" in caplog.text

    def test_only_likes_and_dislikes_sync(self, user_client):
        with pytest.raises(ValueError):
            user_client.post_interaction(Decision.CANCEL, "p1")

    @patch("swipefeed.sync.client.requests.post")
    def test_send_interaction_goes_through_dispatcher(self, mock_post):
        queued = []
        client = ApiClient("http://shop.test", dispatch=lambda fn, *a: queued.append((fn, a)))

        client.send_interaction(Decision.LIKE, "p3")
        mock_post.assert_not_called()

        fn, args = queued[0]
        mock_post.return_value = _response()
        fn(*args)
        mock_post.assert_called_once()


class TestProductFeed:
    @patch("swipefeed.sync.client.requests.get")
    def test_fetch_items_maps_products(self, mock_get, guest_client):
        mock_get.return_value = _response(body=[
            {"_id": "p1", "name": "Denim Jacket", "brand": "Levi's", "category": "outerwear",
             "tags": ["denim"], "basePrice": 120, "images": ["https://img/p1.jpg"]},
            {"name": "no id"},
            {"id": "p2", "title": "Tee", "price": 20},
        ])

        items = guest_client.fetch_items(brands=["Levi's", "Cos"], colors=["blue"])

        _, kwargs = mock_get.call_args
        assert kwargs["params"] == {"brand": "Levi's,Cos", "color": "blue"}
        assert [i.id for i in items] == ["p1", "p2"]
        assert items[0].tags == ("denim", "outerwear")
        assert items[0].price_tier == "mid"
        assert items[1].price_tier == "low"

    @patch("swipefeed.sync.client.requests.get")
    def test_fetch_failure_gives_empty_feed(self, mock_get, guest_client):
        mock_get.return_value = _response(ok=False, status=500)
        assert guest_client.fetch_items() == []

        mock_get.return_value = _response(body={"message": "nope"})
        assert guest_client.fetch_items() == []

        mock_get.side_effect = requests.Timeout("slow")
        assert guest_client.fetch_items() == []

    @patch("swipefeed.sync.client.requests.get")
    def test_check_health(self, mock_get, user_client):
        mock_get.return_value = _response()
        assert user_client.check_health() is True
        mock_get.side_effect = requests.ConnectionError("down")
        assert user_client.check_health() is False


def test_from_config():
    config = BackendConfig(base_url="http://api.test", timeout=1.5, guest_id="g1")
    client = ApiClient.from_config(config)
    assert client.base_url == "http://api.test"
    assert client.timeout == 1.5
    assert client.identity.is_guest
    assert client.headers["x-guest-id"] == "g1"
