import logging
from unittest.mock import AsyncMock

import pytest

from models.enums import EventSource, StorefrontEventType
from models.events import StorefrontEvent
from utils.event_bus import EventBus


def make_event(event_type: str, payload: dict | None = None) -> StorefrontEvent:
    return StorefrontEvent(event_type=event_type, payload=payload or {}, source=EventSource.TEST)


# --- subscribe / unsubscribe --- #


def test_event_bus_starts_empty():
    assert EventBus().subscribers == {}


def test_subscribe_keeps_callbacks_per_event_type():
    bus = EventBus()
    on_cart = AsyncMock(name="on_cart")
    on_cart_badge = AsyncMock(name="on_cart_badge")
    on_load = AsyncMock(name="on_load")

    bus.subscribe(StorefrontEventType.CART_CHANGED.value, on_cart)
    bus.subscribe(StorefrontEventType.CART_CHANGED.value, on_cart_badge)
    bus.subscribe(StorefrontEventType.PRODUCT_LOADED.value, on_load)

    assert bus.subscribers["cart_changed"] == [on_cart, on_cart_badge]
    assert bus.subscribers["product_loaded"] == [on_load]


def test_subscribe_duplicate_callback_is_ignored(caplog):
    bus = EventBus()
    callback = AsyncMock()

    with caplog.at_level(logging.WARNING):
        bus.subscribe("cart_changed", callback)
        bus.subscribe("cart_changed", callback)

    assert bus.subscribers["cart_changed"] == [callback]
    assert "already subscribed" in caplog.text


def test_subscribe_non_callable():
    bus = EventBus()
    with pytest.raises(TypeError, match="Callback must be a callable async function."):
        bus.subscribe("cart_changed", "not a function")  # type: ignore [arg-type]
    assert "cart_changed" not in bus.subscribers


def test_unsubscribe_last_callback_removes_event_type():
    bus = EventBus()
    first = AsyncMock()
    second = AsyncMock()
    bus.subscribe("cart_changed", first)
    bus.subscribe("cart_changed", second)

    bus.unsubscribe("cart_changed", first)
    assert bus.subscribers["cart_changed"] == [second]

    bus.unsubscribe("cart_changed", second)
    assert "cart_changed" not in bus.subscribers


def test_unsubscribe_unknown_callback_logs_warning(caplog):
    bus = EventBus()
    bus.subscribe("cart_changed", AsyncMock())

    with caplog.at_level(logging.WARNING):
        bus.unsubscribe("cart_changed", AsyncMock())

    assert len(bus.subscribers["cart_changed"]) == 1
    assert "Callback AsyncMock not found" in caplog.text


def test_unsubscribe_from_unknown_event_type_is_noop():
    bus = EventBus()
    bus.unsubscribe("nothing_here", AsyncMock())
    assert bus.subscribers == {}


# --- publish --- #


@pytest.mark.asyncio
async def test_publish_reaches_only_matching_subscribers():
    bus = EventBus()
    on_cart = AsyncMock()
    on_load = AsyncMock()
    bus.subscribe("cart_changed", on_cart)
    bus.subscribe("product_loaded", on_load)

    event = make_event("cart_changed", {"user_id": "u1"})
    delivered = await bus.publish(event)

    assert delivered == 1
    on_cart.assert_awaited_once_with(event)
    on_load.assert_not_called()


@pytest.mark.asyncio
async def test_publish_without_subscribers_returns_zero():
    assert await EventBus().publish(make_event("cart_changed")) == 0


@pytest.mark.asyncio
async def test_publish_isolates_failing_subscriber(caplog):
    bus = EventBus()
    healthy = AsyncMock()
    failing = AsyncMock(side_effect=ValueError("badge refresh failed"))
    bus.subscribe("cart_changed", healthy)
    bus.subscribe("cart_changed", failing)

    event = make_event("cart_changed")
    with caplog.at_level(logging.ERROR):
        delivered = await bus.publish(event)

    assert delivered == 1
    healthy.assert_awaited_once_with(event)
    failing.assert_awaited_once_with(event)
    assert "Error in subscriber callback 'AsyncMock'" in caplog.text
    assert "badge refresh failed" in caplog.text


@pytest.mark.asyncio
async def test_publish_rejects_non_event_objects(caplog):
    bus = EventBus()
    callback = AsyncMock()
    bus.subscribe("cart_changed", callback)
    invalid = {"event_type": "cart_changed", "payload": {}}

    with caplog.at_level(logging.ERROR):
        assert await bus.publish(invalid) == 0  # type: ignore [arg-type]

    assert f"Attempted to publish invalid event type: {type(invalid)}" in caplog.text
    callback.assert_not_called()
