import asyncio

import pytest

from chatlink.events import DeepLinkChannel, DeepLinkEvent


def test_publish_calls_handlers_with_event():
    channel = DeepLinkChannel()
    received = []
    channel.subscribe(received.append)

    assert channel.publish({"server": "team"}) == []
    assert received == [DeepLinkEvent(server="team")]


def test_unsubscribe_stops_delivery():
    channel = DeepLinkChannel()
    received = []
    unsubscribe = channel.subscribe(received.append)

    unsubscribe()
    unsubscribe()
    channel.publish(DeepLinkEvent(server="team"))

    assert received == []
    assert channel.subscriber_count == 0


def test_failing_handler_does_not_block_others():
    channel = DeepLinkChannel()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    channel.subscribe(broken)
    channel.subscribe(received.append)
    channel.publish({"server": "team"})

    assert received == [DeepLinkEvent(server="team")]


@pytest.mark.asyncio
async def test_coroutine_handlers_are_scheduled():
    channel = DeepLinkChannel()
    received = []

    async def handler(event):
        await asyncio.sleep(0)
        received.append(event.server)

    channel.subscribe(handler)
    tasks = channel.publish({"server": "team"})
    await asyncio.gather(*tasks)

    assert received == ["team"]


def test_event_without_server():
    assert DeepLinkEvent.model_validate({}).server is None
