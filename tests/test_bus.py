import asyncio
import io

from lexbot.bus.dispatch import Dispatcher, always
from lexbot.bus.events import OutboundMessage
from lexbot.bus.queue import MessageBus
from lexbot.channels.base import ChannelManager
from lexbot.channels.console import ConsoleChannel

from tests.conftest import make_message


async def _noop(msg):
    return None


def test_listeners_match_in_registration_order():
    dispatcher = Dispatcher()
    dispatcher.listen(lambda m: "lex" in m.text, _noop, name="lex-only")
    dispatcher.listen(always, _noop, name="catch-all")

    assert [l.name for l in dispatcher.matching(make_message("lex hi"))] == ["lex-only", "catch-all"]
    assert [l.name for l in dispatcher.matching(make_message("hi"))] == ["catch-all"]


def test_session_key():
    assert make_message("x", room_id="#a", channel="slack").session_key == "slack:#a"


def test_console_channel_publishes_lines():
    bus = MessageBus()
    channel = ConsoleChannel(bus, user_id="alice", room_id="#test", stdin=io.StringIO("lex hi\n\nbye\n"))

    async def go():
        await channel.start()
        return [await bus.consume_inbound(), await bus.consume_inbound()]

    first, second = asyncio.run(go())
    assert (first.channel, first.sender_id, first.room_id, first.text) == ("console", "alice", "#test", "lex hi")
    assert second.text == "bye"


def test_console_channel_prints_replies():
    stdout = io.StringIO()
    channel = ConsoleChannel(MessageBus(), stdout=stdout)
    asyncio.run(channel.send(OutboundMessage(channel="console", room_id="console", text="hello!", reply_to="alice")))
    asyncio.run(channel.send(OutboundMessage(channel="console", room_id="console", text="posted")))
    assert stdout.getvalue() == "alice: hello!\nposted\n"


def test_channel_manager_drops_unknown_channel(log_records):
    bus = MessageBus()
    manager = ChannelManager(bus, [])

    async def go():
        task = asyncio.create_task(manager.dispatch_outbound())
        await bus.publish_outbound(OutboundMessage(channel="irc", room_id="#x", text="hi"))
        await bus.outbound.join()
        manager.stop()
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    asyncio.run(go())
    assert any("Unknown channel" in r["message"] for r in log_records)
