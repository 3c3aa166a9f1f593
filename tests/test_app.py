import asyncio
import io

from lexbot.app import create_relay, serve
from lexbot.brain.store import Brain
from lexbot.bus.dispatch import Dispatcher
from lexbot.bus.queue import MessageBus
from lexbot.channels.console import ConsoleChannel
from lexbot.config.loader import load_config

from tests.conftest import make_message


def _config(tmp_path, **environ):
    return load_config(tmp_path / "missing.json", environ=environ)


def _round_trip(relay, bus, msg):
    """Push ``msg`` through the bus and return the first reply, if any."""

    async def go():
        task = asyncio.create_task(relay.run())
        await bus.publish_inbound(msg)
        try:
            return await asyncio.wait_for(bus.consume_outbound(), timeout=0.5)
        except asyncio.TimeoutError:
            return None
        finally:
            relay.stop()
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            await relay.drain()
            await relay.client.aclose()

    return asyncio.run(go())


def test_end_to_end_reply(tmp_path, backend):
    config = _config(tmp_path, BACKEND_URL="http://x/messages", START_PATTERN="lex", BOT_NAME="bot")
    backend.reply(200, {"message": "hello!"})
    bus = MessageBus()
    relay = create_relay(config, bus, Brain(), transport=backend.transport)

    reply = _round_trip(relay, bus, make_message("@bot lex hello"))

    assert backend.bodies[0]["text"] == "lex hello"
    assert reply.text == "hello!"
    assert reply.room_id == "#test"


def test_missing_backend_url_disables_relay(tmp_path, backend, log_records):
    config = _config(tmp_path)
    dispatcher = Dispatcher()

    relay = create_relay(config, MessageBus(), Brain(), dispatcher=dispatcher, transport=backend.transport)

    assert relay is None
    assert len(dispatcher) == 0
    assert dispatcher.matching(make_message("@bot lex hello")) == []
    assert backend.requests == []
    errors = [r for r in log_records if r["level"].name == "ERROR"]
    assert len(errors) == 1
    assert "BACKEND_URL" in errors[0]["message"]


def test_default_config_ignores_bare_mention(tmp_path, backend):
    config = _config(tmp_path, BACKEND_URL="http://x/messages")
    bus = MessageBus()
    relay = create_relay(config, bus, Brain(), transport=backend.transport)

    reply = _round_trip(relay, bus, make_message(f"@{config.bot_name} hello"))

    assert reply is None
    assert backend.requests == []


def test_ignored_sender_end_to_end(tmp_path, backend):
    config = _config(tmp_path, BACKEND_URL="http://x/messages", IGNORED_SENDER_IDS="1")
    bus = MessageBus()
    relay = create_relay(config, bus, Brain(), transport=backend.transport)

    reply = _round_trip(relay, bus, make_message("@bot lex hello", sender_id="1"))

    assert reply is None
    assert backend.requests == []


def test_relay_registers_catch_all_listener(tmp_path, backend):
    config = _config(tmp_path, BACKEND_URL="http://x/messages")
    dispatcher = Dispatcher()
    create_relay(config, MessageBus(), Brain(), dispatcher=dispatcher, transport=backend.transport)

    assert [l.name for l in dispatcher.listeners] == ["lex"]
    assert len(dispatcher.matching(make_message("anything at all"))) == 1


def test_unsafe_start_pattern_uses_default(tmp_path, backend):
    config = _config(tmp_path, BACKEND_URL="http://x/messages", START_PATTERN="(a+)+$")
    backend.reply(200, {"message": "hi"})
    bus = MessageBus()
    relay = create_relay(config, bus, Brain(), transport=backend.transport)

    reply = _round_trip(relay, bus, make_message("lex please"))

    assert reply.text == "hi"


def test_console_session(tmp_path, backend, monkeypatch):
    brain_path = tmp_path / "brain.json"
    config = _config(tmp_path, BACKEND_URL="http://x/messages", BRAIN_PATH=str(brain_path))
    backend.reply(200, {"dialogState": "ElicitSlot", "message": "Which city?"})

    def relay_with_fake_backend(config, bus, brain):
        return create_relay(config, bus, brain, transport=backend.transport)

    monkeypatch.setattr("lexbot.app.create_relay", relay_with_fake_backend)
    stdout = io.StringIO()
    bus = MessageBus()
    channel = ConsoleChannel(bus, user_id="alice", room_id="#test", stdin=io.StringIO("hello\nlex book\n"), stdout=stdout)

    assert asyncio.run(serve(config, channel, bus)) == 0

    assert stdout.getvalue() == "alice: Which city?\n"
    assert len(backend.requests) == 1
    assert '"conversation-#test"' in brain_path.read_text(encoding="utf-8")


def test_serve_without_backend_url(tmp_path):
    bus = MessageBus()
    channel = ConsoleChannel(bus, stdin=io.StringIO(""), stdout=io.StringIO())
    assert asyncio.run(serve(_config(tmp_path), channel, bus)) == 1
