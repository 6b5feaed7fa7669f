import asyncio
import pytest
from gallery.debounce import Debouncer


def _record(debouncer):
    loop = asyncio.get_running_loop()
    events = []
    debouncer.settled.listen(lambda value: events.append((value, loop.time())))
    return events


# --------------------------
# Trailing-edge behaviour
# --------------------------

def test_only_final_value_is_emitted_after_quiet_period():
    async def scenario():
        loop = asyncio.get_running_loop()
        debouncer = Debouncer("", delay=0.3)
        events = _record(debouncer)

        for text in ["a", "ab", "abc"]:
            debouncer.push(text)
            last_keystroke = loop.time()
            await asyncio.sleep(0.05)

        assert events == []
        await asyncio.sleep(0.4)
        return events, last_keystroke

    events, last_keystroke = asyncio.run(scenario())

    assert [value for value, _ in events] == ["abc"]
    # timer resolution allows a hair of slack
    assert events[0][1] - last_keystroke >= 0.29


def test_every_push_restarts_the_timer():
    async def scenario():
        debouncer = Debouncer("", delay=0.1)
        events = _record(debouncer)

        debouncer.push("a")
        await asyncio.sleep(0.07)
        debouncer.push("ab")
        await asyncio.sleep(0.07)
        # 0.14s since the first push, but only 0.07s since the last one
        assert events == []
        await asyncio.sleep(0.1)
        return events

    events = asyncio.run(scenario())
    assert [value for value, _ in events] == ["ab"]


def test_settling_on_unchanged_value_emits_nothing():
    async def scenario():
        debouncer = Debouncer("luke", delay=0.01)
        events = _record(debouncer)

        debouncer.push("lu")
        debouncer.push("luke")
        await asyncio.sleep(0.05)
        return events

    assert asyncio.run(scenario()) == []


def test_pending_reflects_timer_state():
    async def scenario():
        debouncer = Debouncer("", delay=0.01)
        assert debouncer.pending is False
        debouncer.push("x")
        assert debouncer.pending is True
        await asyncio.sleep(0.05)
        assert debouncer.pending is False
        assert debouncer.settled.get() == "x"

    asyncio.run(scenario())


# --------------------------
# Cancel / close / flush
# --------------------------

def test_cancel_drops_pending_value():
    async def scenario():
        debouncer = Debouncer("", delay=0.02)
        events = _record(debouncer)

        debouncer.push("leia")
        debouncer.cancel()
        await asyncio.sleep(0.05)
        return events, debouncer.settled.get()

    events, settled = asyncio.run(scenario())
    assert events == []
    assert settled == ""


def test_close_prevents_any_later_emission():
    async def scenario():
        debouncer = Debouncer("", delay=0.02)
        events = _record(debouncer)

        debouncer.push("han")
        debouncer.close()
        debouncer.push("chewie")
        await asyncio.sleep(0.05)
        return events

    assert asyncio.run(scenario()) == []


def test_flush_emits_immediately():
    async def scenario():
        debouncer = Debouncer("", delay=10)
        events = _record(debouncer)

        debouncer.push("yoda")
        debouncer.flush()
        assert debouncer.pending is False
        return events

    events = asyncio.run(scenario())
    assert [value for value, _ in events] == ["yoda"]


def test_reset_replaces_settled_value_and_pending_input():
    async def scenario():
        debouncer = Debouncer("", delay=0.02)
        debouncer.push("r2")
        debouncer.reset("c3po")
        await asyncio.sleep(0.05)
        return debouncer.settled.get()

    assert asyncio.run(scenario()) == "c3po"


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Debouncer("", delay=-1)
