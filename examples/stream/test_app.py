"""Tests for the stream example — two SSE endpoints behind one app."""

from eventwire.testing import capture_sse


class TestFeed:
    async def test_streams_all_notifications(self, example_app) -> None:
        result = await capture_sse(example_app, "/feed")

        assert result.status == 200
        assert result.headers["content-type"] == "text/event-stream"
        assert result.finished

        messages = result.messages
        assert messages[0].retry == 3000
        assert messages[1].comment == "Welcome to the live feed!"
        assert [m.event for m in messages[2:]] == ["status", "alert", "status"]
        assert [m.id for m in messages[2:]] == ["1", "2", "3"]

    async def test_disconnect_stops_feed(self, example_app) -> None:
        result = await capture_sse(example_app, "/feed", disconnect_after=2)

        assert result.finished is False
        assert len(result.messages) < 5


class TestClock:
    async def test_three_ticks(self, example_app) -> None:
        result = await capture_sse(example_app, "/clock")

        ticks = [m for m in result.messages if m.event == "tick"]
        assert [m.id for m in ticks] == ["1", "2", "3"]
        assert all(m.data for m in ticks)


class TestNotFound:
    async def test_unknown_path(self, example_app) -> None:
        result = await capture_sse(example_app, "/missing")

        assert result.status == 404
        assert result.body == "Not Found"
