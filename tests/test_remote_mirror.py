"""
Tests for services/remote_mirror.py
"""

import asyncio
import json

import httpx
import pytest

from listening_quiz.services.remote_mirror import RemoteMirror

URL = "http://mirror.test/api/questions"


def mirror_with(handler):
    return RemoteMirror(URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_push_posts_full_collection():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    ok = await mirror_with(handler).push([{"id": "q1"}, {"id": "q2"}])
    assert ok is True
    assert seen == {"method": "POST", "url": URL, "body": [{"id": "q1"}, {"id": "q2"}]}


@pytest.mark.asyncio
async def test_push_non_success_status_returns_false():
    ok = await mirror_with(lambda request: httpx.Response(500)).push([])
    assert ok is False


@pytest.mark.asyncio
async def test_push_transport_error_returns_false():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    ok = await mirror_with(handler).push([])
    assert ok is False


@pytest.mark.asyncio
async def test_schedule_runs_detached_and_drains():
    release = asyncio.Event()
    calls = []

    async def handler(request):
        await release.wait()
        calls.append(request)
        return httpx.Response(204)

    mirror = mirror_with(handler)
    task = mirror.schedule([{"id": "q1"}])
    assert task is not None
    assert not task.done()

    release.set()
    await mirror.drain(timeout=1)
    assert task.done()
    assert not task.cancelled()
    assert len(calls) == 1


def test_disabled_mirror_schedules_nothing():
    mirror = RemoteMirror("")
    assert mirror.enabled is False
    assert mirror.schedule([{"id": "q1"}]) is None


@pytest.mark.asyncio
async def test_rapid_schedules_send_only_newest_after_in_flight():
    release = asyncio.Event()
    bodies = []

    async def handler(request):
        bodies.append(json.loads(request.content))
        await release.wait()
        return httpx.Response(200)

    mirror = mirror_with(handler)
    first = mirror.schedule([{"id": "v1"}])
    while not bodies:
        await asyncio.sleep(0)

    assert mirror.schedule([{"id": "v2"}]) is first
    assert mirror.schedule([{"id": "v3"}]) is first

    release.set()
    await mirror.drain(timeout=1)
    assert bodies == [[{"id": "v1"}], [{"id": "v3"}]]


@pytest.mark.asyncio
async def test_schedule_after_finished_push_starts_new_worker():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200)

    mirror = mirror_with(handler)
    first = mirror.schedule([{"id": "v1"}])
    await mirror.drain(timeout=1)
    second = mirror.schedule([{"id": "v2"}])
    await mirror.drain(timeout=1)

    assert second is not first
    assert bodies == [[{"id": "v1"}], [{"id": "v2"}]]


@pytest.mark.asyncio
async def test_drain_cancels_push_that_outlives_timeout():
    never = asyncio.Event()

    async def handler(request):
        await never.wait()
        return httpx.Response(200)

    mirror = mirror_with(handler)
    task = mirror.schedule([{"id": "q1"}])
    await mirror.drain(timeout=0.05)

    assert task.done()
    assert task.cancelled()
    # Nothing is left to destroy at loop shutdown
    await mirror.drain(timeout=0.05)
