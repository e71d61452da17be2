import asyncio

import pytest

from conftest import FakeCrawlClient
from models.crawl import SubmittedJob
from models.errors import (
    TransportError,
    UpstreamJobFailedError,
    UpstreamProtocolError,
    UpstreamTimeoutError,
)
from tools.crawl.poller import JobPoller, parse_job_status, task_from_submit_response

PENDING = {"status": "pending"}
DONE = {"status": "completed", "results": [{"url": "https://a.test", "markdown": "# A"}]}


def _run(poller, task_id="task-1", **kwargs):
    return asyncio.run(poller.run(SubmittedJob(task_id=task_id), **kwargs))


@pytest.mark.unit
def test_task_id_is_read_from_submit_response():
    assert task_from_submit_response({"task_id": "abc"}) == SubmittedJob(task_id="abc")
    assert task_from_submit_response({"task_id": 17}).task_id == "17"


@pytest.mark.unit
@pytest.mark.parametrize("payload", [None, {}, {"task_id": ""}, {"task_id": None}, ["abc"]])
def test_missing_task_id_is_a_protocol_error(payload):
    with pytest.raises(UpstreamProtocolError) as exc_info:
        task_from_submit_response(payload)
    assert "No task ID" in exc_info.value.message
    assert exc_info.value.details["field"] == "task_id"


@pytest.mark.unit
def test_first_poll_happens_without_delay(recording_sleep):
    client = FakeCrawlClient(poll_responses=[DONE])
    poller = JobPoller(client, sleep=recording_sleep)

    results = _run(poller)

    assert results == DONE["results"]
    assert client.poll_calls == ["task-1"]
    assert recording_sleep.calls == []


@pytest.mark.unit
def test_completion_on_last_attempt_succeeds(recording_sleep):
    client = FakeCrawlClient(poll_responses=[PENDING] * 29 + [DONE])
    poller = JobPoller(client, max_attempts=30, interval_s=2.0, sleep=recording_sleep)

    results = _run(poller)

    assert results == DONE["results"]
    assert len(client.poll_calls) == 30
    assert recording_sleep.calls == [2.0] * 29


@pytest.mark.unit
def test_exhausted_budget_times_out_without_extra_attempt(recording_sleep):
    client = FakeCrawlClient(poll_responses=[{"status": "running"}] * 30)
    poller = JobPoller(client, max_attempts=30, interval_s=2.0, sleep=recording_sleep)

    with pytest.raises(UpstreamTimeoutError) as exc_info:
        _run(poller, task_id="slow-task")

    assert len(client.poll_calls) == 30
    assert len(recording_sleep.calls) == 29
    assert exc_info.value.task_id == "slow-task"
    assert exc_info.value.attempts == 30
    assert "slow-task" in exc_info.value.message
    assert "30" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.parametrize("completed", [{"status": "completed"}, {"status": "completed", "results": []}])
def test_completed_without_results_is_a_protocol_error(completed, recording_sleep):
    client = FakeCrawlClient(poll_responses=[PENDING, completed])
    poller = JobPoller(client, sleep=recording_sleep)

    with pytest.raises(UpstreamProtocolError) as exc_info:
        _run(poller)

    assert "No results in completed task" in exc_info.value.message
    assert exc_info.value.details == {"field": "results", "task_id": "task-1"}


@pytest.mark.unit
def test_completed_without_results_is_accepted_when_not_required(recording_sleep):
    client = FakeCrawlClient(poll_responses=[{"status": "completed", "results": []}])
    poller = JobPoller(client, sleep=recording_sleep)

    assert _run(poller, require_results=False) == []


@pytest.mark.unit
def test_failed_status_carries_upstream_message(recording_sleep):
    client = FakeCrawlClient(poll_responses=[PENDING, {"status": "failed", "error": "boom"}])
    poller = JobPoller(client, sleep=recording_sleep)

    with pytest.raises(UpstreamJobFailedError) as exc_info:
        _run(poller)

    assert exc_info.value.message == "boom"
    assert exc_info.value.task_id == "task-1"
    assert len(client.poll_calls) == 2


@pytest.mark.unit
def test_failed_status_without_error_uses_default_message(recording_sleep):
    client = FakeCrawlClient(poll_responses=[{"status": "failed"}])
    poller = JobPoller(client, sleep=recording_sleep)

    with pytest.raises(UpstreamJobFailedError) as exc_info:
        _run(poller)

    assert exc_info.value.message == "Unknown error"


@pytest.mark.unit
def test_unknown_statuses_keep_polling(recording_sleep):
    client = FakeCrawlClient(poll_responses=[{}, {"status": None}, {"status": "queued"}, DONE])
    poller = JobPoller(client, max_attempts=5, interval_s=0.5, sleep=recording_sleep)

    assert _run(poller) == DONE["results"]
    assert recording_sleep.calls == [0.5, 0.5, 0.5]


@pytest.mark.unit
def test_transport_error_during_polling_propagates(recording_sleep):
    client = FakeCrawlClient(poll_responses=[PENDING, TransportError("connection reset")])
    poller = JobPoller(client, sleep=recording_sleep)

    with pytest.raises(TransportError):
        _run(poller)


@pytest.mark.unit
def test_non_object_status_payload_is_a_protocol_error():
    with pytest.raises(UpstreamProtocolError):
        parse_job_status(["completed"], "task-1")
    with pytest.raises(UpstreamProtocolError):
        parse_job_status({"status": "completed", "results": "nope"}, "task-1")


@pytest.mark.unit
def test_poll_diagnostics_are_logged(recording_sleep, caplog):
    client = FakeCrawlClient(poll_responses=[PENDING, DONE])
    poller = JobPoller(client, max_attempts=3, sleep=recording_sleep)

    with caplog.at_level("INFO", logger="tools.crawl.poller"):
        _run(poller, task_id="t-42")

    messages = [r.getMessage() for r in caplog.records]
    assert "Task t-42 not completed yet (attempt 1/3), status: pending" in messages
    progress = next(r for r in caplog.records if "not completed yet" in r.getMessage())
    assert progress.extra_fields == {
        "task_id": "t-42",
        "attempt": 1,
        "max_attempts": 3,
        "status": "pending",
    }


@pytest.mark.unit
def test_rejects_empty_attempt_budget():
    with pytest.raises(ValueError):
        JobPoller(FakeCrawlClient(), max_attempts=0)


@pytest.mark.unit
def test_concurrent_runs_do_not_share_state(recording_sleep):
    first = FakeCrawlClient(poll_responses=[PENDING, PENDING, DONE])
    second = FakeCrawlClient(poll_responses=[{"status": "failed", "error": "nope"}])

    async def both():
        ok = JobPoller(first, sleep=recording_sleep).run(SubmittedJob("a"))
        bad = JobPoller(second, sleep=recording_sleep).run(SubmittedJob("b"))
        return await asyncio.gather(ok, bad, return_exceptions=True)

    ok_result, bad_result = asyncio.run(both())

    assert ok_result == DONE["results"]
    assert isinstance(bad_result, UpstreamJobFailedError)
    assert first.poll_calls == ["a", "a", "a"]
    assert second.poll_calls == ["b"]
