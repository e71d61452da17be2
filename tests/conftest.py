import pytest

from models.crawl import DEFAULT_JOB_CONFIG

CRAWL_ENV_VARS = [
    "CRAWL4AI_API_URL",
    "API_URL",
    "CRAWL4AI_AUTH_TOKEN",
    "AUTH_TOKEN",
    "CRAWL4AI_PROTOCOL",
    "CRAWL4AI_MAX_POLL_ATTEMPTS",
    "CRAWL4AI_POLL_INTERVAL_MS",
    "CRAWL4AI_HTTP_TIMEOUT_S",
]


class FakeCrawlClient:
    """
    Scripted stand-in for Crawl4AIClient.

    Poll responses are consumed in order; an Exception instance in any
    script slot is raised instead of returned. Polling past the end of the
    script fails the test.
    """

    def __init__(self, submit_response=None, poll_responses=None, direct_response=None):
        self.base_url = "http://crawl4ai.test"
        self.submit_response = submit_response
        self.poll_responses = list(poll_responses or [])
        self.direct_response = direct_response
        self.submit_calls = []
        self.direct_calls = []
        self.poll_calls = []
        self.closed = False

    @staticmethod
    def _answer(response):
        if isinstance(response, Exception):
            raise response
        return response

    async def submit(self, urls, job_config=DEFAULT_JOB_CONFIG):
        self.submit_calls.append(list(urls))
        return self._answer(self.submit_response)

    async def submit_direct(self, urls, job_config=DEFAULT_JOB_CONFIG):
        self.direct_calls.append(list(urls))
        return self._answer(self.direct_response)

    async def poll_status(self, task_id):
        self.poll_calls.append(task_id)
        if len(self.poll_calls) > len(self.poll_responses):
            raise AssertionError(f"unexpected poll #{len(self.poll_calls)} for task {task_id}")
        return self._answer(self.poll_responses[len(self.poll_calls) - 1])

    async def aclose(self):
        self.closed = True


class RecordingSleep:
    """Async sleep replacement that records requested delays without waiting."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def clean_crawl_env(monkeypatch):
    """Remove every crawl bridge variable so tests start from defaults."""
    for name in CRAWL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
