import pytest
import requests

import fetchkit
from fetchkit.settings import Settings


class RecordingAdapter:
    """Adapter double that records calls and replays canned results."""

    def __init__(self, result=None, progress=(), text=""):
        self.result = result
        self.progress = list(progress)
        self.text = text
        self.fetch_calls = []
        self.read_calls = []

    def fetch(self, callback, *sources):
        self.fetch_calls.append((callback, sources))
        for value in self.progress:
            callback(value)
        return self.result

    def read_as_string(self, path):
        self.read_calls.append(path)
        return self.text


class FakeResponse:
    def __init__(self, chunks=(), headers=None, error=None):
        self.chunks = list(chunks)
        self.headers = headers or {}
        self.error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.error is not None:
            raise self.error

    def iter_content(self, chunk_size=8192):
        yield from self.chunks


class FakeSession:
    """Minimal stand-in for requests.Session serving in-memory payloads."""

    def __init__(self, payloads, *, chunk=2, advertise_size=True):
        self.payloads = payloads
        self.chunk = chunk
        self.advertise_size = advertise_size
        self.get_calls = []

    def head(self, url, allow_redirects=True, timeout=None):
        if url not in self.payloads:
            return FakeResponse(error=requests.HTTPError(f"404 for {url}"))
        headers = {"Content-Length": str(len(self.payloads[url]))} if self.advertise_size else {}
        return FakeResponse(headers=headers)

    def get(self, url, stream=False, timeout=None):
        self.get_calls.append(url)
        if url not in self.payloads:
            raise requests.ConnectionError(f"cannot reach {url}")
        data = self.payloads[url]
        chunks = [data[i:i + self.chunk] for i in range(0, len(data), self.chunk)]
        return FakeResponse(chunks=chunks)


@pytest.fixture(autouse=True)
def clean_default_registry():
    """Every test starts and ends with no adapter installed."""
    fetchkit.reset_adapter()
    yield
    fetchkit.reset_adapter()


@pytest.fixture(autouse=True)
def clean_settings():
    Settings.reload()
    yield
    Settings.reload()


@pytest.fixture
def recording_adapter():
    return RecordingAdapter(result=["/tmp/a", "/tmp/b"], progress=[50, 100], text="{}")


@pytest.fixture
def cache_dir(tmp_path):
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def payloads():
    return {
        "https://models.example.com/llama/model.pte": b"abcd",
        "https://models.example.com/llama/tokenizer.json": b'{"v":1}',
    }


@pytest.fixture
def fake_session(payloads):
    return FakeSession(payloads)


@pytest.fixture
def adapter_factory():
    return RecordingAdapter


@pytest.fixture
def session_factory():
    return FakeSession
