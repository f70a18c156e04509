"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import json
import threading
import time

import httpx
import pytest
from typer.testing import CliRunner


BASE_URL = "https://crates.test/api/v1/"
USER_AGENT = "crates_client_tests (github.com/example/crates_client)"


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep CRATES_CLIENT_* variables from the developer's shell out of the tests."""
    for name in ("USER_AGENT", "BASE_URL", "RATE_LIMIT_SECONDS", "POLL_INTERVAL_SECONDS", "TIMEOUT_SECONDS"):
        monkeypatch.delenv(f"CRATES_CLIENT_{name}", raising=False)


class FakeClock:
    """Deterministic clock: sleep() advances monotonic() instead of waiting."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


class RecordingTransport:
    """Transport stub returning canned bodies and recording when each fetch happened."""

    def __init__(self, body: bytes = b"{}", clock=None) -> None:
        self.body = body
        self.bodies: dict[str, bytes] = {}
        self.calls: list[tuple[str, float]] = []
        self.closed = False
        self._clock = clock
        self._lock = threading.Lock()

    def fetch(self, url: str) -> bytes:
        now = self._clock.monotonic() if self._clock else time.monotonic()
        with self._lock:
            self.calls.append((url, now))
        return self.bodies.get(url, self.body)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_transport():
    """Factory fixture building a RecordingTransport."""

    def _make(body: bytes = b"{}", clock=None) -> RecordingTransport:
        return RecordingTransport(body=body, clock=clock)

    return _make


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    """
    responses = {}
    calls_log: list[tuple[str, str, str]] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json_payload: dict | None = None,
        content: bytes | None = None,
    ):
        """Register a mock response for a given URL and method."""
        if json_payload is not None:
            body = json.dumps(json_payload).encode("utf-8")
        else:
            body = content if content is not None else b""
        responses[(method.upper(), url)] = (status_code, body)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        method = request.method
        url = str(request.url)
        key = (method, url)
        calls_log.append((method, url, request.headers.get("User-Agent", "")))
        if key in responses:
            status, body = responses[key]
            headers = {"Content-Length": str(len(body))}
            return httpx.Response(status, content=body, headers=headers)

        return httpx.Response(404, json={"errors": [{"detail": "Not Found"}]})

    # Patch httpx.Client to always use our mock transport
    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    # expose call log on the returned function
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response


# ---------------------------------------------------------------------------
# Sample payloads shaped like crates.io responses
# ---------------------------------------------------------------------------

def _user(login: str = "dtolnay", id: int = 3618) -> dict:
    return {
        "avatar": f"https://avatars.githubusercontent.com/u/{id}?v=4",
        "id": id,
        "kind": "user",
        "login": login,
        "name": "David Tolnay",
        "url": f"https://github.com/{login}",
    }


def _crate(name: str = "serde", downloads: int = 350_000_000) -> dict:
    return {
        "id": name,
        "name": name,
        "description": "A generic serialization/deserialization framework",
        "license": None,
        "documentation": f"https://docs.rs/{name}",
        "homepage": "https://serde.rs",
        "repository": "https://github.com/serde-rs/serde",
        "downloads": downloads,
        "recent_downloads": 40_000_000,
        "categories": None,
        "keywords": ["serde", "serialization", "no_std"],
        "versions": [1001, 1000],
        "max_version": "1.0.200",
        "links": {
            "owner_team": f"/api/v1/crates/{name}/owner_team",
            "owner_user": f"/api/v1/crates/{name}/owner_user",
            "owners": f"/api/v1/crates/{name}/owners",
            "reverse_dependencies": f"/api/v1/crates/{name}/reverse_dependencies",
            "version_downloads": f"/api/v1/crates/{name}/downloads",
            "versions": None,
        },
        "created_at": "2014-12-05T20:20:39.487502+00:00",
        "updated_at": "2024-05-01T03:30:42.214917+00:00",
        "exact_match": False,
    }


def _version(crate: str = "serde", num: str = "1.0.200", id: int = 1001) -> dict:
    return {
        "crate": crate,
        "created_at": "2024-05-01T03:30:42.214917+00:00",
        "updated_at": "2024-05-01T03:30:42.214917+00:00",
        "dl_path": f"/api/v1/crates/{crate}/{num}/download",
        "downloads": 1_200_000,
        "features": {"default": ["std"], "std": []},
        "id": id,
        "num": num,
        "yanked": False,
        "license": "MIT OR Apache-2.0",
        "readme_path": f"/api/v1/crates/{crate}/{num}/readme",
        "links": {
            "authors": f"/api/v1/crates/{crate}/{num}/authors",
            "dependencies": f"/api/v1/crates/{crate}/{num}/dependencies",
            "version_downloads": f"/api/v1/crates/{crate}/{num}/downloads",
        },
        "crate_size": 77_935,
        "published_by": _user(),
    }


def _category(slug: str = "encoding") -> dict:
    return {
        "category": slug.capitalize(),
        "crates_cnt": 1800,
        "created_at": "2017-01-17T19:13:05.112025+00:00",
        "description": "Encoding and/or decoding data from one data format to another.",
        "id": slug,
        "slug": slug,
    }


def _keyword(keyword: str = "serde") -> dict:
    return {
        "id": keyword,
        "keyword": keyword,
        "crates_cnt": 2900,
        "created_at": "2015-01-28T00:41:31.453101+00:00",
    }


@pytest.fixture
def crate_payload() -> dict:
    return _crate()


@pytest.fixture
def crates_payload() -> dict:
    return {
        "crates": [_crate("serde"), _crate("serde_json", downloads=300_000_000)],
        "meta": {"total": 2, "next_page": None, "prev_page": None},
    }


@pytest.fixture
def crate_response_payload() -> dict:
    return {
        "categories": [_category("encoding"), _category("no-std")],
        "crate": _crate(),
        "keywords": [_keyword("serde"), _keyword("serialization")],
        "versions": [_version(), _version(num="1.0.199", id=1000)],
    }


@pytest.fixture
def version_payload() -> dict:
    return {"version": _version()}


@pytest.fixture
def summary_payload() -> dict:
    return {
        "just_updated": [_crate("tokio")],
        "most_downloaded": [_crate("syn")],
        "new_crates": [_crate("brand-new", downloads=3)],
        "most_recently_downloaded": [_crate("serde")],
        "num_crates": 150_000,
        "num_downloads": 60_000_000_000,
        "popular_categories": [_category("encoding")],
        "popular_keywords": [_keyword("serde")],
    }


@pytest.fixture
def downloads_payload() -> dict:
    return {
        "version_downloads": [
            {"date": "2024-05-01", "downloads": 1500, "version": 1001},
            {"date": "2024-05-02", "downloads": 1700, "version": 1001},
        ],
        "meta": {"extra_downloads": [{"date": "2024-05-01", "downloads": 90}]},
    }


@pytest.fixture
def authors_payload() -> dict:
    return {"meta": {"names": ["Erick Tryzelaar", "David Tolnay"]}, "users": [_user()]}


@pytest.fixture
def owners_payload() -> dict:
    return {"users": [_user(), _user("oli-obk", 332036)]}


@pytest.fixture
def dependencies_payload() -> dict:
    return {
        "dependencies": [
            {
                "crate_id": "serde_derive",
                "default_features": True,
                "downloads": 0,
                "features": [],
                "id": 5001,
                "kind": "normal",
                "optional": True,
                "req": "=1.0.200",
                "target": None,
                "version_id": 1001,
            },
            {
                "crate_id": "libc",
                "default_features": False,
                "downloads": 0,
                "features": ["extra_traits"],
                "id": 5002,
                "kind": "dev",
                "optional": False,
                "req": "^0.2",
                "target": "cfg(unix)",
                "version_id": 1001,
            },
        ]
    }


@pytest.fixture
def categories_payload() -> dict:
    return {"categories": [_category("encoding"), _category("parsing")], "meta": {"total": 52}}


@pytest.fixture
def category_payload() -> dict:
    return {"category": _category("encoding")}


@pytest.fixture
def keywords_payload() -> dict:
    return {"keywords": [_keyword("serde"), _keyword("async")], "meta": {"total": 40_000}}


@pytest.fixture
def keyword_payload() -> dict:
    return {"keyword": _keyword("serde")}
