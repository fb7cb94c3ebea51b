"""Shared fixtures: fake audio backend, mocked HTTP services, fake clock."""

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from grovecast.audio import AudioComposer
from grovecast.config import Config, ConfigModel, Credentials

PROMPT_URL = "https://prompts.test/scriptprompt.txt"
LLM_URL = "https://llm.test/v1/messages"
TTS_URL = "https://tts.test/v1/audio/speech"

PROMPT_TEMPLATE = "Write a podcast script as JSON.\n\n{{ARTICLES}}"


def segment_bytes(label: str, ms: int) -> bytes:
    """Audio file body understood by FakeComposer."""
    return json.dumps([[label, ms]]).encode("utf-8")


class FakeComposer(AudioComposer):
    """
    Audio backend working on JSON files.

    A file holds ``[[label, milliseconds], ...]``; anything else fails to load.
    """

    def __init__(self) -> None:
        self.fail_export = False
        self.fail_probe = False
        self.exports: List[Path] = []

    def load(self, path: Path):
        pieces = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(pieces, list):
            raise ValueError("not audio")
        return [(str(label), int(ms)) for label, ms in pieces]

    def duration(self, audio) -> float:
        return sum(ms for _, ms in audio) / 1000.0

    def concatenate(self, audios):
        combined = []
        for audio in audios:
            combined.extend(audio)
        return combined

    def export(self, audio, path: Path, fmt: str) -> None:
        if self.fail_export:
            raise RuntimeError("encoder crashed")
        path.write_text(json.dumps(audio), encoding="utf-8")
        self.exports.append(path)

    def probe_duration(self, path: Path) -> float:
        if self.fail_probe:
            raise RuntimeError("probe failed")
        return self.duration(self.load(path))

    def labels(self, path: Path) -> List[str]:
        return [label for label, _ in self.load(path)]


class FakeClock:
    """Monotonic clock whose sleep just advances time."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MockServices:
    """Routes requests to fake prompt, LLM and TTS endpoints and records them."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.prompt_status = 200
        self.prompt_body: bytes = PROMPT_TEMPLATE.encode("utf-8")
        self.script: Dict = {}
        self.llm_status = 200
        self.llm_text: Optional[str] = None
        self.tts_handler: Callable[[dict], httpx.Response] = self.default_tts

    @staticmethod
    def default_tts(body: dict) -> httpx.Response:
        text = body["input"]
        return httpx.Response(
            200,
            headers={"content-type": "audio/mpeg"},
            content=segment_bytes(text, 100 * len(text)),
        )

    def requests_to(self, url: str) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url) == url]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == PROMPT_URL:
            return httpx.Response(self.prompt_status, content=self.prompt_body)

        if url == LLM_URL:
            if self.llm_status != 200:
                return httpx.Response(self.llm_status, json={"error": "overloaded"})
            text = self.llm_text if self.llm_text is not None else "```json\n" + json.dumps(self.script) + "\n```"
            return httpx.Response(
                200,
                json={
                    "id": "msg_1",
                    "type": "message",
                    "role": "assistant",
                    "content": [{"type": "text", "text": text}],
                    "usage": {"input_tokens": 120, "output_tokens": 80},
                },
            )

        if url == TTS_URL:
            return self.tts_handler(json.loads(request.content))

        return httpx.Response(404)


@pytest.fixture
def services() -> MockServices:
    return MockServices()


@pytest.fixture
def http_client(services):
    client = httpx.Client(transport=httpx.MockTransport(services.handler))
    yield client
    client.close()


@pytest.fixture
def composer() -> FakeComposer:
    return FakeComposer()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(tmp_path) -> Config:
    model = ConfigModel(
        workspace_root=str(tmp_path / "documents"),
        temp_root=str(tmp_path / "tmp"),
        llm={"base_url": LLM_URL, "prompt_url": PROMPT_URL},
        tts={"base_url": TTS_URL},
    )
    return Config(config_path=tmp_path / "config" / "config.yaml", model=model)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(anthropic_api_key="llm-key", speechify_api_key="tts-key")
