"""Tests for TTS calls, call spacing and section synthesis."""

import base64
import json
import threading

import httpx
import pytest

from grovecast.config import TTSConfig
from grovecast.errors import DecodingError, EncodingError, HTTPError, PipelineCancelled
from grovecast.generation import Section
from grovecast.speech import CallScheduler, MinIntervalScheduler, SpeechifyProvider, SpeechSynthesizer
from grovecast.transport import post_json
from grovecast.workspace import RunWorkspace

from conftest import TTS_URL


@pytest.fixture
def provider(http_client):
    return SpeechifyProvider("tts-key", TTSConfig(base_url=TTS_URL), http_client)


def test_request_carries_voice_parameters(services, provider):
    provider.synthesize("Hello world.")

    [request] = services.requests_to(TTS_URL)
    assert request.headers["authorization"] == "Bearer tts-key"
    assert json.loads(request.content) == {
        "input": "Hello world.",
        "voice_id": "kristy",
        "model": "simba-english",
        "emotion": "assertive",
        "pitch": 0,
        "speed": 1.0,
        "text_normalization": True,
        "audio_format": "mp3",
    }


def test_audio_body_is_used_as_is(services, provider):
    services.tts_handler = lambda body: httpx.Response(
        200, headers={"content-type": "audio/mpeg"}, content=b"ID3-bytes"
    )
    assert provider.synthesize("x") == b"ID3-bytes"


def test_json_body_is_base64_decoded(services, provider):
    encoded = base64.b64encode(b"mp3-data").decode("ascii")
    services.tts_handler = lambda body: httpx.Response(200, json={"audio_data": encoded})
    assert provider.synthesize("x") == b"mp3-data"


def test_json_body_without_audio(services, provider):
    services.tts_handler = lambda body: httpx.Response(200, json={"audio_data": None})
    with pytest.raises(DecodingError):
        provider.synthesize("x")


def test_json_body_with_bad_base64(services, provider):
    services.tts_handler = lambda body: httpx.Response(200, json={"audio_data": "%%%not-base64"})
    with pytest.raises(DecodingError):
        provider.synthesize("x")


def test_other_content_type_is_rejected(services, provider):
    services.tts_handler = lambda body: httpx.Response(
        200, headers={"content-type": "text/html"}, content=b"<html></html>"
    )
    with pytest.raises(DecodingError):
        provider.synthesize("x")


def test_status_code_is_reported(services, provider):
    services.tts_handler = lambda body: httpx.Response(429, json={"error": "slow down"})
    with pytest.raises(HTTPError) as excinfo:
        provider.synthesize("x")
    assert excinfo.value.status_code == 429


def test_request_uses_tts_timeout(services, http_client):
    provider = SpeechifyProvider("tts-key", TTSConfig(base_url=TTS_URL, timeout=5.0), http_client)
    provider.synthesize("Hello world.")

    [request] = services.requests_to(TTS_URL)
    assert request.extensions["timeout"]["read"] == 5.0
    assert request.extensions["timeout"]["connect"] == 5.0


def test_malformed_url_is_an_encoding_error(services, http_client):
    provider = SpeechifyProvider("tts-key", TTSConfig(base_url="http://localhost:notaport/speech"), http_client)
    with pytest.raises(EncodingError):
        provider.synthesize("x")
    assert services.requests == []


def test_unserializable_payload_is_an_encoding_error(services, http_client):
    with pytest.raises(EncodingError):
        post_json(http_client, TTS_URL, {"input": object()}, {}, service="Speechify")
    assert services.requests == []


def test_min_interval_scheduler_spaces_calls(fake_clock):
    scheduler = MinIntervalScheduler(1.5, clock=fake_clock, sleep=fake_clock.sleep)

    scheduler.before_call()
    assert fake_clock.sleeps == []
    scheduler.after_call()

    fake_clock.advance(0.5)
    scheduler.before_call()
    assert fake_clock.sleeps == [pytest.approx(1.0)]
    scheduler.after_call()

    fake_clock.advance(2.0)
    scheduler.before_call()
    assert len(fake_clock.sleeps) == 1


class RecordingScheduler(CallScheduler):
    def __init__(self, events):
        self.events = events

    def before_call(self):
        self.events.append("wait")

    def after_call(self):
        self.events.append("done")


class RecordingProvider(SpeechifyProvider):
    def __init__(self, events):
        self.events = events

    @property
    def audio_format(self):
        return "mp3"

    def synthesize(self, text):
        self.events.append(("call", text))
        return text.encode("utf-8")


def test_section_chunks_are_synthesized_sequentially(tmp_path):
    events = []
    workspace = RunWorkspace(tmp_path, run_id="run1")
    synthesizer = SpeechSynthesizer(
        RecordingProvider(events),
        workspace,
        scheduler=RecordingScheduler(events),
        max_chunk_chars=10,
    )
    section = Section(index=2, key="story_1", text="Aaaa. Bbbb. Cccc.")

    paths = synthesizer.synthesize_section(section)

    assert events == [
        "wait", ("call", "Aaaa."), "done",
        "wait", ("call", " Bbbb."), "done",
        "wait", ("call", " Cccc."), "done",
    ]
    assert [p.name for p in paths] == [
        "run1_story_1_2_0.mp3",
        "run1_story_1_2_1.mp3",
        "run1_story_1_2_2.mp3",
    ]
    assert b"".join(p.read_bytes() for p in paths) == b"Aaaa. Bbbb. Cccc."
    assert all(p.parent == workspace.directory for p in paths)


def test_cancellation_is_checked_per_chunk(tmp_path):
    events = []
    cancel = threading.Event()

    class CancellingProvider(RecordingProvider):
        def synthesize(self, text):
            cancel.set()
            return super().synthesize(text)

    synthesizer = SpeechSynthesizer(
        CancellingProvider(events),
        RunWorkspace(tmp_path),
        scheduler=RecordingScheduler(events),
        max_chunk_chars=5,
        cancel_event=cancel,
    )
    with pytest.raises(PipelineCancelled):
        synthesizer.synthesize_section(Section(index=0, key="intro", text="One. Two."))

    assert [e for e in events if isinstance(e, tuple)] == [("call", "One.")]
