"""Tests for the prompt template cache."""

import httpx
import pytest

from grovecast.errors import PromptFetchError
from grovecast.generation import PromptTemplateCache

from conftest import PROMPT_TEMPLATE, PROMPT_URL


def make_cache(http_client, fake_clock, ttl=300.0):
    return PromptTemplateCache(PROMPT_URL, http_client, ttl=ttl, clock=fake_clock)


def test_fetches_within_ttl_hit_network_once(services, http_client, fake_clock):
    cache = make_cache(http_client, fake_clock)

    assert cache.get() == PROMPT_TEMPLATE
    fake_clock.advance(120)
    assert cache.get() == PROMPT_TEMPLATE
    assert len(services.requests_to(PROMPT_URL)) == 1

    fake_clock.advance(181)
    cache.get()
    assert len(services.requests_to(PROMPT_URL)) == 2
    assert cache.fetched_at == fake_clock.now


def test_exposes_value_and_fetch_time(http_client, fake_clock):
    cache = make_cache(http_client, fake_clock)
    assert cache.value is None
    assert cache.fetched_at is None
    assert not cache.is_fresh()

    cache.get()
    assert cache.value == PROMPT_TEMPLATE
    assert cache.fetched_at == fake_clock.now
    assert cache.is_fresh()


def test_invalidate_forces_refetch(services, http_client, fake_clock):
    cache = make_cache(http_client, fake_clock)
    cache.get()
    cache.invalidate()
    cache.get()
    assert len(services.requests_to(PROMPT_URL)) == 2


def test_render_replaces_placeholder(http_client, fake_clock):
    cache = make_cache(http_client, fake_clock)
    rendered = cache.render("ARTICLE ONE")
    assert "{{ARTICLES}}" not in rendered
    assert rendered.endswith("ARTICLE ONE")


def test_non_200_is_fatal(services, http_client, fake_clock):
    services.prompt_status = 503
    cache = make_cache(http_client, fake_clock)
    with pytest.raises(PromptFetchError):
        cache.get()
    assert cache.value is None


def test_non_text_body_is_fatal(services, http_client, fake_clock):
    services.prompt_body = b"\xff\xfe\x00binary"
    cache = make_cache(http_client, fake_clock)
    with pytest.raises(PromptFetchError):
        cache.get()


def test_transport_error_is_fatal(fake_clock):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(refuse)) as client:
        cache = PromptTemplateCache(PROMPT_URL, client, clock=fake_clock)
        with pytest.raises(PromptFetchError):
            cache.get()
