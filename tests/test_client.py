"""Tests for the HTTP clients."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from bookscraper.client import GoogleBooksClient, PageClient


def make_response(status_code=200, content=b"", json_data=None):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


def test_page_client_resolves_relative_links():
    """Test that detail paths are resolved against the Goodreads origin."""
    with PageClient() as client:
        with patch.object(client.session, "get", return_value=make_response(content=b"<html/>")) as get:
            assert client.fetch("/book/show/1.Dune") == b"<html/>"

    get.assert_called_once_with("https://www.goodreads.com/book/show/1.Dune", timeout=None)


def test_page_client_keeps_absolute_urls():
    """Test that absolute URLs pass through unchanged."""
    client = PageClient()
    with patch.object(client.session, "get", return_value=make_response()) as get:
        client.fetch("https://example.com/list")

    assert get.call_args[0][0] == "https://example.com/list"
    client.close()


def test_page_client_raises_on_error_status():
    """Test that non-2xx responses raise."""
    client = PageClient()
    with patch.object(client.session, "get", return_value=make_response(status_code=503)):
        with pytest.raises(requests.HTTPError):
            client.fetch("/book/show/1")
    client.close()


def test_page_client_sends_user_agent():
    """Test that requests carry a browser-like User-Agent."""
    client = PageClient()
    assert "Mozilla" in client.session.headers["User-Agent"]
    client.close()


def test_search_title_query():
    """Test the exact-title query and optional API key."""
    payload = {"items": []}
    with GoogleBooksClient(api_key="k") as client:
        with patch.object(client.session, "get", return_value=make_response(json_data=payload)) as get:
            assert client.search_title("Dune") == payload

    get.assert_called_once_with(
        GoogleBooksClient.BASE_URL,
        params={"q": "intitle:Dune", "key": "k"},
        timeout=None,
    )


def test_search_title_without_key():
    """Test that no key parameter is sent when none is configured."""
    client = GoogleBooksClient()
    with patch.object(client.session, "get", return_value=make_response(json_data={})) as get:
        client.search_title("Dune")

    assert get.call_args[1]["params"] == {"q": "intitle:Dune"}
    client.close()


def test_search_title_raises_on_error_status():
    """Test that rate limiting and other errors are not retried."""
    client = GoogleBooksClient()
    with patch.object(client.session, "get", return_value=make_response(status_code=429)) as get:
        with pytest.raises(requests.HTTPError):
            client.search_title("Dune")

    assert get.call_count == 1
    client.close()
