"""Shared fixtures for the wikidump loader tests."""

import bz2
import os
from datetime import datetime, timezone

import httpx
import pytest
from tenacity import wait_none

from wikidump_loader.infrastructure.downloader import HttpSnapshotFetcher
from wikidump_loader.infrastructure.probe import HttpFreshnessProbe

DUMP_URL = "https://dumps.example.org/{locale}wiki/latest/{locale}wiki-latest-pages-articles.xml.bz2"

LAST_MODIFIED = "Sat, 02 Mar 2024 10:15:00 GMT"
LAST_MODIFIED_MS = int(
    datetime(2024, 3, 2, 10, 15, tzinfo=timezone.utc).timestamp() * 1000
)

SAMPLE_XML = (
    b'<mediawiki xml:lang="de">\n'
    + b"".join(
        b"  <page><title>Seite %d</title><text>Inhalt \xc3\xa4\xc3\xb6\xc3\xbc %d</text></page>\n"
        % (i, i)
        for i in range(500)
    )
    + b"</mediawiki>\n"
)


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    """Retries happen immediately during tests."""
    for method in (
        HttpFreshnessProbe._execute_head,
        HttpSnapshotFetcher._open_stream,
    ):
        monkeypatch.setattr(method.retry, "wait", wait_none())


@pytest.fixture
def sample_xml():
    return SAMPLE_XML


@pytest.fixture
def compressed_xml():
    return bz2.compress(SAMPLE_XML)


@pytest.fixture
def make_client():
    """Builds httpx clients answering through a request handler."""
    clients = []

    def _make(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


def set_mtime(path, modified_ms):
    """Sets the modification time of a file in milliseconds."""
    ns = modified_ms * 1_000_000
    os.utime(path, ns=(ns, ns))
