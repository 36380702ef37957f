"""Tests for the storage strategy chain."""

import asyncio
import itertools

import pytest

from charityhub.models.upload import UploadFailure, UploadRequest, UploadSuccess
from charityhub.services.upload.exceptions import StorageChainError
from charityhub.storage.base import StorageStrategy
from charityhub.storage.chain import UploadChain
from charityhub.storage.placeholder import PlaceholderStrategy


class RecordingStrategy(StorageStrategy):
    """Returns a fixed outcome and records every call in a shared log."""

    def __init__(self, name: str, succeed: bool, calls: list, delay: float = 0):
        self.name = name
        self.succeed = succeed
        self.calls = calls
        self.delay = delay

    async def attempt(self, request, bucket, folder):
        self.calls.append(self.name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.succeed:
            return UploadSuccess(
                url=f"https://store.example/{self.name}/{folder}/x.png",
                path=f"{folder}/x.png",
                strategy=self.name,
            )
        return UploadFailure(reason=f"{self.name} denied", strategy=self.name)


class RecordingPlaceholder(PlaceholderStrategy):
    def __init__(self, calls: list):
        super().__init__()
        self.calls = calls

    async def attempt(self, request, bucket, folder):
        self.calls.append(self.name)
        return await super().attempt(request, bucket, folder)


@pytest.fixture
def image_request():
    return UploadRequest(
        content=b"GIF89a",
        content_type="image/gif",
        size_bytes=6,
        filename="spinner.gif",
        bucket="images",
        folder="blog",
    )


def _chain(privileged_ok: bool, scoped_ok: bool, calls: list, **kwargs) -> UploadChain:
    return UploadChain(
        [
            RecordingStrategy("privileged", privileged_ok, calls),
            RecordingStrategy("scoped", scoped_ok, calls),
            RecordingPlaceholder(calls),
        ],
        **kwargs,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "privileged_ok,scoped_ok", list(itertools.product([True, False], repeat=2))
)
async def test_chain_always_succeeds(image_request, privileged_ok, scoped_ok):
    calls: list = []
    result = await _chain(privileged_ok, scoped_ok, calls).upload(image_request)

    assert isinstance(result.outcome, UploadSuccess)
    assert result.url
    assert result.path.startswith("blog/")


@pytest.mark.asyncio
async def test_privileged_success_short_circuits(image_request):
    calls: list = []
    result = await _chain(True, True, calls).upload(image_request)

    assert calls == ["privileged"]
    assert result.strategy == "privileged"
    assert result.failures == ()
    assert not result.is_placeholder


@pytest.mark.asyncio
async def test_scoped_used_after_privileged_failure(image_request):
    calls: list = []
    result = await _chain(False, True, calls).upload(image_request)

    assert calls == ["privileged", "scoped"]
    assert result.strategy == "scoped"
    assert [f.reason for f in result.failures] == ["privileged denied"]
    assert not result.is_placeholder


@pytest.mark.asyncio
async def test_placeholder_after_all_failures(image_request):
    calls: list = []
    result = await _chain(False, False, calls).upload(image_request)

    assert calls == ["privileged", "scoped", "placeholder"]
    assert result.is_placeholder
    assert result.url.startswith("data:image/svg+xml;base64,")
    assert [f.strategy for f in result.failures] == ["privileged", "scoped"]


@pytest.mark.asyncio
async def test_hung_strategy_times_out(image_request):
    calls: list = []
    chain = UploadChain(
        [
            RecordingStrategy("privileged", True, calls, delay=5),
            RecordingStrategy("scoped", True, calls),
            RecordingPlaceholder(calls),
        ],
        attempt_timeout=0.05,
    )

    result = await chain.upload(image_request)

    assert calls == ["privileged", "scoped"]
    assert result.strategy == "scoped"
    assert result.failures[0].strategy == "privileged"
    assert "Timed out" in result.failures[0].reason


@pytest.mark.asyncio
async def test_concurrent_uploads_are_independent(image_request):
    calls: list = []
    chain = _chain(False, True, calls)

    results = await asyncio.gather(*(chain.upload(image_request) for _ in range(20)))

    assert all(r.strategy == "scoped" for r in results)
    assert all(len(r.failures) == 1 for r in results)


def test_empty_chain_rejected():
    with pytest.raises(StorageChainError, match="empty"):
        UploadChain([])


def test_chain_must_end_with_terminal_strategy():
    with pytest.raises(StorageChainError, match="not terminal"):
        UploadChain([RecordingStrategy("privileged", True, [])])
