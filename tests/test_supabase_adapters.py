"""Tests for the Supabase storage adapter."""

from dataclasses import dataclass, field

import pytest

from birthday_board.adapters.supabase_image_store import SupabaseImageStore


@dataclass
class FakeBucket:
    name: str


@dataclass
class FakeBucketApi:
    uploads: list[tuple[str, bytes, dict[str, str]]] = field(default_factory=list)
    signed: list[tuple[str, int]] = field(default_factory=list)
    signed_response: dict[str, str] | None = None

    def upload(self, path: str, file: bytes, file_options: dict[str, str]) -> None:
        self.uploads.append((path, file, file_options))

    def create_signed_url(self, path: str, expires_in: int) -> dict[str, str]:
        self.signed.append((path, expires_in))
        if self.signed_response is not None:
            return self.signed_response
        return {"signedURL": f"https://example.supabase.co/sign/{path}?token=t"}


@dataclass
class FakeStorage:
    buckets: list[FakeBucket] = field(default_factory=list)
    created: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    bucket_api: FakeBucketApi = field(default_factory=FakeBucketApi)
    list_calls: int = 0

    def list_buckets(self) -> list[FakeBucket]:
        self.list_calls += 1
        return self.buckets

    def create_bucket(self, name: str, options: dict[str, object]) -> None:
        self.created.append((name, options))
        self.buckets.append(FakeBucket(name))

    def from_(self, bucket: str) -> FakeBucketApi:
        return self.bucket_api


@dataclass
class FakeClient:
    storage: FakeStorage = field(default_factory=FakeStorage)


def test_upload_creates_bucket_and_signs_url() -> None:
    client = FakeClient()
    store = SupabaseImageStore(client=client, bucket="boards", signed_url_ttl_hours=2)

    url = store.upload_png("birthday-week-1.png", b"png-bytes")

    assert url == "https://example.supabase.co/sign/birthday-week-1.png?token=t"
    assert client.storage.created == [("boards", {"public": False})]
    path, data, options = client.storage.bucket_api.uploads[0]
    assert (path, data) == ("birthday-week-1.png", b"png-bytes")
    assert options["content-type"] == "image/png"
    assert options["upsert"] == "true"
    assert client.storage.bucket_api.signed == [("birthday-week-1.png", 7200)]


def test_existing_bucket_is_checked_once() -> None:
    client = FakeClient(storage=FakeStorage(buckets=[FakeBucket("boards")]))
    store = SupabaseImageStore(client=client, bucket="boards")

    store.upload_png("a.png", b"1")
    store.upload_png("b.png", b"2")

    assert client.storage.created == []
    assert client.storage.list_calls == 1
    assert client.storage.bucket_api.signed[0][1] == 336 * 3600


def test_accepts_camel_case_signed_url_key() -> None:
    client = FakeClient(storage=FakeStorage(buckets=[FakeBucket("boards")]))
    client.storage.bucket_api.signed_response = {"signedUrl": "https://signed"}
    store = SupabaseImageStore(client=client, bucket="boards")

    assert store.upload_png("a.png", b"1") == "https://signed"


def test_missing_signed_url_raises() -> None:
    client = FakeClient(storage=FakeStorage(buckets=[FakeBucket("boards")]))
    client.storage.bucket_api.signed_response = {}
    store = SupabaseImageStore(client=client, bucket="boards")

    with pytest.raises(RuntimeError):
        store.upload_png("a.png", b"1")
