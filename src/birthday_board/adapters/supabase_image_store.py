"""Supabase Storage sink for rendered boards."""

from dataclasses import dataclass, field

from supabase import Client

from birthday_board.services.birthdays import ImageStore

CACHE_SECONDS = 31536000


@dataclass
class SupabaseImageStore(ImageStore):
    """Uploads PNGs to a private bucket and hands out signed URLs."""

    client: Client
    bucket: str
    signed_url_ttl_hours: int = 336
    _bucket_ready: bool = field(default=False, init=False)

    def upload_png(self, name: str, data: bytes) -> str:
        """Upload the image and return a signed read URL."""
        self._ensure_bucket()
        storage = self.client.storage.from_(self.bucket)
        storage.upload(
            path=name,
            file=data,
            file_options={
                "content-type": "image/png",
                "cache-control": str(CACHE_SECONDS),
                "upsert": "true",
            },
        )
        signed = storage.create_signed_url(name, self.signed_url_ttl_hours * 3600)
        url = signed.get("signedURL") or signed.get("signedUrl")
        if not url:
            raise RuntimeError("Supabase did not return a signed URL")
        return url

    def _ensure_bucket(self) -> None:
        if self._bucket_ready:
            return
        existing = {bucket.name for bucket in self.client.storage.list_buckets()}
        if self.bucket not in existing:
            self.client.storage.create_bucket(self.bucket, options={"public": False})
        self._bucket_ready = True
