"""Supabase Storage adapter for photo payloads."""

from dataclasses import dataclass

from supabase import Client

from photo_share.services.cleanup import BlobStorage


@dataclass
class SupabaseBlobStorage(BlobStorage):
    """Deletes photo payloads from a Supabase Storage bucket."""

    client: Client
    bucket: str

    def delete(self, file_path: str) -> None:
        """Remove an object; Supabase treats missing paths as a no-op."""
        self.client.storage.from_(self.bucket).remove([file_path])
