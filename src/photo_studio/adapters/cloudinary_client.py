"""Cloudinary media store client."""

import hashlib
import time
from dataclasses import dataclass

import httpx

from photo_studio.services.galleries import IncomingFile, MediaStore, StoredMedia

_API_BASE = "https://api.cloudinary.com/v1_1"


@dataclass
class HttpxCloudinaryClient(MediaStore):
    """Signed Cloudinary upload API client implemented with httpx."""

    cloud_name: str
    api_key: str
    api_secret: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, cloud_name: str, api_key: str, api_secret: str
    ) -> "HttpxCloudinaryClient":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            http_client=httpx.AsyncClient(),
        )

    async def upload(self, file: IncomingFile, folder: str) -> StoredMedia:
        """Upload an image and return its secure URL and public id."""
        params = {"folder": folder, "timestamp": str(int(time.time()))}
        response = await self.http_client.post(
            f"{_API_BASE}/{self.cloud_name}/image/upload",
            data=self._signed(params),
            files={"file": (file.filename, file.content, file.content_type)},
            timeout=60,
        )
        response.raise_for_status()
        payload = response.json()
        return StoredMedia(
            url=payload["secure_url"],
            public_id=payload["public_id"],
            size=payload.get("bytes"),
        )

    async def delete(self, public_id: str) -> bool:
        """Destroy an image; an already missing image is not an error."""
        params = {"public_id": public_id, "timestamp": str(int(time.time()))}
        response = await self.http_client.post(
            f"{_API_BASE}/{self.cloud_name}/image/destroy",
            data=self._signed(params),
            timeout=15,
        )
        response.raise_for_status()
        result = response.json().get("result")
        if result == "ok":
            return True
        if result == "not found":
            return False
        raise RuntimeError(f"Cloudinary destroy returned {result!r}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        signature = hashlib.sha1(  # noqa: S324
            f"{to_sign}{self.api_secret}".encode()
        ).hexdigest()
        return {**params, "api_key": self.api_key, "signature": signature}
