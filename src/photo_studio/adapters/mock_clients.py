"""Stand-ins used when mail or media credentials are not configured.

Both write what they would have done to the application log, so local
development and previews keep working without third-party accounts.
"""

import logging
from dataclasses import dataclass, field
from uuid import uuid4

from photo_studio.services.auth import Mailer
from photo_studio.services.galleries import IncomingFile, MediaStore, StoredMedia

logger = logging.getLogger(__name__)


@dataclass
class LoggingMailer(Mailer):
    """Mailer that logs messages instead of delivering them."""

    async def send(self, to: str, subject: str, text: str) -> bool:
        logger.info("[MOCK EMAIL] to=%s subject=%s: %s", to, subject, text)
        return False


@dataclass
class LoggingMediaStore(MediaStore):
    """Media store that keeps no bytes and hands out placeholder URLs."""

    stored: set[str] = field(default_factory=set)

    async def upload(self, file: IncomingFile, folder: str) -> StoredMedia:
        public_id = f"{folder}/{uuid4().hex}"
        self.stored.add(public_id)
        logger.info(
            "[MOCK MEDIA] upload %s (%d bytes) as %s",
            file.filename,
            len(file.content),
            public_id,
        )
        return StoredMedia(
            url=f"mock://{public_id}", public_id=public_id, size=len(file.content)
        )

    async def delete(self, public_id: str) -> bool:
        logger.info("[MOCK MEDIA] delete %s", public_id)
        if public_id in self.stored:
            self.stored.discard(public_id)
            return True
        return False
