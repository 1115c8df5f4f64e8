"""Notification adapter that queues welcome emails in the mail collection.

A separate mail worker delivers queued documents; this adapter only writes
them, so a successful call means "queued", not "delivered".
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import structlog

from agencyhub.domain.entities.tenant import utc_now
from agencyhub.domain.exceptions import NotificationError
from agencyhub.domain.interfaces import INotificationService
from agencyhub.infrastructure.persistence.document_store import InMemoryDocumentStore
from agencyhub.infrastructure.persistence.mappers import MAIL_COLLECTION

logger = structlog.get_logger(__name__)

CLIENT_WELCOME_TEMPLATE = "clientWelcome"


class MailQueueNotificationService(INotificationService):
    """Writes templated mail documents for the delivery worker."""

    def __init__(self, store: InMemoryDocumentStore, timeout: Optional[float] = None):
        self._store = store
        self.timeout = timeout
        self._queued = 0

    async def check_health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "service": "MailQueueNotificationService",
            "emails_queued": self._queued,
        }

    async def send_client_welcome(
        self,
        to: str,
        user_name: str,
        client_name: str,
        agency_name: str,
        invite_link: str,
    ) -> bool:
        document = {
            "to": to,
            "template": {
                "name": CLIENT_WELCOME_TEMPLATE,
                "data": {
                    "userName": user_name,
                    "clientName": client_name,
                    "agencyName": agency_name,
                    "inviteLink": invite_link,
                },
            },
            "createdAt": utc_now().isoformat(),
        }
        try:
            mail_id = await asyncio.wait_for(self._store.add(MAIL_COLLECTION, document), timeout=self.timeout)
        except asyncio.TimeoutError as err:
            logger.error("Timed out queueing welcome email", recipient=to, timeout=self.timeout)
            raise NotificationError(
                f"Timed out queueing welcome email for {to}",
                original_error=err,
                context={"template": CLIENT_WELCOME_TEMPLATE, "timeout": self.timeout},
            ) from err
        except Exception as err:
            logger.error("Failed to queue welcome email", recipient=to, error=str(err))
            raise NotificationError(
                f"Failed to queue welcome email for {to}",
                original_error=err,
                context={"template": CLIENT_WELCOME_TEMPLATE},
            ) from err

        self._queued += 1
        logger.info("Welcome email queued", recipient=to, client_name=client_name, mail_id=mail_id)
        return True


__all__ = ["MailQueueNotificationService", "CLIENT_WELCOME_TEMPLATE"]
