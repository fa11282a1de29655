"""
HTTP client for posting JSON to chat webhooks.
"""
import httpx
from typing import Dict, Any, Optional
from app.core.config import settings
from app.core.logging_config import logger
from app.utils.exceptions import NotificationError


class WebhookClient:
    """Posts JSON payloads to incoming-webhook URLs."""

    def __init__(self, timeout: Optional[int] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the webhook client.

        Args:
            timeout: Request timeout in seconds (default: from config)
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.timeout = timeout or settings.webhook_timeout
        self.transport = transport

    async def post(self, url: str, payload: Dict[str, Any]) -> int:
        """
        POST a JSON payload to a webhook.

        Args:
            url: Webhook URL
            payload: JSON body

        Returns:
            HTTP status code of the successful response

        Raises:
            NotificationError: If the request fails or returns an error status
        """
        try:
            logger.debug(f"[Webhook] Payload: {payload}")

            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"}
                )
                response.raise_for_status()

                logger.info(f"[Webhook] Response status: {response.status_code}")
                return response.status_code

        except httpx.TimeoutException as e:
            logger.error(f"[Webhook] Timeout posting webhook: {e}")
            raise NotificationError(f"Webhook timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"[Webhook] HTTP error posting webhook: {e}")
            raise NotificationError(f"Webhook error: {e.response.status_code} - {e.response.text}") from e
        except httpx.HTTPError as e:
            logger.error(f"[Webhook] Error posting webhook: {e}")
            raise NotificationError(f"Webhook call failed: {e}") from e
