"""
Chat notifications for study events.
Sends messages to the configured Slack and Discord incoming webhooks.
"""
from typing import Dict, Any, List, Optional
from app.core.config import settings
from app.core.logging_config import logger
from app.models.schemas import NotificationChannel
from app.utils.exceptions import NotificationError
from app.utils.webhook_client import WebhookClient


BOT_USERNAME = "CramMaster Bot"


def build_payload(channel: NotificationChannel, message: str) -> Dict[str, Any]:
    """Webhook body for a channel."""
    if channel == NotificationChannel.SLACK:
        return {
            "text": f"🎓 CramMaster: {message}",
            "username": BOT_USERNAME
        }
    return {
        "content": f"🎓 **CramMaster Notification**\n{message}",
        "username": BOT_USERNAME
    }


class NotificationService:
    """Delivers notifications to chat webhooks."""

    def __init__(
        self,
        webhook_urls: Optional[Dict[NotificationChannel, Optional[str]]] = None,
        client: Optional[WebhookClient] = None
    ):
        if webhook_urls is None:
            webhook_urls = {
                NotificationChannel.SLACK: settings.slack_webhook_url,
                NotificationChannel.DISCORD: settings.discord_webhook_url,
            }
        self.webhook_urls = {channel: url for channel, url in webhook_urls.items() if url}
        self.client = client or WebhookClient()

    def configured_channels(self) -> List[str]:
        return [channel.value for channel in self.webhook_urls]

    async def send(self, message: str, channels: List[NotificationChannel]) -> Dict[str, bool]:
        """
        Send a message to the requested channels.

        Args:
            message: Notification text
            channels: Channels to notify; unconfigured ones are skipped

        Returns:
            Dict of channel name → delivered, for each configured requested channel
        """
        results = {}
        for channel in dict.fromkeys(channels):
            url = self.webhook_urls.get(channel)
            if not url:
                logger.warning(f"[Notifications] {channel.value} webhook not configured, skipping")
                continue

            try:
                await self.client.post(url, build_payload(channel, message))
                results[channel.value] = True
                logger.info(f"[Notifications] Sent to {channel.value}")
            except NotificationError as e:
                logger.error(f"[Notifications] Failed to send to {channel.value}: {e}")
                results[channel.value] = False

        return results


# Global notification service instance
notification_service = NotificationService()
