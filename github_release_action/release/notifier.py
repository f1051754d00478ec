"""Chat webhook notifications for published releases."""

from typing import Any

import httpx
import structlog

from github_release_action.configuration.models import NotificationProvider
from github_release_action.utils.constants import SLACK_MESSAGE_TEMPLATE, TEAMS_TITLE_TEMPLATE, WEBHOOK_TIMEOUT_SECONDS
from github_release_action.utils.templates import render_string_with_model

from .exceptions import NotificationError
from .models import NotificationContext

logger = structlog.get_logger(__name__)


def build_slack_payload(context: NotificationContext) -> dict[str, Any]:
    """Render a plain Slack chat message."""
    return {"text": render_string_with_model(SLACK_MESSAGE_TEMPLATE, context)}


def build_teams_payload(context: NotificationContext) -> dict[str, Any]:
    """Render a Microsoft Teams Adaptive Card message."""
    body: list[dict[str, Any]] = [
        {
            "type": "TextBlock",
            "text": render_string_with_model(TEAMS_TITLE_TEMPLATE, context),
            "weight": "Bolder",
            "size": "Medium",
            "wrap": True,
        }
    ]
    if context.changelog:
        body.append({"type": "TextBlock", "text": context.changelog, "wrap": True})
    card: dict[str, Any] = {
        "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
        "type": "AdaptiveCard",
        "version": "1.4",
        "body": body,
    }
    if context.release_url:
        card["actions"] = [{"type": "Action.OpenUrl", "title": "View release", "url": context.release_url}]
    return {
        "type": "message",
        "attachments": [
            {
                "contentType": "application/vnd.microsoft.card.adaptive",
                "contentUrl": None,
                "content": card,
            }
        ],
    }


PAYLOAD_BUILDERS = {
    NotificationProvider.SLACK: build_slack_payload,
    NotificationProvider.TEAMS: build_teams_payload,
}


class WebhookNotifier:
    """Posts a single release notification to a chat webhook."""

    def __init__(
        self,
        webhook_url: str,
        provider: NotificationProvider = NotificationProvider.SLACK,
        timeout: float = WEBHOOK_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.provider = provider
        self.timeout = timeout
        self.transport = transport

    def build_payload(self, context: NotificationContext) -> dict[str, Any]:
        return PAYLOAD_BUILDERS[self.provider](context)

    async def notify(self, context: NotificationContext) -> None:
        """Deliver the notification.

        Raises:
            NotificationError: If the request fails or the webhook answers with an error status.
        """
        payload = self.build_payload(context)
        logger.info("Sending release notification", provider=self.provider.value, version=context.version)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NotificationError(
                f"{self.provider.value} webhook returned {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise NotificationError(f"Failed to deliver {self.provider.value} notification: {exc}") from exc
        logger.info("Sent release notification", provider=self.provider.value, status_code=response.status_code)
