# Posting replies back to Slack via chat.postMessage

import json
import logging
from typing import Optional, Sequence

import requests
from fastapi.concurrency import run_in_threadpool

from acronym_bot.config import DEFAULT_SLACK_API_BASE_URL, DEFAULT_SLACK_POST_TIMEOUT, Settings
from acronym_bot.core.errors import DispatchError

logger = logging.getLogger(__name__)

DEFINITION_SEPARATOR = " OR "


class SlackReplyDispatcher:
    """Sends resolved definitions to the channel an app_mention came from."""

    def __init__(
        self,
        token: str,
        api_base_url: str = DEFAULT_SLACK_API_BASE_URL,
        timeout: Optional[float] = DEFAULT_SLACK_POST_TIMEOUT,
    ):
        self._token = token
        self._url = f"{api_base_url.rstrip('/')}/chat.postMessage"
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlackReplyDispatcher":
        return cls(
            token=settings.slack_oauth_access_token,
            api_base_url=settings.slack_api_base_url,
            timeout=settings.slack_post_timeout,
        )

    async def dispatch(self, channel: str, definitions: Sequence[str]) -> None:
        """Posts the definitions joined by " OR " and waits for Slack's response.

        Raises DispatchError when the request fails before a response arrives.
        """
        text = DEFINITION_SEPARATOR.join(definitions)
        await run_in_threadpool(self._post_message, channel, text)

    def _post_message(self, channel: str, text: str) -> None:
        raw_body = json.dumps({"channel": channel, "text": text}, ensure_ascii=False).encode("utf-8")
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Content-Length": str(len(raw_body)),
        }
        try:
            response = requests.post(self._url, data=raw_body, headers=headers, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error when posting to Slack channel {channel}: {e}", exc_info=True)
            raise DispatchError(f"Failed to post reply to Slack channel {channel}: {e}") from e

        logger.info(f"Slack chat.postMessage for channel {channel} returned {response.status_code}: {response.text}")
