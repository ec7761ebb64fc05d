"""
Push notifications through the FCM HTTP v1 API.

Disabled (every send is skipped) unless both FCM_PROJECT_ID and
FCM_ACCESS_TOKEN are configured.
"""

import logging

import httpx

from marketplace.domain.ports import PushSender

logger = logging.getLogger(__name__)

FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"


class FcmPushSender(PushSender):
    def __init__(
        self,
        client: httpx.AsyncClient,
        project_id: str,
        access_token: str,
    ):
        self._client = client
        self._project_id = project_id
        self._access_token = access_token

    @property
    def enabled(self) -> bool:
        return bool(self._project_id and self._access_token)

    async def send(self, token: str, title: str, body: str, data: dict[str, str]) -> None:
        if not self.enabled:
            return
        response = await self._client.post(
            FCM_SEND_URL.format(project_id=self._project_id),
            headers={"Authorization": f"Bearer {self._access_token}"},
            json={
                "message": {
                    "token": token,
                    "notification": {"title": title, "body": body},
                    "data": data,
                }
            },
        )
        response.raise_for_status()
        logger.debug(f"[Push] Sent '{title}' ({response.status_code})")
