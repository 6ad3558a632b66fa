"""Fake web push adapter: records sent pushes for testing."""

from uuid import uuid4

from notifications.channel.push_port import PushPort


class FakePushAdapter(PushPort):
    """Push adapter that records notifications in memory for test assertions."""

    def __init__(self):
        self.sent_pushes: list[dict] = []
        self.expired_endpoints: set[str] = set()
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Push delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def expire(self, endpoint: str):
        """Make the push service answer 410 Gone for ``endpoint``."""
        self.expired_endpoints.add(endpoint)

    def send(self, subscription: dict, payload: dict) -> dict:
        if subscription["endpoint"] in self.expired_endpoints:
            return {"status": "expired", "status_code": 410, "error": "Subscription has expired"}
        if not self.should_succeed:
            return {"status": "failed", "status_code": 500, "error": self.failure_reason}

        message_id = f"push-{uuid4().hex[:12]}"
        self.sent_pushes.append({"message_id": message_id, "endpoint": subscription["endpoint"], "payload": payload})
        return {"message_id": message_id, "status": "sent", "status_code": 201}

    def reset(self):
        self.sent_pushes.clear()
        self.expired_endpoints.clear()
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
