"""Web push channel port: abstract interface for push delivery."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    """Abstract interface for web push adapters."""

    @abstractmethod
    def send(self, subscription: dict, payload: dict) -> dict:
        """Deliver one payload to one browser subscription.

        Args:
            subscription: ``{"endpoint", "p256dh", "auth"}``
            payload: title, body, tag, data, require_interaction, actions

        Returns:
            dict with keys: status ("sent", "failed" or "expired"),
            status_code (optional), error (optional)
        """
        ...
