"""Push channel registry: the adapter web push is dispatched through.

A fake in-memory adapter is used unless another one is installed with
:func:`set_push_channel` (e.g. a VAPID-backed adapter in production).
"""

from notifications.channel.push_port import PushPort

_push_channel: PushPort | None = None


def get_push_channel() -> PushPort:
    global _push_channel
    if _push_channel is None:
        from notifications.channel.fake_push import FakePushAdapter

        _push_channel = FakePushAdapter()
    return _push_channel


def set_push_channel(adapter: PushPort) -> None:
    global _push_channel
    _push_channel = adapter


def reset_push_channels() -> None:
    """Drop the installed adapter (useful for testing)."""
    global _push_channel
    _push_channel = None
