"""Real-time stream subsystem.

One cancellable timer task per live connection, owned by
:class:`StreamSessionManager`.
"""

from synthcity.stream.registry import StreamSessionManager
from synthcity.stream.session import StreamChannel, StreamSession

__all__ = ["StreamChannel", "StreamSession", "StreamSessionManager"]
