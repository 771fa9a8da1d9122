"""Gateway transports."""

from .pubsub_gateway import PubSubGateway

__all__ = ["PubSubGateway"]
