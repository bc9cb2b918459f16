"""Open Graph metadata consumer."""

from opengraph_consumer.consumer import Consumer

__all__ = ["Consumer"]
