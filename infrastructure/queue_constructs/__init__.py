"""CDK constructs for a topic backed by a queue with a handler function."""
from .topic_queue_with_handler import QueueHandlerProps, TopicQueueWithHandler

__all__ = [
    'QueueHandlerProps',
    'TopicQueueWithHandler',
]
