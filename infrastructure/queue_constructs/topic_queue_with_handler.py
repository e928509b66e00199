"""SNS topic backed by an SQS queue with a Lambda consuming the queue."""
from dataclasses import dataclass

from aws_cdk import (
    aws_lambda as lambda_,
    aws_sns as sns,
    aws_sns_subscriptions as subscriptions,
    aws_sqs as sqs,
    Duration
)
from aws_cdk.aws_lambda_event_sources import SqsEventSource
from constructs import Construct


@dataclass(frozen=True)
class QueueHandlerProps:
    """Entry point, runtime and code bundle of the queue handler function."""

    handler: str
    runtime: lambda_.Runtime
    code: lambda_.Code

    def __post_init__(self):
        if not self.handler:
            raise ValueError("handler must be a non-empty entry point")


class TopicQueueWithHandler(Construct):
    """Creates a topic that fans out to a queue consumed by a Lambda function."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        sqs_event_handler: QueueHandlerProps,
        batch_size: int = 10,
        handler_timeout: Duration = Duration.seconds(30)
    ):
        """Initialize the topic/queue/handler construct.

        Args:
            scope: CDK scope.
            id: Construct ID, unique within the scope.
            sqs_event_handler: Handler, runtime and code of the queue consumer.
            batch_size: Maximum number of records per handler invocation.
            handler_timeout: Timeout of the handler function.
        """
        if not id:
            raise ValueError("id must be a non-empty construct identifier")

        super().__init__(scope, id)

        # Visibility timeout must cover retries of a whole batch
        self.queue = sqs.Queue(self, 'Queue',
            visibility_timeout=Duration.seconds(handler_timeout.to_seconds() * 6)
        )

        self.topic = sns.Topic(self, 'Topic')
        self.topic.add_subscription(subscriptions.SqsSubscription(self.queue))

        # Lambda function
        self.function = lambda_.Function(self, 'QueueHandler',
            runtime=sqs_event_handler.runtime,
            handler=sqs_event_handler.handler,
            code=sqs_event_handler.code,
            timeout=handler_timeout,
            memory_size=256
        )

        # Grant permissions to read from SQS
        self.queue.grant_consume_messages(self.function)

        # SQS event source
        self.function.add_event_source(
            SqsEventSource(self.queue, batch_size=batch_size)
        )

    @property
    def queue_url(self) -> str:
        return self.queue.queue_url

    @property
    def queue_handler_name(self) -> str:
        return self.function.function_name

    @property
    def topic_arn(self) -> str:
        return self.topic.topic_arn
