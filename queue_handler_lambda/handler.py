"""Queue handler Lambda that echoes SQS events to CloudWatch Logs."""
import json
import logging

from sqs_event import decode_body

logger = logging.getLogger()
logger.setLevel(logging.INFO)

HANDLED_MARKER = 'Handled SQS Event'


def echo_sqs_event_handler(event, context):
    """Log every message in the SQS batch, then the handled marker.

    Args:
        event: SQS event containing message records.
        context: Lambda context object.

    Returns:
        dict: Response with status code.
    """
    records = event.get('Records', [])

    for record in records:
        body = decode_body(record)
        logger.info("Message %s: %s", record.get('messageId'), json.dumps(body))

    logger.info("%s with %d record(s)", HANDLED_MARKER, len(records))
    return {'statusCode': 200}
