"""SNS publishing and CloudWatch Logs lookups used by the integration test."""
import json
import logging
import time
from typing import List, Optional, Tuple

from botocore.exceptions import ClientError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_delay,
    stop_any,
    wait_exponential,
)

logger = logging.getLogger(__name__)

HANDLED_MARKER = 'Handled SQS Event'


def publish_message(sns_client, topic_arn: str, body) -> str:
    """Publish a JSON-serialized message to an SNS topic.

    Args:
        sns_client: boto3 SNS client.
        topic_arn: ARN of the topic to publish to.
        body: JSON-serializable payload. No schema is enforced.

    Returns:
        str: The SNS message ID.
    """
    response = sns_client.publish(TopicArn=topic_arn, Message=json.dumps(body))
    message_id = response['MessageId']
    logger.info("Published message %s to %s", message_id, topic_arn)
    return message_id


def get_log_event_in_group(log_group_prefix: str, cw_logs_client) -> List[dict]:
    """Return the events of the log group matching a name prefix.

    This is a single snapshot: a group with no events yet, or no group at
    all, yields an empty list. When several groups share the prefix, the
    group named exactly ``log_group_prefix`` wins, otherwise the first one
    the service lists.

    Args:
        log_group_prefix: Log group name prefix, e.g. ``/aws/lambda/<name>``.
        cw_logs_client: boto3 CloudWatch Logs client.

    Returns:
        list: Log events ordered by timestamp.
    """
    response = cw_logs_client.describe_log_groups(logGroupNamePrefix=log_group_prefix)
    names = [group['logGroupName'] for group in response.get('logGroups', [])]
    if not names:
        logger.info("No log group matches %s", log_group_prefix)
        return []

    log_group_name = log_group_prefix if log_group_prefix in names else names[0]

    events = []
    paginator = cw_logs_client.get_paginator('filter_log_events')
    try:
        for page in paginator.paginate(logGroupName=log_group_name):
            events.extend(page.get('events', []))
    except ClientError as e:
        # Group deleted between listing and reading
        if e.response.get('Error', {}).get('Code') == 'ResourceNotFoundException':
            return []
        raise

    return sorted(events, key=lambda event: event.get('timestamp', 0))


def find_log_event(events: List[dict], marker: str = HANDLED_MARKER) -> Optional[dict]:
    """Return the first event whose message contains the marker after its start."""
    return next(
        (event for event in events if event.get('message', '').find(marker) > 0),
        None
    )


def wait_for_log_event(
    log_group_prefix: str,
    cw_logs_client,
    marker: str = HANDLED_MARKER,
    timeout: float = 60.0,
    initial_delay: float = 2.0,
    max_delay: float = 15.0,
    sleep=time.sleep
) -> Tuple[Optional[dict], List[dict]]:
    """Poll a log group with exponential backoff until the marker shows up.

    Args:
        log_group_prefix: Log group name prefix to query.
        cw_logs_client: boto3 CloudWatch Logs client.
        marker: Substring identifying the sought event.
        timeout: Upper bound on the total time spent waiting between polls.
        initial_delay: First backoff delay in seconds.
        max_delay: Largest single backoff delay in seconds.
        sleep: Sleep function, replaceable in tests.

    Returns:
        tuple: The matching event (or None when the wait ran out) and the
        events of the last poll.
    """
    backoff = wait_exponential(multiplier=initial_delay, max=max_delay)

    def remaining_backoff(retry_state):
        return max(0.0, min(backoff(retry_state), timeout - retry_state.idle_for))

    def waited_long_enough(retry_state):
        return retry_state.idle_for >= timeout

    def poll():
        events = get_log_event_in_group(log_group_prefix, cw_logs_client)
        return find_log_event(events, marker), events

    retryer = Retrying(
        retry=retry_if_result(lambda result: result[0] is None),
        stop=stop_any(waited_long_enough, stop_after_delay(timeout)),
        wait=remaining_backoff,
        sleep=sleep,
        before_sleep=before_sleep_log(logger, logging.INFO),
        retry_error_callback=lambda retry_state: retry_state.outcome.result()
    )

    event, events = retryer(poll)
    if event is None:
        logger.warning("%r not found under %s after %.0fs", marker, log_group_prefix, timeout)
    return event, events
