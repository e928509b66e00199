"""Decoding helpers for SQS records delivered from an SNS subscription."""
import json


def decode_body(record: dict):
    """Decode an SQS record body, unwrapping the SNS notification if present.

    Args:
        record: A single entry from the SQS event's ``Records`` list.

    Returns:
        The decoded payload, or the raw body string if it is not JSON.
    """
    body = _loads(record.get('body', ''))

    # SNS wraps the published message unless raw delivery is enabled
    if isinstance(body, dict) and body.get('Type') == 'Notification' and 'Message' in body:
        return _loads(body['Message'])

    return body


def _loads(text):
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return text
