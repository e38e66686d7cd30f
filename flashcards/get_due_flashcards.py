# flashcards/get_due_flashcards.py
import logging
import os
from datetime import date

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from scheduler.sm2 import is_due
from utils.cors_utils import build_response, is_preflight
from utils.dynamodb import table_from_env

DEFAULT_LIMIT = 40
MAX_LIMIT = 200

log = logging.getLogger(__name__)
log.setLevel(logging.INFO)


def _default_limit():
    try:
        return int(os.environ.get("DUE_DEFAULT_LIMIT", DEFAULT_LIMIT))
    except ValueError:
        return DEFAULT_LIMIT


def _parse_limit(raw):
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        limit = _default_limit()
    return max(1, min(limit, MAX_LIMIT))


def due_cards(table, deck_id, today, limit):
    """Every due card of a deck, oldest first, at most `limit`."""
    due = []
    start_key = None

    # Scan + FilterExpression evaluates one page at a time; keep paging.
    while True:
        scan_kwargs = {"FilterExpression": Attr("deck_id").eq(deck_id)}
        if start_key:
            scan_kwargs["ExclusiveStartKey"] = start_key

        resp = table.scan(**scan_kwargs)
        for it in resp.get("Items", []):
            if is_due(it.get("next_review_date"), today):
                due.append(it)

        start_key = resp.get("LastEvaluatedKey")
        if not start_key:
            break

    due.sort(key=lambda it: it.get("created_at") or "")
    return due[:limit]


def lambda_handler(event, _ctx):
    try:
        if is_preflight(event):
            return build_response(200, {"ok": True}, methods="GET, OPTIONS")

        qs = event.get("queryStringParameters") or {}
        deck_id = (qs.get("deck_id") or "").strip()
        if not deck_id:
            return build_response(400, {"error": "deck_id required"}, methods="GET, OPTIONS")
        limit = _parse_limit(qs.get("limit"))

        # single reference date for the whole listing
        today = date.today()
        cards = due_cards(table_from_env("FLASHCARDS_TABLE"), deck_id, today, limit)

        return build_response(
            200,
            {
                "flashcards": cards,
                "count": len(cards),
                "today": today.isoformat(),
            },
            methods="GET, OPTIONS",
        )

    except ClientError as e:
        log.exception("get_due_flashcards failed")
        return build_response(500, {"error": e.response["Error"]["Message"]}, methods="GET, OPTIONS")
    except Exception as e:
        log.exception("get_due_flashcards failed")
        return build_response(500, {"error": str(e)}, methods="GET, OPTIONS")
