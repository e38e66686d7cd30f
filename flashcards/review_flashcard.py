import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from botocore.exceptions import ClientError

from scheduler.sm2 import review_flashcard, validate_rating
from utils.cors_utils import build_response, is_preflight
from utils.dynamodb import table_from_env

log = logging.getLogger(__name__)
log.setLevel(logging.INFO)


def _time_to_answer(body):
    value = body.get("time_to_answer")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError("time_to_answer must be a non-negative integer (ms)")
    return value


def lambda_handler(event, _ctx):
    """POST /flashcards/{id}/review  body: {"rating": 0..5, "session_id"?, "time_to_answer"?}"""
    try:
        if is_preflight(event):
            return build_response(200, {"ok": True})

        card_id = (event.get("pathParameters") or {}).get("id")
        if not card_id:
            return build_response(400, {"error": "Missing flashcard id"})

        try:
            body = json.loads(event.get("body") or "{}")
        except json.JSONDecodeError:
            return build_response(400, {"error": "Invalid JSON body"})
        if not isinstance(body, dict):
            return build_response(400, {"error": "Invalid JSON body"})

        if "rating" not in body:
            return build_response(400, {"error": "Missing rating"})
        try:
            rating = validate_rating(body["rating"])
            time_to_answer = _time_to_answer(body)
        except ValueError as e:
            return build_response(400, {"error": str(e)})

        cards = table_from_env("FLASHCARDS_TABLE")
        item = cards.get_item(Key={"id": card_id}).get("Item")
        if not item:
            return build_response(404, {"error": "Flashcard not found"})

        result = review_flashcard(item, rating)

        try:
            updated = cards.update_item(
                Key={"id": card_id},
                UpdateExpression="""
                    SET easiness_factor=:e, interval_days=:i,
                        repetitions=:r, next_review_date=:n
                """,
                ConditionExpression="attribute_exists(#id)",
                ExpressionAttributeNames={"#id": "id"},
                ExpressionAttributeValues={
                    ":e": Decimal(str(result.easiness_factor)),
                    ":i": Decimal(str(result.interval_days)),
                    ":r": Decimal(str(result.repetitions)),
                    ":n": result.next_review_date,
                },
                ReturnValues="ALL_NEW",
            )["Attributes"]
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return build_response(404, {"error": "Flashcard not found"})
            raise

        review = {
            "id": str(uuid.uuid4()),
            "flashcard_id": card_id,
            "rating": rating,
            "reviewed_at": datetime.now(timezone.utc).isoformat(),
        }
        if body.get("session_id"):
            review["session_id"] = str(body["session_id"])
        if time_to_answer is not None:
            review["time_to_answer"] = time_to_answer
        # schedule is already stored; the log entry is best effort
        try:
            table_from_env("REVIEWS_TABLE").put_item(Item=review)
        except Exception:
            log.exception("review log write failed flashcard=%s", card_id)

        log.info("reviewed flashcard=%s rating=%d next=%s interval=%d",
                 card_id, rating, result.next_review_date, result.interval_days)

        return build_response(200, {"data": updated, "sm2": result._asdict()})

    except Exception as e:
        log.exception("review failed")
        return build_response(500, {"error": str(e)})
