import json
from decimal import Decimal

DEFAULT_METHODS = "POST, GET, OPTIONS"


class _DecimalEncoder(json.JSONEncoder):
    """DynamoDB hands numbers back as Decimal; emit ints as ints."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            if obj == obj.to_integral_value():
                return int(obj)
            return float(obj)
        return super().default(obj)


def build_response(status_code, body, cors=True, methods=DEFAULT_METHODS):
    headers = {
        "Content-Type": "application/json",
    }
    if cors:
        headers.update({
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": "Content-Type, X-Amz-Date, Authorization, X-Api-Key, X-Amz-Security-Token"
        })

    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body, cls=_DecimalEncoder),
    }


def is_preflight(event):
    return (event.get("httpMethod") or "").upper() == "OPTIONS"
