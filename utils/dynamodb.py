import os

import boto3


def table_from_env(env_name, default=None):
    """Resolve a DynamoDB table whose name lives in an env var.

    Must be called inside the handler, not at import time.
    """
    name = os.environ.get(env_name, default)
    if not name:
        raise KeyError(f"environment variable {env_name} is not set")
    return boto3.resource("dynamodb").Table(name)
