import os

import boto3
import pytest
from moto import mock_aws

os.environ["AWS_DEFAULT_REGION"] = "eu-north-1"
os.environ["AWS_REGION"] = "eu-north-1"
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ["FLASHCARDS_TABLE"] = "Flashcards"
os.environ["REVIEWS_TABLE"] = "CardReviews"


def _create_table(dynamodb, name):
    table = dynamodb.create_table(
        TableName=name,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def setup_dynamodb():
    # Mock AWS environment
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="eu-north-1")
        flashcards = _create_table(dynamodb, "Flashcards")
        reviews = _create_table(dynamodb, "CardReviews")
        yield flashcards, reviews


@pytest.fixture
def flashcards_table(setup_dynamodb):
    return setup_dynamodb[0]


@pytest.fixture
def reviews_table(setup_dynamodb):
    return setup_dynamodb[1]
