import os
from decimal import Decimal

from scheduler.sm2 import DEFAULT_EASINESS_FACTOR
from utils.dynamodb import table_from_env

defaults = {
    "easiness_factor" : Decimal(str(DEFAULT_EASINESS_FACTOR)),
    "interval_days"   : 0,
    "repetitions"     : 0,
    "next_review_date": None,
}


def migrate(table):
    """Backfill scheduling defaults onto cards that predate them."""
    updated = 0
    scan_kwargs = {}
    while True:
        batch = table.scan(**scan_kwargs)
        with table.batch_writer() as bw:
            for item in batch["Items"]:
                update = {k: v for k, v in defaults.items() if k not in item}
                if update:
                    item.update(update)
                    bw.put_item(Item=item)
                    updated += 1
        if "LastEvaluatedKey" not in batch:
            break
        scan_kwargs["ExclusiveStartKey"] = batch["LastEvaluatedKey"]
    return updated


if __name__ == "__main__":
    os.environ.setdefault("FLASHCARDS_TABLE", "Flashcards")
    count = migrate(table_from_env("FLASHCARDS_TABLE"))
    print(f"Migration done, {count} flashcards updated")
