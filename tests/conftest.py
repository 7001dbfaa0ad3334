import pytest

from bullet_mcp.core.models import BulletItem

GOOD_TEXTS = [
    "Use connection pooling to cut database latency.",
    "Add indexes to every column used in joins.",
    "Monitor slow queries and alert on regressions.",
    "Review query plans before every major release.",
    "Limit result sets with pagination on large tables.",
]


def make_items(*texts, **kwargs):
    return [BulletItem(text=t, **kwargs) for t in texts]


def nested(depth, text="Nested bullet"):
    """A single item nested ``depth`` levels deep."""
    item = {"text": f"{text} {depth}"}
    for level in range(depth - 1, 0, -1):
        item = {"text": f"{text} {level}", "children": [item]}
    return BulletItem.model_validate(item)


@pytest.fixture
def good_texts():
    return list(GOOD_TEXTS)


@pytest.fixture
def good_items():
    return make_items(*GOOD_TEXTS)


@pytest.fixture
def good_request():
    return {"items": [{"text": t} for t in GOOD_TEXTS]}
