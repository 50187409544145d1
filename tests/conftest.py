import pytest

from catalog_search import CatalogCategory, CatalogItem


class _Handle:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False


class ManualScheduler:
    """Fake-clock scheduler: callbacks only run when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self.pending = []

    def schedule(self, delay, callback):
        handle = _Handle(self.now + delay, callback)
        self.pending.append(handle)
        return handle

    def cancel(self, handle):
        handle.cancelled = True

    def advance(self, seconds):
        self.now += seconds
        due = [h for h in self.pending if not h.cancelled and h.due <= self.now + 1e-9]
        for handle in sorted(due, key=lambda h: h.due):
            self.pending.remove(handle)
            handle.callback()

    @property
    def live_timers(self):
        return [h for h in self.pending if not h.cancelled]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def categories():
    return (
        CatalogCategory(id="c1", name="Hot Beverages", emoji="☕"),
        CatalogCategory(id="c2", name="Desserts"),
        CatalogCategory(id="c3", name="Snacks"),
    )


@pytest.fixture
def items():
    return (
        CatalogItem(
            id="i1",
            category_id="c1",
            title="Latte",
            description="Espresso with steamed milk",
            price=180,
            currency="INR",
            tags=("bestseller",),
        ),
        CatalogItem(id="i2", category_id="c1", title="Latte Macchiato", price=210, currency="INR"),
        CatalogItem(id="i3", category_id="c1", title="Cappuccino", price=190, currency="INR"),
        CatalogItem(id="i4", category_id="c1", title="Espresso", price=120, currency="INR"),
        CatalogItem(
            id="i5",
            category_id="c2",
            title="Chocolate Cake",
            price=250,
            currency="INR",
            tags=("veg", "new"),
        ),
        CatalogItem(
            id="i6",
            category_id="c3",
            title="Spicy Chicken Wrap",
            price=220,
            currency="INR",
            tags=("spicy", "non-veg"),
        ),
        CatalogItem(
            id="i7", category_id="c3", title="Veggie Burger", price=200, currency="INR", tags=("veg",)
        ),
        # Points at a category that does not exist
        CatalogItem(
            id="i8",
            category_id="gone",
            title="Mystery Box",
            description="Chef special surprise",
            price=300,
            currency="INR",
            is_available=False,
        ),
    )


@pytest.fixture
def by_id(items):
    return {item.id: item for item in items}
