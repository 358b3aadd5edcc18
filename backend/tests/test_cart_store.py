"""
Tests for the cart store: merging, index operations, totals and persistence.
"""
import json

import pytest
from demoshop.models.product import Product
from demoshop.services.cart_store import CartStore
from demoshop.services.storage import JsonFileStorage, MemoryStorage


ESPRESSO = {"_id": "1", "name": "Espresso", "price": 3.99, "image": "espresso.svg"}
TEN = {"_id": "1", "name": "Mug", "price": 10}


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage):
    return CartStore(storage)


class TestAddItem:
    """Test adding products to the cart."""

    def test_same_product_merges(self, cart):
        """Test repeated uncustomized adds of one product keep a single entry."""
        cart.add_item(TEN, 1)
        cart.add_item(TEN, 1)

        assert len(cart) == 1
        assert cart.items[0].quantity == 2
        assert cart.total() == 20

    def test_merge_sums_requested_quantities(self, cart):
        """Test the merged quantity is the sum of all requested quantities."""
        for quantity in (1, 4, 2, 3):
            cart.add_item(TEN, quantity)

        assert len(cart) == 1
        assert cart.items[0].quantity == 10

    def test_customized_items_never_merge(self, cart):
        """Test identical customizations still produce separate entries."""
        customization = {"sugar": 1, "milk": "oat", "coffee": 2, "chocolate": 0}
        cart.add_item(TEN, 1, customization)
        cart.add_item(TEN, 1, customization)

        assert len(cart) == 2
        assert all(item.quantity == 1 for item in cart.items)

    def test_plain_add_does_not_merge_into_customized_entry(self, cart):
        """Test a plain add appends when the only matching entry is customized."""
        cart.add_item(TEN, 1, {"sugar": 2})
        cart.add_item(TEN, 1)

        assert len(cart) == 2
        assert cart.items[1].customization is None

    def test_empty_customization_counts_as_none(self, cart):
        """Test an empty customization mapping merges like no customization."""
        cart.add_item(TEN, 1)
        cart.add_item(TEN, 2, {})

        assert len(cart) == 1
        assert cart.items[0].quantity == 3

    def test_accepts_product_model(self, cart):
        """Test catalog Product models can be added directly."""
        product = Product(
            _id="abc",
            name="Hoodie",
            category="Clothing",
            price=44.99,
            description="Warm and cozy pullover hoodie"
        )
        cart.add_item(product)

        item = cart.items[0]
        assert item.id == "abc"
        assert item.name == "Hoodie"
        assert item.category == "Clothing"
        assert item.quantity == 1

    def test_accepts_plain_id_key(self, cart):
        """Test mappings using 'id' instead of '_id'."""
        cart.add_item({"id": "7", "name": "Cap", "price": 19.99})
        assert cart.items[0].id == "7"

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, cart, quantity):
        """Test a non-positive quantity is a caller error and leaves the cart alone."""
        with pytest.raises(ValueError):
            cart.add_item(TEN, quantity)
        assert cart.is_empty


class TestRemoveAndUpdate:
    """Test index-based removal and quantity updates."""

    def test_remove_item(self, cart):
        """Test removing an entry by index."""
        cart.add_item(TEN)
        cart.add_item(ESPRESSO | {"_id": "2"})

        cart.remove_item(0)

        assert len(cart) == 1
        assert cart.items[0].id == "2"

    @pytest.mark.parametrize("index", [5, -1])
    def test_remove_out_of_range_is_noop(self, cart, index):
        """Test out-of-range removal does not raise or change the cart."""
        cart.add_item(TEN)
        cart.remove_item(index)
        assert len(cart) == 1

    def test_update_quantity_sets_absolute_value(self, cart):
        """Test updating quantity on a single item cart."""
        cart.add_item(TEN, 1)
        cart.update_quantity(0, 3)

        assert cart.total() == 30
        assert cart.count() == 3

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_update_to_non_positive_removes(self, cart, quantity):
        """Test a non-positive update is equivalent to removal."""
        cart.add_item(TEN)
        cart.add_item(ESPRESSO | {"_id": "2"})

        cart.update_quantity(0, quantity)

        assert len(cart) == 1
        assert cart.items[0].id == "2"

    def test_update_out_of_range_is_noop(self, cart):
        """Test updating a missing index leaves the cart alone."""
        cart.add_item(TEN)
        cart.update_quantity(3, 5)
        assert cart.items[0].quantity == 1

    def test_clear(self, cart):
        """Test clearing the cart."""
        cart.add_item(TEN)
        cart.add_item(ESPRESSO | {"_id": "2"})
        cart.clear()

        assert cart.is_empty
        assert cart.total() == 0
        assert cart.count() == 0


class TestTotals:
    """Test total and count aggregation."""

    def test_mixed_cart_total_and_count(self, cart):
        """Test total and count on a cart with a custom coffee."""
        cart.add_item(ESPRESSO, 2)
        cart.add_item(
            {"_id": "2", "name": "Custom Coffee", "price": 5.99},
            1,
            {"sugar": 1, "milk": "none", "coffee": 2, "chocolate": 1}
        )

        assert cart.total() == pytest.approx(13.97)
        assert cart.count() == 3
        assert len(cart) == 2

    def test_total_after_interleaved_operations(self, cart):
        """Test total equals sum(price * quantity) after mixed mutations."""
        cart.add_item({"_id": "a", "name": "A", "price": 2.5}, 2)
        cart.add_item({"_id": "b", "name": "B", "price": 7.25}, 1)
        cart.add_item({"_id": "a", "name": "A", "price": 2.5}, 1)
        cart.update_quantity(1, 4)
        cart.add_item({"_id": "c", "name": "C", "price": 1.0}, 5)
        cart.remove_item(2)

        expected = sum(item.price * item.quantity for item in cart.items)
        assert cart.total() == pytest.approx(expected)
        assert cart.total() == pytest.approx(2.5 * 3 + 7.25 * 4)


class TestObservation:
    """Test snapshots and change callbacks."""

    def test_snapshot_is_detached(self, cart):
        """Test mutating a returned snapshot does not touch the store."""
        cart.add_item(TEN)
        snapshot = cart.get()
        snapshot[0].quantity = 99

        assert cart.items[0].quantity == 1

    def test_subscribers_notified_after_persist(self, storage):
        """Test listeners see the persisted state of each mutation."""
        cart = CartStore(storage)
        seen = []

        def listener(items):
            seen.append((len(items), json.loads(storage.get("cart"))))

        cart.subscribe(listener)
        cart.add_item(TEN)
        cart.clear()

        assert seen[0][0] == 1
        assert seen[0][1][0]["_id"] == "1"
        assert seen[1] == (0, [])

    def test_unsubscribe(self, cart):
        """Test an unsubscribed listener is no longer called."""
        calls = []
        unsubscribe = cart.subscribe(calls.append)
        cart.add_item(TEN)
        unsubscribe()
        cart.add_item(TEN)

        assert len(calls) == 1


class TestPersistence:
    """Test write-through persistence and rehydration."""

    def test_every_mutation_written_through(self, cart, storage):
        """Test the durable slot matches the cart after each mutation."""
        cart.add_item(TEN, 2)
        assert json.loads(storage.get("cart"))[0]["quantity"] == 2

        cart.update_quantity(0, 5)
        assert json.loads(storage.get("cart"))[0]["quantity"] == 5

        cart.remove_item(0)
        assert json.loads(storage.get("cart")) == []

    def test_customization_stored_under_custom_coffee_key(self, cart, storage):
        """Test the stored item shape keeps the customCoffee field name."""
        cart.add_item(TEN, 1, {"sugar": 3})
        stored = json.loads(storage.get("cart"))[0]
        assert stored["customCoffee"] == {"sugar": 3}

    def test_reload_yields_identical_cart(self, storage):
        """Test a fresh store over the same slot restores the same entries."""
        cart = CartStore(storage)
        cart.add_item(ESPRESSO, 2)
        cart.add_item({"_id": "2", "name": "Custom Coffee", "price": 5.99}, 1, {"sugar": 1, "milk": "oat"})
        cart.add_item({"_id": "3", "name": "Hoodie", "price": 44.99, "category": "Clothing"}, 1)

        reloaded = CartStore(storage)

        assert reloaded.get() == cart.get()

    def test_reload_from_file_storage(self, tmp_path):
        """Test persistence survives across file-backed store instances."""
        path = tmp_path / "state" / "storage.json"
        cart = CartStore(JsonFileStorage(path))
        cart.add_item(ESPRESSO, 3)

        reloaded = CartStore(JsonFileStorage(path))

        assert reloaded.get() == cart.get()
        assert reloaded.count() == 3

    @pytest.mark.parametrize("raw", [
        "not json",
        "{\"_id\": \"1\"}",
        "[{\"_id\": \"1\", \"name\": \"X\", \"price\": 1, \"quantity\": 0}]",
        "[{\"name\": \"missing id\"}]",
    ])
    def test_corrupt_slot_loads_empty(self, raw):
        """Test unparseable or invalid stored data yields an empty cart."""
        cart = CartStore(MemoryStorage({"cart": raw}))
        assert cart.is_empty

    def test_missing_slot_loads_empty(self, storage):
        """Test a fresh session starts with an empty cart."""
        assert CartStore(storage).is_empty

    def test_custom_storage_key(self, storage):
        """Test the store writes under the configured key."""
        cart = CartStore(storage, key="basket")
        cart.add_item(TEN)

        assert storage.get("basket") is not None
        assert storage.get("cart") is None
