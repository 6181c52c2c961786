import pytest

from minipos.application.dispatch import ImmediateDispatcher
from minipos.application.session import SessionController
from minipos.domain.cart import Cart


class UnusedService:
    def __getattr__(self, name):
        raise AssertionError(f"backend should not be called: {name}")


def _controller():
    return SessionController(UnusedService(), UnusedService(), ImmediateDispatcher())


def test_adding_same_product_increments_until_stock(make_product):
    cart = Cart()
    p = make_product(stock=2)

    assert cart.add(p) is True
    assert cart.add(p) is True
    assert cart.get("p1").quantity == 2

    assert cart.add(p) is False
    assert cart.get("p1").quantity == 2
    assert len(cart) == 1


def test_product_without_stock_is_not_added(make_product):
    cart = Cart()

    assert cart.add(make_product(stock=0)) is False
    assert cart.is_empty


def test_total_is_sum_of_price_times_quantity(make_product):
    cart = Cart()
    apple = make_product("p1", "Apple", price=0.5, stock=10)
    milk = make_product("p2", "Milk", price=1.25, stock=10, sku="SKU-2")
    for _ in range(3):
        cart.add(apple)
    cart.add(milk)

    assert cart.total == pytest.approx(0.5 * 3 + 1.25)
    cart.set_quantity("p2", 4)
    assert cart.total == pytest.approx(sum(line.price * line.quantity for line in cart))


@pytest.mark.parametrize("qty", [0, -1, -50])
def test_set_quantity_clamps_to_one(make_product, qty):
    cart = Cart()
    cart.add(make_product())

    cart.set_quantity("p1", qty)

    assert cart.get("p1").quantity == 1


def test_set_quantity_does_not_revalidate_stock(make_product):
    cart = Cart()
    cart.add(make_product(stock=2))

    cart.set_quantity("p1", 9)

    assert cart.get("p1").quantity == 9


def test_remove_missing_line_is_noop(make_product):
    cart = Cart()
    cart.add(make_product())

    assert cart.remove("nope") is False
    assert [line.product_id for line in cart] == ["p1"]


def test_controller_coerces_quantity_text(make_product):
    ctl = _controller()
    ctl.add_to_cart(make_product())

    ctl.set_quantity("p1", "3")
    assert ctl.state.cart.get("p1").quantity == 3

    ctl.set_quantity("p1", "abc")
    assert ctl.state.cart.get("p1").quantity == 1


def test_controller_notifies_only_on_change(make_product):
    ctl = _controller()
    events = []
    ctl.subscribe(lambda: events.append(ctl.state.total))

    ctl.add_to_cart(make_product(stock=1))
    ctl.add_to_cart(make_product(stock=1))
    ctl.remove_line("missing")

    assert events == [10.0]


def test_change_is_derived_from_paid_text(make_product):
    ctl = _controller()
    ctl.add_to_cart(make_product(price=10.0))

    assert ctl.state.change is None
    ctl.set_paid("25")
    assert ctl.state.change == pytest.approx(15.0)
    ctl.set_paid("twenty")
    assert ctl.state.change is None


def test_snapshot_is_detached(make_product):
    cart = Cart()
    cart.add(make_product())
    snap = cart.snapshot()

    cart.set_quantity("p1", 4)
    cart.remove("p1")

    assert snap.get("p1").quantity == 1
    assert snap.to_payload() == [
        {"product_id": "p1", "name": "Apple", "sku": "SKU-1", "price": 10.0, "quantity": 1}
    ]
