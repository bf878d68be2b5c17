import pytest
from marketplace.cart.lines import load_cart_lines
from marketplace.checkout.orchestrator import CheckoutOrchestrator, ShippingDetails
from marketplace.order.status import UpdateOrderStatus
from marketplace.projections.order_summary import summaries_for
from marketplace.projections.seller_dashboard import dashboard_for
from protean import current_domain
from shared.session import Session

BUYER = Session(user_id="buyer-001", role="buyer")
SHIPPING = ShippingDetails(
    full_name="Asha Rao",
    phone="9845012345",
    address="12 Lake Road",
    city="Bengaluru",
    state="Karnataka",
    pincode="560001",
)


@pytest.fixture()
def placed_orders(list_product, add_to_cart):
    add_to_cart(list_product(seller_id="seller-a", price=199.0), quantity=2)
    add_to_cart(list_product(seller_id="seller-b", price=299.0))
    result = CheckoutOrchestrator().checkout(BUYER, load_cart_lines(BUYER.user_id), SHIPPING, "cod")
    return {o.seller_id: o.order_id for o in result.orders}


class TestOrderSummary:
    def test_buyer_sees_a_row_per_order(self, placed_orders):
        rows = summaries_for("buyer-001")
        assert sorted(r.total_amount for r in rows) == [299.0, 398.0]
        assert {r.status for r in rows} == {"pending"}
        assert {r.payment_status for r in rows} == {"pending"}

    def test_seller_sees_their_orders_only(self, placed_orders):
        [row] = summaries_for("seller-b", as_seller=True)
        assert row.order_id == placed_orders["seller-b"]
        assert row.item_count == 1

    def test_status_change_is_reflected(self, placed_orders):
        current_domain.process(
            UpdateOrderStatus(order_id=placed_orders["seller-a"], seller_id="seller-a", status="confirmed"),
            asynchronous=False,
        )
        [row] = summaries_for("seller-a", as_seller=True)
        assert row.status == "confirmed"


class TestSellerDashboard:
    def test_counts_and_revenue(self, placed_orders, list_product):
        list_product(seller_id="seller-a", name="Another")

        stats = dashboard_for("seller-a")
        assert stats["product_count"] == 2
        assert stats["total_orders"] == 1
        assert stats["pending_orders"] == 1
        assert stats["revenue"] == 398.0

    def test_confirming_leaves_pending(self, placed_orders):
        current_domain.process(
            UpdateOrderStatus(order_id=placed_orders["seller-a"], seller_id="seller-a", status="confirmed"),
            asynchronous=False,
        )
        stats = dashboard_for("seller-a")
        assert stats["pending_orders"] == 0
        assert stats["revenue"] == 398.0

    def test_cancelling_removes_revenue(self, placed_orders):
        current_domain.process(
            UpdateOrderStatus(order_id=placed_orders["seller-b"], seller_id="seller-b", status="cancelled"),
            asynchronous=False,
        )
        stats = dashboard_for("seller-b")
        assert stats["total_orders"] == 1
        assert stats["pending_orders"] == 0
        assert stats["revenue"] == 0.0

    def test_new_seller(self):
        assert dashboard_for("seller-new") == {
            "seller_id": "seller-new",
            "product_count": 0,
            "total_orders": 0,
            "pending_orders": 0,
            "revenue": 0.0,
        }

    def test_product_count_covers_large_catalog(self, list_product):
        for n in range(105):
            list_product(seller_id="seller-big", name=f"Bottle {n}")
        assert dashboard_for("seller-big")["product_count"] == 105
