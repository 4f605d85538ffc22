"""
Tests for the reorder advisor and the suggestion lifecycle.
"""
import pytest

from supplycast.core.config import Settings
from supplycast.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from supplycast.models import InventoryItem, PurchaseOrder, StockLevel, Supplier
from supplycast.services.reorder_service import ReorderService


@pytest.fixture
def service(db_session, settings):
    return ReorderService(db_session, settings)


class TestReorderRules:

    @pytest.mark.parametrize("quantity,expected", [(9, True), (10, True), (11, False)])
    def test_reorder_point_is_inclusive(self, quantity, expected):
        item = InventoryItem(sku="A", quantity=quantity, reorder_point=10, stock_level=StockLevel.LOW.value)
        assert ReorderService.should_reorder(item) is expected

    def test_out_of_stock_items_are_not_suggested(self):
        item = InventoryItem(sku="A", quantity=0, reorder_point=10, stock_level=StockLevel.OUT_OF_STOCK.value)
        assert ReorderService.should_reorder(item) is False

    def test_missing_reorder_point_counts_as_zero(self):
        item = InventoryItem(sku="A", quantity=0, reorder_point=None, stock_level=StockLevel.LOW.value)
        assert ReorderService.should_reorder(item) is True

    @pytest.mark.parametrize("quantity,reorder_point,priority", [
        (0, 10, "URGENT"),
        (4, 10, "HIGH"),
        (5, 10, "MEDIUM"),
        (10, 10, "MEDIUM"),
    ])
    def test_priority(self, quantity, reorder_point, priority):
        assert ReorderService.assign_priority(quantity, reorder_point) == priority


class TestReorderPoint:

    def test_uses_item_lead_time(self, service, company, add_item, add_history):
        add_item("SKU-A", lead_time_days=14)
        add_history("SKU-A", [90, 110])

        result = service.calculate_reorder_point(company.id, "SKU-A")
        assert result.lead_time_days == 14

    def test_falls_back_to_default_lead_time(self, service, company, add_item, add_history):
        add_item("SKU-A")
        add_history("SKU-A", [90, 110])

        result = service.calculate_reorder_point(company.id, "SKU-A")
        assert result.lead_time_days == 7
        assert result.reorder_point == 76

    def test_unknown_item(self, service, company):
        with pytest.raises(NotFoundError):
            service.calculate_reorder_point(company.id, "MISSING")


class TestSuggestionGeneration:

    def test_generates_for_items_at_or_below_reorder_point(self, service, company, add_item, add_history):
        add_item("SKU-A", quantity=0, reorder_point=10)
        add_item("SKU-B", quantity=50, reorder_point=10)
        add_item("SKU-C", quantity=5, reorder_point=10)
        add_history("SKU-A", [100] * 6)

        report = service.generate_suggestions(company.id)

        assert report.success_count == 2
        assert report.failure_count == 0
        assert [s["sku"] for s in report.suggestions] == ["SKU-A", "SKU-C"]

        suggestion = report.suggestions[0]
        assert suggestion["reason"] == "below_reorder_point"
        assert suggestion["sku"] == "SKU-A"
        assert suggestion["priority"] == "URGENT"
        assert suggestion["status"] == "pending"
        # no reorder_qty: max(2 * safety stock, reorder point - quantity)
        assert suggestion["suggestedQty"] == 24

    def test_item_without_history_tops_up_to_reorder_point(self, service, company, add_item):
        add_item("SKU-C", quantity=4, reorder_point=10)

        report = service.generate_suggestions(company.id)

        assert report.failure_count == 0
        suggestion = report.suggestions[0]
        assert suggestion["suggestedQty"] == 6
        assert suggestion["priority"] == "HIGH"
        assert suggestion["reason"] == "below_reorder_point_no_history"

    def test_empty_item_with_reorder_quantity_needs_no_history(self, service, company, add_item):
        add_item("SKU-Z", quantity=0, reorder_point=10, reorder_qty=40)

        report = service.generate_suggestions(company.id)

        assert report.failures == []
        assert len(report.suggestions) == 1
        assert report.suggestions[0]["priority"] == "URGENT"
        assert report.suggestions[0]["suggestedQty"] == 40
        assert report.suggestions[0]["reason"] == "below_reorder_point"

    def test_configured_reorder_quantity_wins(self, service, company, add_item, add_history):
        add_item("SKU-A", quantity=3, reorder_point=10, reorder_qty=40)
        add_history("SKU-A", [100] * 6)

        report = service.generate_suggestions(company.id)
        assert report.suggestions[0]["suggestedQty"] == 40
        assert report.suggestions[0]["priority"] == "HIGH"

    def test_duplicates_created_by_default(self, service, company, add_item, add_history):
        add_item("SKU-A", quantity=0, reorder_point=10)
        add_history("SKU-A", [100] * 6)

        service.generate_suggestions(company.id)
        service.generate_suggestions(company.id)
        assert len(service.list_suggestions(company.id)) == 2

    def test_pending_duplicates_can_be_skipped(self, db_session, company, add_item, add_history):
        add_item("SKU-A", quantity=0, reorder_point=10)
        add_history("SKU-A", [100] * 6)
        service = ReorderService(db_session, Settings(REORDER_SKIP_DUPLICATE_PENDING=True))

        service.generate_suggestions(company.id)
        report = service.generate_suggestions(company.id)
        assert report.skipped == ["SKU-A"]
        assert report.to_dict()["skippedPending"] == ["SKU-A"]
        assert len(service.list_suggestions(company.id)) == 1


class TestSuggestionLifecycle:

    @pytest.fixture
    def pending(self, service, company, supplier, add_item, add_history):
        add_item("SKU-A", quantity=0, reorder_point=10, reorder_qty=40, unit_cost=2.5, supplier_id=supplier.id)
        add_history("SKU-A", [100] * 6)
        return service.generate_suggestions(company.id).suggestions[0]

    def test_list_orders_by_priority(self, service, company, add_item, add_history):
        add_item("SKU-M", quantity=8, reorder_point=10)
        add_item("SKU-U", quantity=0, reorder_point=10)
        add_history("SKU-M", [10, 10])
        add_history("SKU-U", [10, 10])

        service.generate_suggestions(company.id)
        assert [s["priority"] for s in service.list_suggestions(company.id)] == ["URGENT", "MEDIUM"]

    def test_list_rejects_unknown_status(self, service, company):
        with pytest.raises(ValidationError):
            service.list_suggestions(company.id, "archived")

    def test_approve_creates_draft_purchase_order(self, service, db_session, company, admin_user, pending):
        result = service.approve(company.id, pending["id"], admin_user.id)

        assert result["totalAmount"] == 100.0
        assert result["poNumber"].startswith("PO-")

        order = db_session.query(PurchaseOrder).filter(PurchaseOrder.id == result["purchaseOrderId"]).one()
        assert order.status == "DRAFT"
        assert [(line.sku, line.quantity) for line in order.lines] == [("SKU-A", 40)]

        approved = service.list_suggestions(company.id, "approved")
        assert approved[0]["purchaseOrderId"] == order.id
        assert service.list_suggestions(company.id) == []

    def test_approve_twice_fails(self, service, company, admin_user, pending):
        service.approve(company.id, pending["id"], admin_user.id)
        with pytest.raises(InvalidStateError):
            service.approve(company.id, pending["id"], admin_user.id)

    def test_approve_requires_supplier(self, service, company, admin_user, add_item, add_history):
        add_item("SKU-A", quantity=0, reorder_point=10)
        add_history("SKU-A", [100] * 6)
        suggestion = service.generate_suggestions(company.id).suggestions[0]

        with pytest.raises(ValidationError) as exc_info:
            service.approve(company.id, suggestion["id"], admin_user.id)
        assert exc_info.value.code == "NO_SUPPLIER"

    def test_approve_rejects_supplier_of_another_company(self, service, db_session, company, other_company,
                                                         admin_user, add_item):
        foreign = Supplier(company_id=other_company.id, name="Globex Parts")
        db_session.add(foreign)
        db_session.commit()
        add_item("SKU-A", quantity=0, reorder_point=10, reorder_qty=40, supplier_id=foreign.id)
        suggestion = service.generate_suggestions(company.id).suggestions[0]

        with pytest.raises(ValidationError) as exc_info:
            service.approve(company.id, suggestion["id"], admin_user.id)
        assert exc_info.value.code == "NO_SUPPLIER"
        assert db_session.query(PurchaseOrder).count() == 0

    def test_reject(self, service, company, admin_user, pending):
        result = service.reject(company.id, pending["id"], admin_user.id)
        assert result["status"] == "rejected"
        with pytest.raises(InvalidStateError):
            service.reject(company.id, pending["id"], admin_user.id)

    def test_other_company_cannot_see_suggestion(self, service, other_company, admin_user, pending):
        with pytest.raises(NotFoundError):
            service.approve(other_company.id, pending["id"], admin_user.id)
