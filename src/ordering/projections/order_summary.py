"""Order summary — list, pending-queue and statistics view of orders."""

from protean.core.projector import on
from protean.fields import Date, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderAccepted, OrderCreated, OrderDeleted, OrderStatusUpdated
from ordering.order.order import PRIORITY_RANK, Order


@ordering.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True)
    branch_name = String(required=True)
    branch_location = String()
    status = String(required=True)
    priority = String(required=True)
    priority_rank = Integer(required=True)
    source = String()
    total_quantity = Integer(default=0)
    expected_delivery_date = Date()
    accepted_by = String()
    created_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderCreated)
    def on_order_created(self, event):
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                order_number=event.order_number,
                branch_name=event.branch_name,
                branch_location=event.branch_location,
                status=event.status,
                priority=event.priority,
                priority_rank=PRIORITY_RANK[event.priority],
                source=event.source,
                total_quantity=event.total_quantity,
                expected_delivery_date=event.expected_delivery_date,
                created_at=event.created_at,
                updated_at=event.created_at,
            )
        )

    @on(OrderAccepted)
    def on_order_accepted(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = "Accepted"
        summary.accepted_by = event.accepted_by
        summary.updated_at = event.accepted_date
        repo.add(summary)

    @on(OrderStatusUpdated)
    def on_order_status_updated(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = event.new_status
        summary.updated_at = event.updated_at
        repo.add(summary)

    @on(OrderDeleted)
    def on_order_deleted(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get_or_none(event.order_id)
        if summary is not None:
            repo._dao.delete(summary)
