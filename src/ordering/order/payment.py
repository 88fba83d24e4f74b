"""Payment proof review: commands and handler.

Staff reject a proof (Processing → Payment Rejected); the owner attaches a
new one (Payment Rejected → Processing). The blob itself is stored before the
command is issued; the order only keeps its reference.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class RejectPayment:
    order_id = Identifier(required=True)
    reason = String(max_length=500)


@ordering.command(part_of="Order")
class SubmitPaymentProof:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    proof_ref = String(required=True, max_length=255)
    content_type = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PaymentProofHandler:
    @handle(RejectPayment)
    def reject_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.reject_payment(reason=command.reason)
        repo.add(order)

    @handle(SubmitPaymentProof)
    def submit_payment_proof(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.attach_proof(
            requester_id=command.requester_id,
            proof_ref=command.proof_ref,
            content_type=command.content_type,
        )
        repo.add(order)
