"""Services that talk to collaborators outside the pricing engine."""

from .order_submission import OrderSubmissionError, build_order_payload, submit_order

__all__ = ["OrderSubmissionError", "build_order_payload", "submit_order"]
