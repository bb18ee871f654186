"""
Symbolic constants of the Wordy API.

The remote service owns the meaning of these values (payment flow, document
lifecycle, field kinds); the client only needs to send and recognise them.
Each category is a closed ``str`` enum so members compare equal to the raw
strings found in decoded responses:

    >>> DocumentStatus.COMPLETED == "document_completed"
    True
"""

from __future__ import annotations

from enum import Enum

# =============================================================================
# ENDPOINTS
# =============================================================================

# Production endpoint of Wordy API v.2.
API_ENDPOINT = "http://www.wordy.com/api/version/2/"

# Staging endpoint. Subject to change by Wordy.
STAGING_API_ENDPOINT = "http://stage-wordyhq.flush.pil.dk/api/version/2/"

# Page where a customer pays for an order; the order id is appended.
PAYMENT_ENDPOINT = "http://www.wordy.com/order/new/pay/order_id/"


# =============================================================================
# ENUMERATIONS
# =============================================================================


class PaymentStatus(str, Enum):
    """
    Payment state of an order.

    Attributes:
        NEW: Payment was created, nobody has tried to pay yet.
        PENDING: Waiting for payment approval, usually while the customer
                 fills in the payment form.
        COMPLETED: Payment received; the documents are placed for editing.
        REFUND: Payment was refunded, usually because every document in the
                order was cancelled.
    """

    NEW = "payment_new"
    PENDING = "payment_pending"
    COMPLETED = "payment_completed"
    REFUND = "payment_refund"


class DocumentStatus(str, Enum):
    """
    Lifecycle state of a single document.

    Attributes:
        NEW: Created; does not change until the order is paid.
        OPEN: Paid and visible to editors, waiting to be accepted.
        PENDING: An editor accepted it and is working on it. The editor may
                 still drop it, returning it to OPEN.
        COMPLETED: Editing finished and sent back for approval. Only in this
                   state can the edited content be downloaded.
        RECLAIMED: Sent back to the editor for changes. Unlike PENDING the
                   editor cannot drop it.
        CLOSED: Reviewed by the customer, or closed automatically after it
                was not reclaimed for a number of days.
        CANCELED: Cancelled by the customer before an editor accepted it.
        KILLED: Removed by Wordy staff.
    """

    NEW = "document_new"
    OPEN = "document_open"
    PENDING = "document_pending"
    COMPLETED = "document_completed"
    RECLAIMED = "document_reclaimed"
    CLOSED = "document_closed"
    CANCELED = "document_canceled"
    KILLED = "document_killed"


class DocumentType(str, Enum):
    """How a document's content is stored, and so how it downloads."""

    TEXT = "text"
    FILE = "file"


class FieldType(str, Enum):
    """Kind of a field submitted with an order."""

    SHORTTEXT = "shorttext"
    LONGTEXT = "longtext"
    HTML = "html"
