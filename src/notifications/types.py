"""Notification kinds and per-recipient delivery outcomes."""

from enum import Enum


class NotificationType(Enum):
    NEW_ORDER_ALERT = "New_Order_Alert"
    ORDER_CONFIRMATION = "Order_Confirmation"


class DeliveryOutcome(Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"
