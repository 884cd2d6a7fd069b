from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    PURCHASED = 'purchased'
    IN_TRANSIT = 'inTransit'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    DISPUTED = 'disputed'
    REFUNDED = 'refunded'


# Statuses in which the order carries an assigned rider
RIDER_ASSIGNED_STATUSES = frozenset(
    {
        OrderStatus.ACCEPTED,
        OrderStatus.PURCHASED,
        OrderStatus.IN_TRANSIT,
        OrderStatus.DELIVERED,
    }
)
