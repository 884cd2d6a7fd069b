"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.gifting.app.command import (
    attach_gift_image_use_case,
    attach_reaction_video_use_case,
    block_user_use_case,
    cancel_order_use_case,
    claim_order_use_case,
    confirm_actual_price_use_case,
    confirm_payment_use_case,
    create_gift_order_use_case,
    create_safety_alert_use_case,
    generate_otp_use_case,
    mark_order_delivered_use_case,
    rate_order_use_case,
    recompute_rider_reputation_use_case,
    register_rider_use_case,
    resend_otp_use_case,
    resolve_safety_alert_use_case,
    review_report_use_case,
    review_rider_use_case,
    sign_in_use_case,
    sign_up_sender_use_case,
    submit_report_use_case,
    update_profile_use_case,
    verify_otp_use_case,
)
from src.service.gifting.app.query import (
    get_order_use_case,
    get_session_user_use_case,
    list_available_orders_use_case,
    list_my_orders_use_case,
    list_reports_use_case,
    list_safety_alerts_use_case,
    list_security_events_use_case,
    quote_delivery_fee_use_case,
)
from src.service.gifting.driving_adapter.http_controller import user_controller


WIRE_MODULES: list[ModuleType] = [
    # Orders
    create_gift_order_use_case,
    claim_order_use_case,
    confirm_actual_price_use_case,
    confirm_payment_use_case,
    mark_order_delivered_use_case,
    rate_order_use_case,
    cancel_order_use_case,
    attach_gift_image_use_case,
    attach_reaction_video_use_case,
    get_order_use_case,
    list_my_orders_use_case,
    list_available_orders_use_case,
    quote_delivery_fee_use_case,
    # Accounts
    sign_up_sender_use_case,
    register_rider_use_case,
    sign_in_use_case,
    get_session_user_use_case,
    review_rider_use_case,
    block_user_use_case,
    recompute_rider_reputation_use_case,
    update_profile_use_case,
    # Safety
    submit_report_use_case,
    review_report_use_case,
    list_reports_use_case,
    create_safety_alert_use_case,
    resolve_safety_alert_use_case,
    list_safety_alerts_use_case,
    list_security_events_use_case,
    # OTP
    generate_otp_use_case,
    resend_otp_use_case,
    verify_otp_use_case,
    user_controller,
]
