from prometheus_client import Counter, Histogram


class GiftingMetrics:
    """
    Gift Wave core metrics collector

    Tracks the contended writes (claims, order transitions, OTP checks)
    and how often the store failed to answer.
    """

    def __init__(self):
        # ========== Order Metrics ==========
        self.orders_created = Counter(
            'gift_orders_created_total',
            'Gift orders placed by senders',
            ['receiver_city'],
        )

        self.order_claims = Counter(
            'gift_order_claims_total',
            'Claim attempts by outcome',
            ['result'],  # result: won/already_claimed/invalid_state/not_eligible
        )

        self.order_claim_duration = Histogram(
            'gift_order_claim_duration_seconds',
            'Claim processing time, including the conditional write',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.order_transitions = Counter(
            'gift_order_transitions_total',
            'Order state writes by transition and outcome',
            ['transition', 'result'],  # result: saved/conflict/refused
        )

        # ========== OTP Metrics ==========
        self.otp_verifications = Counter(
            'otp_verifications_total',
            'OTP verification attempts by resulting status',
            ['outcome'],  # outcome: verified/invalid_code/expired/failed/not_pending
        )

        # ========== Safety Metrics ==========
        self.security_events = Counter(
            'security_events_total',
            'Security audit events by action and severity',
            ['action', 'severity'],
        )

        # ========== Store Health Metrics ==========
        self.store_unavailable = Counter(
            'store_unavailable_total',
            'Store calls that timed out or lost the connection',
            ['error_type'],
        )

    # ========== Helper Methods ==========

    def record_order_created(self, *, receiver_city: str):
        self.orders_created.labels(receiver_city=receiver_city).inc()

    def record_claim(self, *, result: str, duration: float):
        self.order_claims.labels(result=result).inc()
        self.order_claim_duration.observe(duration)

    def record_order_transition(self, *, transition: str, result: str):
        self.order_transitions.labels(transition=transition, result=result).inc()

    def record_otp_verification(self, *, outcome: str):
        self.otp_verifications.labels(outcome=outcome).inc()

    def record_security_event(self, *, action: str, severity: str):
        self.security_events.labels(action=action, severity=severity).inc()

    def record_store_unavailable(self, *, error_type: str):
        self.store_unavailable.labels(error_type=error_type).inc()


# Global metrics instance
metrics = GiftingMetrics()
