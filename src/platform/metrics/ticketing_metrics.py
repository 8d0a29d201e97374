from prometheus_client import Counter, Histogram


class TicketingMetrics:
    """
    Ticketing System Core Metrics Collector

    Tracks the booking transaction, door check-in and the event lifecycle jobs
    """

    def __init__(self):
        # ========== Booking Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking requests',
            ['result'],  # result: success/conflict/rejected/unavailable
        )

        self.seats_booked = Counter(
            'seats_booked_total',
            'Seats committed to the ledger',
            ['event_id'],
        )

        self.booking_duration = Histogram(
            'booking_duration_seconds',
            'Booking transaction duration (ledger + income, excludes email)',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Validation Metrics ==========
        self.ticket_check_ins = Counter(
            'ticket_check_ins_total',
            'Check-in attempts',
            ['result'],  # result: checked_in/already_checked_in/forbidden
        )

        self.ticket_resolutions = Counter(
            'ticket_resolutions_total',
            'Scanned code resolutions',
            ['kind', 'legacy'],
        )

        # ========== Staff / Lifecycle Metrics ==========
        self.staff_decisions = Counter(
            'staff_decisions_total',
            'Staff application decisions applied',
            ['status'],
        )

        self.expired_events_swept = Counter(
            'expired_events_swept_total',
            'Events soft-deleted by the expiry sweep',
        )

        self.notification_failures = Counter(
            'notification_failures_total',
            'Outbound notifications that could not be delivered',
            ['kind'],  # kind: ticket/staff_application
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float, event_id: int, seats: int = 0):
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)
        if seats:
            self.seats_booked.labels(event_id=event_id).inc(seats)

    def record_check_in(self, *, result: str):
        self.ticket_check_ins.labels(result=result).inc()

    def record_resolution(self, *, kind: str, legacy: bool):
        self.ticket_resolutions.labels(kind=kind, legacy=str(legacy).lower()).inc()

    def record_staff_decision(self, *, status: str):
        self.staff_decisions.labels(status=status).inc()

    def record_sweep(self, *, swept: int):
        if swept:
            self.expired_events_swept.inc(swept)

    def record_notification_failure(self, *, kind: str):
        self.notification_failures.labels(kind=kind).inc()


# Global metrics instance
metrics = TicketingMetrics()
