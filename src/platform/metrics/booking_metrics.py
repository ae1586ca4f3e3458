from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Seat Booking Core Metrics Collector

    Tracks booking transaction outcomes and seat inventory, scraped from /metrics
    """

    def __init__(self):
        # ========== Booking Transaction Metrics ==========
        self.booking_requests = Counter(
            'seat_booking_requests_total',
            'Total seat booking attempts',
            ['result'],  # result: success/unavailable/invalid/store_error
        )

        self.booking_duration = Histogram(
            'seat_booking_duration_seconds',
            'Booking transaction duration',
            ['result'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        self.seats_per_booking = Histogram(
            'seat_booking_seats_per_booking',
            'Seats requested per booking',
            buckets=[1, 2, 3, 4, 5, 6, 7],
        )

        self.booking_cancellations = Counter(
            'seat_booking_cancellations_total',
            'Total booking cancellations',
            ['result'],  # result: success/not_found/already_cancelled
        )

        self.seat_resets = Counter('seat_booking_resets_total', 'Total full seat resets')

        # ========== Inventory Metrics ==========
        self.seats_available = Gauge('seat_booking_seats_available', 'Seats currently available')

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float, seat_count: int) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)
        self.seats_per_booking.observe(seat_count)

    def record_cancellation(self, *, result: str) -> None:
        self.booking_cancellations.labels(result=result).inc()

    def record_reset(self) -> None:
        self.seat_resets.inc()

    def update_seats_available(self, *, count: int) -> None:
        self.seats_available.set(count)


# Global metrics instance
metrics = BookingMetrics()
