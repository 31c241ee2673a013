from prometheus_client import Counter


class LibraryMetrics:
    """
    Library Service Core Metrics Collector

    Tracks admission outcomes for reservations and borrow requests and the
    decisions administrators take on them.
    """

    def __init__(self):
        # ========== Reservation Metrics ==========
        self.reservation_admissions = Counter(
            'library_reservation_admissions_total',
            'Reservation submissions by admission result',
            ['result'],  # result: allowed/rejected
        )

        self.reservation_decisions = Counter(
            'library_reservation_decisions_total',
            'Reservation decisions by target status',
            ['status'],
        )

        # ========== Borrow Request Metrics ==========
        self.borrow_submissions = Counter(
            'library_borrow_submissions_total',
            'Borrow request submissions by result',
            ['result'],  # result: accepted/rejected
        )

        self.borrow_decisions = Counter(
            'library_borrow_decisions_total',
            'Borrow request decisions by target status',
            ['status'],
        )

    # ========== Helper Methods ==========

    def record_reservation_admission(self, *, result: str):
        self.reservation_admissions.labels(result=result).inc()

    def record_reservation_decision(self, *, status: str):
        self.reservation_decisions.labels(status=status).inc()

    def record_borrow_submission(self, *, result: str):
        self.borrow_submissions.labels(result=result).inc()

    def record_borrow_decision(self, *, status: str):
        self.borrow_decisions.labels(status=status).inc()


# Global metrics instance
metrics = LibraryMetrics()
