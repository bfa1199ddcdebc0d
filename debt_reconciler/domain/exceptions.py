"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataSourceError(DomainException):
    """One of the collection endpoints failed or returned unusable data"""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class SnapshotTimeoutError(DomainException):
    """Not all collections arrived within the snapshot timeout"""

    def __init__(self, timeout: float, pending: list[str]):
        super().__init__(f"Timed out after {timeout}s waiting for: {', '.join(sorted(pending))}")
        self.timeout = timeout
        self.pending = pending


class UnrecognizedCadenceError(DomainException):
    """Installment frequency label is not one we know how to schedule"""

    def __init__(self, label: str):
        super().__init__(f"Unrecognized installment frequency: {label!r}")
        self.label = label


class OrphanedRecordsError(DomainException):
    """Plans or payments were left without an owner after the join"""

    def __init__(self, result):
        super().__init__(
            f"Found {len(result.orphaned_plans)} orphaned payment plan(s) "
            f"and {len(result.orphaned_payments)} orphaned payment(s)"
        )
        self.result = result
