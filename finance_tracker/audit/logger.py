"""
Audit Logger

Every state transition of the ledger is logged. The audit logger:
- Always writes a structured local log line
- Persists the event to the audit repository when one is configured
- Does not fail the caller if persisting the event fails
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage import AuditRepository, StorageError


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The audit repository (for history), if configured
    """

    def __init__(self, repository: Optional[AuditRepository] = None):
        """
        Initialize audit logger.

        Args:
            repository: Where events are persisted.
                        If None, only logs locally.
        """
        self._repository = repository
        self._logger = structlog.get_logger("finance_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was persisted (or no repository is configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._repository is None:
            return True

        try:
            return self._repository.append_event(event)
        except StorageError as e:
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def log_transaction_created(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_created(
            transaction_id=transaction.id,
            transaction_type=transaction.type.value,
            amount=str(transaction.amount),
            installments=transaction.installments.total,
            correlation_id=correlation_id,
        ))

    def log_transaction_updated(
        self,
        before: Transaction,
        after: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a replacement, listing the fields whose value changed."""
        ignored = {"updated_at"}
        old = before.model_dump()
        new = after.model_dump()
        changed = sorted(k for k in new if k not in ignored and old.get(k) != new[k])

        self.log(AuditEventBuilder.transaction_updated(
            transaction_id=after.id,
            changed_fields=changed,
            correlation_id=correlation_id,
        ))

    def log_transaction_deleted(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    def log_installment_paid(
        self,
        transaction: Transaction,
        paid_number: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.installment_paid(
            transaction_id=transaction.id,
            paid_number=paid_number,
            total=transaction.installments.total,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        operation: str,
        error_message: str,
        entity_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.save_failed(
            operation=operation,
            error_message=error_message,
            entity_id=entity_id,
            correlation_id=correlation_id,
        ))

    def log_category_added(self, category_id: str, label: str, category_type: str) -> None:
        self.log(AuditEventBuilder.category_added(category_id, label, category_type))

    def log_category_removed(self, category_id: str) -> None:
        self.log(AuditEventBuilder.category_removed(category_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action and pass it through every
    operation that action triggers.
    """
    return uuid4()
