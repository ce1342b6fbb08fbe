"""Background workers for the rental document service"""
from .breakdown_auditor import BreakdownAuditWorker

__all__ = ["BreakdownAuditWorker"]
