"""Rental document use cases"""
from .get_charge_breakdown import GetChargeBreakdown
from .create_invoice import CreateInvoice
from .issue_invoice import IssueInvoice
from .generate_invoice_document import GenerateInvoiceDocument
from .create_agreement import CreateAgreement
from .sign_agreement import SignAgreement
from .confirm_agreement import ConfirmAgreement
from .void_agreement import VoidAgreement
from .generate_agreement_document import GenerateAgreementDocument
from .audit_booking_breakdowns import AuditBookingBreakdowns
from .dtos import (
    LineItemDTO,
    TaxDTO,
    ChargeBreakdownResponseDTO,
    CreateInvoiceCommandDTO,
    InvoiceResponseDTO,
    GeneratedDocumentDTO,
    CreateAgreementCommandDTO,
    SignAgreementCommandDTO,
    ConfirmAgreementCommandDTO,
    AgreementResponseDTO,
    BreakdownIssueDTO,
    BreakdownAuditResultDTO,
)

__all__ = [
    "GetChargeBreakdown",
    "CreateInvoice",
    "IssueInvoice",
    "GenerateInvoiceDocument",
    "CreateAgreement",
    "SignAgreement",
    "ConfirmAgreement",
    "VoidAgreement",
    "GenerateAgreementDocument",
    "AuditBookingBreakdowns",
    "LineItemDTO",
    "TaxDTO",
    "ChargeBreakdownResponseDTO",
    "CreateInvoiceCommandDTO",
    "InvoiceResponseDTO",
    "GeneratedDocumentDTO",
    "CreateAgreementCommandDTO",
    "SignAgreementCommandDTO",
    "ConfirmAgreementCommandDTO",
    "AgreementResponseDTO",
    "BreakdownIssueDTO",
    "BreakdownAuditResultDTO",
]
