"""Download filenames for rendered documents"""


def record_code(booking_id: str) -> str:
    """Short printed reference: first eight characters, upper case"""
    return (booking_id or "")[:8].upper()


def invoice_filename(invoice_number: str) -> str:
    return f"Invoice-{invoice_number}.pdf"


def agreement_filename(prefix: str, booking_id: str) -> str:
    """{prefix}-{first 8 chars of booking id, upper case}.pdf"""
    return f"{prefix}-{record_code(booking_id)}.pdf"
