from .unit_of_work import UnitOfWork
from .document_renderer import DocumentRenderer
from .pdf_converter import PdfConverter
from .calendar_service import CalendarService, CalendarAuthError

__all__ = [
    "UnitOfWork",
    "DocumentRenderer",
    "PdfConverter",
    "CalendarService",
    "CalendarAuthError",
]
