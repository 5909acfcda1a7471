from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_converter import HttpPdfConverter
from .document_renderer import JinjaDocumentRenderer
from .calendar_service import GoogleCalendarService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "HttpPdfConverter",
    "JinjaDocumentRenderer",
    "GoogleCalendarService",
]
