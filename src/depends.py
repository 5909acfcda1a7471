from functools import lru_cache
from typing import Optional
from fastapi import Header
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.calendar_service import GoogleCalendarService
from src.adapter.services.document_renderer import JinjaDocumentRenderer
from src.adapter.services.pdf_converter import HttpPdfConverter
from src.app.services.calendar_service import CalendarService
from src.app.services.document_renderer import DocumentRenderer
from src.app.services.pdf_converter import PdfConverter
from src.app.use_cases.invoicing.totals import TotalPolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_pdf_converter() -> PdfConverter:
    return HttpPdfConverter(
        url=ApplicationConfig.PDF_CONVERSION_URL,
        api_key=ApplicationConfig.PDF_CONVERSION_API_KEY,
        timeout=ApplicationConfig.PDF_CONVERSION_TIMEOUT,
    )


@lru_cache()
def get_document_renderer() -> DocumentRenderer:
    return JinjaDocumentRenderer(
        issuer_name=ApplicationConfig.ISSUER_NAME,
        issuer_address=ApplicationConfig.ISSUER_ADDRESS,
    )


def get_total_policy() -> TotalPolicy:
    return TotalPolicy(ApplicationConfig.TOTAL_POLICY)


def get_calendar_service() -> CalendarService:
    return GoogleCalendarService(
        base_url=ApplicationConfig.CALENDAR_API_URL,
        calendar_id=ApplicationConfig.CALENDAR_ID,
        timeout=ApplicationConfig.CALENDAR_TIMEOUT,
    )


def get_access_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Bearer token from the Authorization header, if any"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
