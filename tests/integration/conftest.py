import itertools
import pytest
import pytest_asyncio
from datetime import date
from typing import List
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers table metadata
from libs.result import Result, Return, Error
from src.adapter.services.document_renderer import JinjaDocumentRenderer, PROTOCOL_PREFIX
from src.app.services.pdf_converter import PdfConverter
from src.depends import get_session, get_pdf_converter, get_document_renderer


class FakePdfConverter(PdfConverter):
    """Records every markup it receives and answers with fixed bytes"""

    def __init__(self):
        self.content = b"%PDF-1.4\nfake invoice"
        self.markups: List[str] = []
        self.fail = False

    async def convert(self, markup: str) -> Result[bytes]:
        self.markups.append(markup)
        if self.fail:
            return Return.err(
                Error(
                    code="PDF_CONVERSION_FAILED",
                    message="PDF conversion service failed",
                    reason="HTTP 401",
                )
            )
        return Return.ok(self.content)


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create test database engine on a throwaway SQLite file"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'nfe_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def pdf_converter():
    return FakePdfConverter()


@pytest.fixture
def document_renderer():
    """Renderer with a fixed emission date and a new protocol on every render"""
    counter = itertools.count(1)
    return JinjaDocumentRenderer(
        today=lambda: date(2024, 5, 1),
        protocol_generator=lambda: f"{PROTOCOL_PREFIX}{next(counter):013d}",
    )


@pytest.fixture
def app(db_session, pdf_converter, document_renderer):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_pdf_converter] = lambda: pdf_converter
    app.dependency_overrides[get_document_renderer] = lambda: document_renderer
    return app


@pytest_asyncio.fixture
async def client(app):
    """Create test client with database and collaborator overrides"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
