"""Data-access functions for documents."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.enums import DocumentStatus
from src.db.models import Document
from src.schemas import DocumentCreate, DocumentUpdate
from src.schemas.common import DEFAULT_LIST_LIMIT, DEFAULT_SEARCH_LIMIT
from src.store.base import fetch_all, fetch_by_id, insert_row, storage_operation, update_by_id


@storage_operation("create document")
async def create_document(db: AsyncSession, data: DocumentCreate) -> Document:
    return await insert_row(db, Document(**data.model_dump()))


@storage_operation("get document")
async def get_document_by_id(db: AsyncSession, document_id: str) -> Document | None:
    return await fetch_by_id(db, Document, document_id)


@storage_operation("list documents")
async def list_documents(
    db: AsyncSession,
    limit: int = DEFAULT_LIST_LIMIT,
    offset: int = 0,
) -> list[Document]:
    """Active documents, newest first."""
    query = (
        select(Document)
        .where(Document.status == DocumentStatus.ACTIVE)
        .order_by(Document.created_at.desc(), Document.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return await fetch_all(db, query)


@storage_operation("search documents")
async def search_documents(
    db: AsyncSession,
    query: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[Document]:
    """Active documents whose title contains ``query`` (case-insensitive)."""
    stmt = (
        select(Document)
        .where(
            Document.status == DocumentStatus.ACTIVE,
            Document.title.icontains(query, autoescape=True),
        )
        .order_by(Document.created_at.desc(), Document.id.desc())
        .limit(limit)
    )
    return await fetch_all(db, stmt)


@storage_operation("update document")
async def update_document(db: AsyncSession, document_id: str, data: DocumentUpdate) -> int:
    return await update_by_id(db, Document, document_id, data.changes())
