"""Document API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.deps import Context
from src.core.errors import NotFoundError
from src.core.logging import get_logger
from src.db.enums import AuditAction
from src.schemas import (
    DocumentCreate,
    DocumentResponse,
    DocumentSearch,
    DocumentUpdate,
    MutationResponse,
    PaginationParams,
)
from src.services import audit
from src.store import documents as store

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[DocumentResponse],
    summary="List documents",
    description="Active documents, newest first.",
)
async def list_documents(
    params: Annotated[PaginationParams, Query()],
    ctx: Context,
) -> list[DocumentResponse]:
    async with ctx.session() as db:
        documents = await store.list_documents(db, params.limit, params.offset)
    return [DocumentResponse.model_validate(d) for d in documents]


@router.get(
    "/search",
    response_model=list[DocumentResponse],
    summary="Search documents",
    description="Case-insensitive substring match on the title of active documents.",
)
async def search_documents(
    params: Annotated[DocumentSearch, Query()],
    ctx: Context,
) -> list[DocumentResponse]:
    async with ctx.session() as db:
        documents = await store.search_documents(db, params.query, params.limit)
    return [DocumentResponse.model_validate(d) for d in documents]


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    summary="Get document by ID",
)
async def get_document(document_id: str, ctx: Context) -> DocumentResponse:
    async with ctx.session() as db:
        document = await store.get_document_by_id(db, document_id)
    if document is None:
        raise NotFoundError("Document not found")
    return DocumentResponse.model_validate(document)


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a document",
    description="Requires the editor role.",
)
async def create_document(payload: DocumentCreate, ctx: Context) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        document = await store.create_document(db, payload)

    await audit.record(ctx, "document", document.id, AuditAction.CREATE, payload)
    logger.info("Document created", document_id=document.id, user_id=user.id)

    return MutationResponse(id=document.id, message="Document created")


@router.patch(
    "/{document_id}",
    response_model=MutationResponse,
    summary="Update a document",
    description="Applies only the supplied fields. Requires the editor role.",
)
async def update_document(document_id: str, payload: DocumentUpdate, ctx: Context) -> MutationResponse:
    user = ctx.require_role()
    async with ctx.session() as db:
        updated = await store.update_document(db, document_id, payload)

    await audit.record(ctx, "document", document_id, AuditAction.UPDATE, payload)
    logger.info("Document updated", document_id=document_id, rows=updated, user_id=user.id)

    return MutationResponse(id=document_id, message="Document updated")
