import json
import logging
from typing import Any, Callable, Dict, List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pymongo.collection import Collection

from campus_housing.config.settings import settings
from campus_housing.database.mongo_client import get_collection
from campus_housing.modules.documents.service import DocumentService
from campus_housing.modules.documents.validators import VALIDATORS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

ALLOWED_METHODS = ["GET", "POST"]


def get_collection_getter() -> Callable[[str], Collection]:
    return get_collection


def document_service_for(resource: str) -> Callable[..., DocumentService]:
    """Build a dependency that yields the service bound to one collection"""
    def get_document_service(
        collection_getter: Callable[[str], Collection] = Depends(get_collection_getter)
    ) -> DocumentService:
        return DocumentService(collection_getter(resource), settings.document_list_limit)

    get_document_service.__name__ = f"get_{resource}_service"
    return get_document_service


async def read_json_body(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or not JSON"""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


async def method_not_allowed():
    return Response(
        content="Method Not Allowed",
        status_code=405,
        headers={"Allow": ", ".join(ALLOWED_METHODS)},
        media_type="text/plain",
    )


def _register(resource: str):
    get_service = document_service_for(resource)
    validate = VALIDATORS[resource]

    async def list_documents(
        service: DocumentService = Depends(get_service)
    ) -> List[Dict[str, Any]]:
        return service.list_documents()

    async def create_document(
        request: Request,
        service: DocumentService = Depends(get_service)
    ):
        doc, errors = validate(await read_json_body(request))
        if errors:
            logger.info(f"Rejected {resource} document: {errors}")
            return JSONResponse(status_code=400, content={"errors": errors})
        inserted_id = service.insert_document(doc)
        return JSONResponse(status_code=201, content={"_id": inserted_id})

    list_documents.__doc__ = f"List up to {settings.document_list_limit} {resource} documents"
    create_document.__doc__ = f"Validate and insert a {resource} document"

    router.add_api_route(
        f"/{resource}", list_documents, methods=["GET"], name=f"list_{resource}"
    )
    router.add_api_route(
        f"/{resource}", create_document, methods=["POST"], status_code=201, name=f"create_{resource}"
    )
    router.add_api_route(
        f"/{resource}", method_not_allowed, methods=["PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        include_in_schema=False, name=f"{resource}_method_not_allowed"
    )


for _resource in VALIDATORS:
    _register(_resource)
