"""Dataset router.

GET     /api/datasets              ->  index
POST    /api/datasets              ->  create
GET     /api/datasets/{dataset_id} ->  show
PUT     /api/datasets/{dataset_id} ->  upsert
PATCH   /api/datasets/{dataset_id} ->  patch
DELETE  /api/datasets/{dataset_id} ->  destroy
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response, status

from api.dependencies import get_dataset_store
from api.responders import (
    ResultChain,
    handle_entity_not_found,
    handle_error,
    patch_updates,
    remove_entity,
    respond_with_result,
    strip_id,
)
from datastore.model_store import ModelStore, by_id
from datastore.models import Dataset
from settings import settings

router = APIRouter(prefix=f"{settings.api_prefix}/datasets", tags=["datasets"])


@router.get("", response_class=Response)
async def index(store: ModelStore[Dataset] = Depends(get_dataset_store)) -> Response:
    """Gets a list of Datasets."""
    return await ResultChain(store.find_all()).then(respond_with_result()).catch(handle_error()).resolve()


@router.get("/{dataset_id}", response_class=Response)
async def show(dataset_id: str, store: ModelStore[Dataset] = Depends(get_dataset_store)) -> Response:
    """Gets a single Dataset from the DB."""
    return await (
        ResultChain(store.find(by_id(dataset_id)))
        .then(handle_entity_not_found())
        .then(respond_with_result())
        .catch(handle_error())
        .resolve()
    )


@router.post("", response_class=Response)
async def create(
    body: Dict[str, Any] = Body(...),
    store: ModelStore[Dataset] = Depends(get_dataset_store),
) -> Response:
    """Creates a new Dataset in the DB."""
    return await (
        ResultChain(store.create(body))
        .then(respond_with_result(status.HTTP_201_CREATED))
        .catch(handle_error())
        .resolve()
    )


@router.put("/{dataset_id}", response_class=Response)
async def upsert(
    dataset_id: str,
    body: Dict[str, Any] = Body(...),
    store: ModelStore[Dataset] = Depends(get_dataset_store),
) -> Response:
    """Upserts the given Dataset in the DB at the specified ID."""
    body = strip_id(body)
    return await (
        ResultChain(store.upsert(body, by_id(dataset_id)))
        .then(respond_with_result())
        .catch(handle_error())
        .resolve()
    )


@router.patch("/{dataset_id}", response_class=Response)
async def patch(
    dataset_id: str,
    body: Any = Body(...),
    store: ModelStore[Dataset] = Depends(get_dataset_store),
) -> Response:
    """Updates an existing Dataset in the DB with a JSON Patch document."""
    body = strip_id(body)
    return await (
        ResultChain(store.find(by_id(dataset_id)))
        .then(handle_entity_not_found())
        .then(patch_updates(store, body))
        .then(respond_with_result())
        .catch(handle_error())
        .resolve()
    )


@router.delete("/{dataset_id}", response_class=Response)
async def destroy(dataset_id: str, store: ModelStore[Dataset] = Depends(get_dataset_store)) -> Response:
    """Deletes a Dataset from the DB."""
    return await (
        ResultChain(store.find(by_id(dataset_id)))
        .then(handle_entity_not_found())
        .then(remove_entity(store))
        .catch(handle_error())
        .resolve()
    )
