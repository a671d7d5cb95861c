"""Response helpers shared by the CRUD routers.

A route is written as a chain: a store call produces the first outcome, then
each stage receives the previous outcome and may write the response::

    await (
        ResultChain(store.find(by_id(dataset_id)))
        .then(handle_entity_not_found())
        .then(respond_with_result())
        .catch(handle_error())
        .resolve()
    )

Outcomes are ``Found``, ``NotFound`` or ``Failed``. A stage that does not
handle the outcome it receives passes it through unchanged, so ``NotFound``
and ``Failed`` flow to the end of the chain without triggering mutations.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import jsonpatch
from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from jsonpointer import JsonPointerException

from api.exceptions import PatchApplicationError, ResponseAlreadySentError
from datastore.model_store import ModelStore
from utils.logging import logger


@dataclass(frozen=True)
class Found:
    entity: Any


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Failed:
    error: Exception


Outcome = Union[Found, NotFound, Failed]


class Reply:
    """The single response written for a request."""

    def __init__(self) -> None:
        self._response: Optional[Response] = None

    @property
    def sent(self) -> bool:
        return self._response is not None

    @property
    def response(self) -> Optional[Response]:
        return self._response

    def send(self, response: Response) -> None:
        if self._response is not None:
            raise ResponseAlreadySentError(f"Response already sent with status {self._response.status_code}")
        self._response = response


Stage = Callable[[Outcome, Reply], Awaitable[Outcome]]
ErrorHandler = Callable[[Exception, Reply], Awaitable[None]]


def to_outcome(result: Any) -> Outcome:
    """Wrap a store result; ``None`` means the lookup found nothing."""
    if result is None:
        return NotFound()
    return Found(result)


def strip_id(body: Any) -> Any:
    """Drop a client supplied ``_id`` so the path identifier always wins."""
    if isinstance(body, dict) and "_id" in body:
        return {key: value for key, value in body.items() if key != "_id"}
    return body


def error_payload(error: Exception) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": type(error).__name__, "message": str(error)}
    cause = getattr(error, "cause", None)
    if isinstance(cause, Exception):
        payload["cause"] = error_payload(cause)
    return payload


def respond_with_result(status_code: int = status.HTTP_200_OK) -> Stage:
    """Write a found entity as JSON with ``status_code``."""

    async def stage(outcome: Outcome, reply: Reply) -> Outcome:
        if isinstance(outcome, Found):
            reply.send(JSONResponse(content=jsonable_encoder(outcome.entity), status_code=status_code))
        return outcome

    return stage


def handle_entity_not_found() -> Stage:
    """Answer 404 with an empty body when the lookup found nothing."""

    async def stage(outcome: Outcome, reply: Reply) -> Outcome:
        if isinstance(outcome, NotFound):
            reply.send(Response(status_code=status.HTTP_404_NOT_FOUND))
        return outcome

    return stage


def patch_updates(store: ModelStore, patch_document: Any) -> Stage:
    """Apply a JSON Patch document to the found entity and save it.

    The patch is applied to a copy, so a document that fails validation or
    application leaves the stored entity untouched.
    """

    async def stage(outcome: Outcome, reply: Reply) -> Outcome:
        if not isinstance(outcome, Found):
            return outcome

        entity = outcome.entity
        try:
            if not isinstance(patch_document, list):
                raise jsonpatch.InvalidJsonPatch("Patch document must be a list of operations")
            patch = jsonpatch.JsonPatch(patch_document)
            patched = patch.apply(entity.model_dump(mode="json", by_alias=True))
            # The identifier is not patchable
            patched["_id"] = entity.id
            updated = store.model_cls.model_validate(patched)
        except (jsonpatch.JsonPatchException, JsonPointerException, TypeError, ValueError) as e:
            logger.warning(f"Rejected patch for {store.name} {entity.id}: {str(e)}")
            return Failed(PatchApplicationError(f"Failed to apply patch to {store.name} {entity.id}", cause=e))

        return Found(await store.save(updated))

    return stage


def remove_entity(store: ModelStore) -> Stage:
    """Delete the found entity and answer 204 with an empty body."""

    async def stage(outcome: Outcome, reply: Reply) -> Outcome:
        if isinstance(outcome, Found):
            await store.destroy(outcome.entity)
            reply.send(Response(status_code=status.HTTP_204_NO_CONTENT))
        return outcome

    return stage


def handle_error(status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> ErrorHandler:
    """Terminal handler rendering any failure as ``status_code`` with the error payload."""

    async def handler(error: Exception, reply: Reply) -> None:
        if reply.sent:
            logger.error(f"Error after response was sent: {type(error).__name__}: {str(error)}")
            return
        logger.error(f"Request failed: {type(error).__name__}: {str(error)}")
        reply.send(JSONResponse(content=error_payload(error), status_code=status_code))

    return handler


class ResultChain:
    """Runs a store call through response stages and returns the response."""

    def __init__(self, source: Awaitable[Any]) -> None:
        self._source = source
        self._stages: List[Stage] = []
        self._on_error: Optional[ErrorHandler] = None

    def then(self, stage: Stage) -> "ResultChain":
        self._stages.append(stage)
        return self

    def catch(self, handler: ErrorHandler) -> "ResultChain":
        self._on_error = handler
        return self

    async def resolve(self) -> Response:
        reply = Reply()

        try:
            outcome = to_outcome(await self._source)
        except Exception as e:
            outcome = Failed(e)

        for stage in self._stages:
            if isinstance(outcome, Failed):
                break
            try:
                outcome = await stage(outcome, reply)
            except Exception as e:
                outcome = Failed(e)

        if isinstance(outcome, Failed):
            if self._on_error is None:
                raise outcome.error
            await self._on_error(outcome.error, reply)

        if not reply.sent:
            logger.warning("Chain finished without a response, answering 204")
            reply.send(Response(status_code=status.HTTP_204_NO_CONTENT))

        return reply.response
