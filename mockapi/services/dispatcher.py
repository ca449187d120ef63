# === mockapi/services/dispatcher.py ===
from sqlalchemy.exc import SQLAlchemyError
from mockapi.core.exceptions import (
    MockServingError,
    EndpointNotFound,
    KeyRequired,
    KeyInvalid,
    StorageFailure,
    UnservableStatus,
)
from mockapi.models.endpoint import Endpoint
from mockapi.schemas.mock import MockRequest, RenderedResponse
from mockapi.services.registry import EndpointRegistry
from mockapi.services.key_validator import is_valid_key
from mockapi.services.renderer import render, render_error
import logging

logger = logging.getLogger(__name__)


class MockDispatcher:
    """Resolves mock requests against the registry and renders the result."""

    def __init__(self, registry: EndpointRegistry):
        self.registry = registry

    async def resolve(self, request: MockRequest) -> Endpoint:
        """Return the endpoint a request may be served from.

        Raises EndpointNotFound, KeyRequired, KeyInvalid or StorageFailure.
        """
        method = request.method.value

        try:
            endpoints = await self.registry.find_endpoints(request.project_id, method, request.path)
        except (SQLAlchemyError, OSError) as e:
            logger.exception(f"Endpoint lookup failed for {method} {request.path}")
            raise StorageFailure() from e

        if not endpoints:
            raise EndpointNotFound(method, request.path)

        # (project_id, method, path) is unique, so more than one row means
        # the constraint was bypassed; storage order decides
        endpoint = endpoints[0]

        if endpoint.requires_key:
            if not request.presented_key:
                raise KeyRequired()

            try:
                valid = await is_valid_key(self.registry, endpoint.id, request.presented_key)
            except (SQLAlchemyError, OSError) as e:
                logger.exception(f"Access key lookup failed for endpoint {endpoint.id}")
                raise StorageFailure() from e

            if not valid:
                raise KeyInvalid()

        return endpoint

    async def serve(self, request: MockRequest) -> RenderedResponse:
        try:
            endpoint = await self.resolve(request)
            status_code = endpoint.status_code if endpoint.status_code is not None else 200
            if status_code < 200:
                raise UnservableStatus(status_code)
            return render(endpoint.response_body, status_code)
        except MockServingError as e:
            if isinstance(e, UnservableStatus):
                logger.error(f"Endpoint for {request.method.value} {request.path} stores unservable status {e.stored_status}")
            elif not isinstance(e, StorageFailure):
                logger.info(f"Mock {request.method.value} {request.path} -> {e.status_code} ({e.error})")
            return render_error(e.status_code, e.payload())
        except Exception:
            logger.exception(f"Error serving mock endpoint {request.method.value} {request.path}")
            failure = StorageFailure()
            return render_error(failure.status_code, failure.payload())
