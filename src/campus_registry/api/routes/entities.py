"""
Entity page API routes
One router per entity descriptor; every route answers with the page view.
Remote failures surface in the page's status banner, not as HTTP errors.
"""

import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, HTTPException, Query, Request

from campus_registry.models.entity import EntityDescriptor
from campus_registry.models.view import PageView
from campus_registry.services.confirmation import FixedConfirmation
from campus_registry.services.entity_controller import EntityController

logger = logging.getLogger(__name__)


def get_controller(request: Request, table: str) -> EntityController:
    controllers = getattr(request.app.state, "controllers", None) or {}
    controller = controllers.get(table)
    if controller is None:
        raise HTTPException(status_code=503, detail=f"Page '{table}' is not available")
    return controller


def build_entity_router(entity: EntityDescriptor) -> APIRouter:
    """Build the page routes for one entity"""
    router = APIRouter()

    def controller_for(request: Request) -> EntityController:
        return get_controller(request, entity.table)

    @router.get("", response_model=PageView)
    async def open_page(request: Request):
        """Page load: reset the form and load every row"""
        controller = controller_for(request)
        await controller.open_page()
        return controller.page()

    @router.get("/view", response_model=PageView)
    async def view_page(request: Request):
        """Current page state without contacting the store"""
        return controller_for(request).page()

    @router.post("", response_model=PageView)
    async def create_record(request: Request, values: Dict[str, Any] = Body(...)):
        """Submit the form in create mode - always inserts a new row"""
        controller = controller_for(request)
        await controller.create(values)
        return controller.page()

    @router.put("/{record_id}", response_model=PageView)
    async def update_record(request: Request, record_id: str, values: Dict[str, Any] = Body(...)):
        """Submit the form in edit mode - replaces the fields of ``record_id``"""
        controller = controller_for(request)
        await controller.update(record_id, values)
        return controller.page()

    @router.post("/cancel-edit", response_model=PageView)
    async def cancel_edit(request: Request):
        controller = controller_for(request)
        await controller.cancel_edit()
        return controller.page()

    @router.post("/dismiss-status", response_model=PageView)
    async def dismiss_status(request: Request):
        controller = controller_for(request)
        controller.notifier.dismiss()
        return controller.page()

    @router.post("/{record_id}/edit", response_model=PageView)
    async def begin_edit(request: Request, record_id: str):
        controller = controller_for(request)
        await controller.begin_edit(record_id)
        return controller.page()

    @router.delete("/{record_id}", response_model=PageView)
    async def delete_record(
        request: Request,
        record_id: str,
        confirm: bool = Query(False, description="Explicit user confirmation of the delete")
    ):
        """Delete a row; without ``confirm=true`` nothing happens"""
        controller = controller_for(request)
        await controller.delete(record_id, FixedConfirmation(confirm))
        return controller.page()

    return router
