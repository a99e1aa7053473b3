"""
Party page routes.

The page is plain HTML: party links select a party, the add-party form
posts to ``/parties`` and the delete action goes through a confirmation
view before posting to ``/parties/{id}/delete``.  Mutating routes
redirect back to ``/`` (303) once the controller has re-rendered.
"""

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from party_planner.app.services.planner_service import PlannerController
from party_planner.app.views.render import render_app, to_document
from party_planner.errors import ErrorKind


router = APIRouter()


def get_controller(request: Request) -> PlannerController:
    return request.app.state.controller


def _back_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def show_page(controller: PlannerController = Depends(get_controller)) -> HTMLResponse:
    """Return the most recently rendered page."""
    return HTMLResponse(controller.mount.html())


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.post("/refresh")
async def refresh(controller: PlannerController = Depends(get_controller)) -> RedirectResponse:
    """Reload guests, RSVPs and parties from the data service."""
    await controller.refresh()
    return _back_home()


@router.get("/parties/{party_id}", response_class=HTMLResponse)
async def select_party(
    party_id: int,
    controller: PlannerController = Depends(get_controller),
) -> HTMLResponse:
    """Select a party and show its details.

    If the fetch fails the page is returned unchanged.
    """
    await controller.select_party(party_id)
    return HTMLResponse(controller.mount.html())


@router.post("/parties")
async def create_party(
    name: str = Form(""),
    description: str = Form(""),
    date: str = Form(""),
    location: str = Form(""),
    controller: PlannerController = Depends(get_controller),
):
    """Submit the add-party form.

    An incomplete form comes back as 422 with an alert and the entered
    values; otherwise the browser is sent back to the refreshed page.
    """
    form = {"name": name, "description": description, "date": date, "location": location}
    error = await controller.create_party(form)
    if error is not None and error.kind is ErrorKind.VALIDATION:
        page = controller.form_alert_page(error.message, form)
        return HTMLResponse(page, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    return _back_home()


@router.get("/parties/{party_id}/delete", response_class=HTMLResponse)
async def confirm_delete(
    party_id: int,
    controller: PlannerController = Depends(get_controller),
):
    """Ask the user to confirm deleting the selected party."""
    selected = controller.state.selected_party
    if selected is None or selected.id != party_id:
        return _back_home()
    page = render_app(controller.state, confirm_delete=True)
    return HTMLResponse(to_document(page, controller.mount.title))


@router.post("/parties/{party_id}/delete")
async def delete_party(
    party_id: int,
    confirm: str = Form("no"),
    controller: PlannerController = Depends(get_controller),
) -> RedirectResponse:
    """Delete the selected party when ``confirm`` is ``yes``.

    Anything else, including a post for a party that is not the current
    selection, counts as a cancel and sends no request.
    """
    selected = controller.state.selected_party
    if selected is not None and selected.id == party_id:
        await controller.delete_selected(confirm == "yes")
    return _back_home()
