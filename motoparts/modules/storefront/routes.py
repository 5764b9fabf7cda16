from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, render_template

from motoparts.app.common.errors import abort_json
from motoparts.app.common.storefront import build_controller
from motoparts.app.common.validation import get_json, require_fields
from motoparts.catalog.controller import INVALID_EMAIL_ALERT, ViewController, is_valid_email

bp = Blueprint("storefront", __name__)


def render_fragments(controller: ViewController):
    view = controller.view()
    return view, {
        "products": render_template("partials/_products.html", view=view),
        "pagination": render_template("partials/_pagination.html", view=view),
        "autocomplete": render_template("partials/_autocomplete.html", view=view),
        "quick_view": render_template("partials/_quick_view.html", view=view),
    }


@bp.post("/view/events")
def view_event():
    """POST /api/view/events - Apply one user trigger and return the re-rendered view.

    Body: {"trigger": "<name>", ...trigger payload}
    """
    data = get_json()
    require_fields(data, ["trigger"])
    trigger = str(data.pop("trigger"))

    controller = build_controller()
    try:
        controller.dispatch(trigger, data)
    except ValueError as exc:
        abort_json(400, "validation_error", str(exc), {"trigger": trigger})

    view, html = render_fragments(controller)
    return {
        "state": controller.state.to_dict(),
        "view": view.to_dict(),
        "html": html,
        "alert": controller.alert,
        "notice": asdict(controller.notice) if controller.notice else None,
    }, 200


@bp.post("/newsletter")
def subscribe():
    data = get_json()
    require_fields(data, ["email"])
    email = str(data["email"] or "").strip()
    if not is_valid_email(email):
        abort_json(400, "validation_error", INVALID_EMAIL_ALERT)

    controller = build_controller()
    controller.subscribe_newsletter(email)
    return {"email": email, "message": controller.alert}, 201
