"""Request-scoped wiring of the catalog core to the Flask session."""

from __future__ import annotations

from flask import current_app, session

from motoparts.app.storage import SessionStore, catalog
from motoparts.catalog.controller import ViewController, ViewState
from motoparts.catalog.stores import CartStore
from motoparts.catalog.views import RenderSettings

VIEW_STATE_KEY = "view_state"


def render_settings() -> RenderSettings:
    cfg = current_app.config
    return RenderSettings(
        currency=cfg.get("CURRENCY", "KES"),
        new_days=cfg.get("NEW_PRODUCT_DAYS", 30),
        low_stock=cfg.get("LOW_STOCK_THRESHOLD", 10),
    )


def cart_store() -> CartStore:
    return CartStore(SessionStore(), catalog.products)


def _save_view_state(state: ViewState) -> None:
    session[VIEW_STATE_KEY] = state.to_dict()


def build_controller() -> ViewController:
    cfg = current_app.config
    state = ViewState.from_dict(session.get(VIEW_STATE_KEY), page_size=cfg.get("PAGE_SIZE", 9))
    controller = ViewController(
        catalog.products,
        cart_store(),
        state=state,
        settings=render_settings(),
        autocomplete_limit=cfg.get("AUTOCOMPLETE_LIMIT", 6),
        notice_ms=cfg.get("ADD_NOTICE_MS", 900),
    )
    controller.on_change(_save_view_state)
    return controller
