"""HTTP routes for the home-services booking app."""
from __future__ import annotations

from datetime import date

from flask import Blueprint, Flask, current_app, g, jsonify, redirect, request, url_for

from .controllers import CONFIRMATION_REQUIRED, CONFLICT, INVALID_PAYLOAD, UNAUTHORIZED, Outcome
from .controllers.booking import local_today
from .controllers.router import (BOOKINGS, FEEDBACK, HOME, INDEX, PROFILE, build_handlers, dispatch,
                                 pages, resolve)
from .extensions import session_storage
from .state import AppState
from .storage import SessionStore, StorageError

bp = Blueprint("api", __name__)

HANDLERS_KEY = "page_handlers"

ERROR_STATUS = {
    INVALID_PAYLOAD: 400,
    UNAUTHORIZED: 401,
    CONFLICT: 409,
    CONFIRMATION_REQUIRED: 428,
}

# Actions whose data make up each page when it is first shown.
PAGE_LOADERS: dict[str, tuple[str, ...]] = {
    INDEX: ("show_panel",),
    HOME: ("load",),
    BOOKINGS: ("list", "total"),
    FEEDBACK: ("stats", "list"),
    PROFILE: ("load", "stats", "activity"),
}


class PayloadError(Exception):
    """Raised when a request body is JSON but not a JSON object."""


def json_body() -> dict[str, object]:
    """Return the request's JSON object, or ``{}`` when there is no JSON body."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise PayloadError("request body must be a JSON object")
    return payload


def payload_text(payload: dict[str, object], key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


def _store() -> SessionStore:
    if "store" not in g:
        g.store = SessionStore(
            session_storage.bucket(),
            include_feedback=current_app.config["FEEDBACK_ENABLED"],
        )
    return g.store


def current_state() -> AppState:
    """Load the caller's state once per request."""
    if "state" not in g:
        g.state = _store().load()
    return g.state


def _catalog_fields() -> dict[str, object]:
    return {
        "catalog": current_app.config["SERVICE_CATALOG"],
        "symbol": current_app.config["CURRENCY_SYMBOL"],
    }


def _booking_today() -> date:
    return local_today(current_app.config["BOOKING_TIMEZONE"])


def run_action(page: str, action: str, success_status: int = 200, **fields) -> tuple[object, int]:
    """Dispatch one controller action, persist its effect and render it as JSON."""
    handlers = current_app.extensions[HANDLERS_KEY]
    outcome = dispatch(handlers, current_state(), page, action, **fields)

    if outcome.reset:
        _store().clear()
        session_storage.discard()
    elif outcome.changed:
        store = _store()
        # The session id and bucket are issued on the first write.
        store.bucket = session_storage.bucket(create=True)
        store.save(current_state())

    return render_outcome(outcome, success_status)


def render_outcome(outcome: Outcome, success_status: int = 200) -> tuple[object, int]:
    body: dict[str, object] = dict(outcome.data)
    status = success_status

    if outcome.error:
        body["error"] = outcome.error
        status = ERROR_STATUS.get(outcome.error, 400)
    if outcome.message:
        body["message"] = outcome.message
    if outcome.field_name:
        body["field"] = outcome.field_name
    if outcome.redirect:
        body["redirect"] = url_for("api.show_page", page=outcome.redirect)

    return jsonify(body), status


def _handle_payload_error(exc: PayloadError):
    return jsonify({"error": INVALID_PAYLOAD, "message": str(exc)}), 400


def _handle_storage_error(exc: StorageError):
    current_app.logger.exception("Stored session state is unreadable", exc_info=exc)
    return jsonify({"error": "session_corrupt", "message": str(exc)}), 500


@bp.get("/health")
def health_check() -> tuple[dict[str, str], int]:
    """
    Expose a simple uptime check endpoint.
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is healthy and running.
    """
    return jsonify({"status": "ok"}), 200


@bp.get("/pages/<page>")
def show_page(page: str):
    """Show a page, redirecting according to the sign-in state.
    ---
    tags:
      - Pages
    parameters:
      - name: page
        in: path
        type: string
        enum: [index, home, bookings, feedback, profile]
    responses:
      200:
        description: Data needed to render the page
      302:
        description: Redirect to the entry page or the landing page
      404:
        description: Unknown page
    """
    if page not in pages(current_app.config["FEEDBACK_ENABLED"]):
        return jsonify({"error": "not_found", "message": f"unknown page: {page}"}), 404

    state = current_state()
    target, redirected = resolve(page, state.authenticated, current_app.config["LANDING_PAGE"])
    if redirected:
        return redirect(url_for("api.show_page", page=target))

    handlers = current_app.extensions[HANDLERS_KEY]
    body: dict[str, object] = {"page": page}
    for action in PAGE_LOADERS[page]:
        fields: dict[str, object] = {}
        if (page, action) == (INDEX, "show_panel"):
            fields = {"panel": "login"}
        elif (page, action) == (HOME, "load"):
            fields = _catalog_fields()
        elif (page, action) == (BOOKINGS, "total"):
            fields = {"symbol": current_app.config["CURRENCY_SYMBOL"]}
        body.update(dispatch(handlers, state, page, action, **fields).data)

    return jsonify(body), 200


# --- Authentication ---


@bp.get("/auth/panel/<panel>")
def show_auth_panel(panel: str):
    """Switch the entry page between its login and register panels."""
    return run_action(INDEX, "show_panel", panel=panel)


@bp.post("/auth/register")
def register_user():
    """Register a new user and sign them in.
    ---
    tags:
      - Authentication
    parameters:
      - name: body
        in: body
        required: true
        schema:
          type: object
          properties:
            name:
              type: string
            email:
              type: string
            phone:
              type: string
            password:
              type: string
    responses:
      201:
        description: User registered and signed in
      400:
        description: Missing fields or password too short
      409:
        description: Email already registered
    """
    payload = json_body()

    response, status = run_action(
        INDEX,
        "register",
        success_status=201,
        name=payload_text(payload, "name"),
        email=payload_text(payload, "email"),
        phone=payload_text(payload, "phone"),
        password=payload_text(payload, "password"),
    )
    if status == 201:
        current_app.logger.info("Registered user %s", payload_text(payload, "email"))
    return response, status


@bp.post("/auth/login")
def login():
    """Sign in with email and password.
    ---
    tags:
      - Authentication
    responses:
      200:
        description: Signed in
      401:
        description: Invalid email or password
    """
    payload = json_body()
    email = payload_text(payload, "email")

    response, status = run_action(INDEX, "login", email=email, password=payload_text(payload, "password"))
    if status == 200:
        current_app.logger.info("User %s signed in", email)
    else:
        current_app.logger.warning("Failed sign-in attempt for %s", email)
    return response, status


@bp.post("/auth/logout")
def logout():
    """Sign out and wipe all session data."""
    state = current_state()
    if state.current_user is not None:
        current_app.logger.info("User %s signed out", state.current_user.email)
    return run_action(HOME, "logout")


# --- Home page / booking dialog ---


@bp.get("/services")
def list_services():
    """List the bookable services with their prices."""
    return run_action(HOME, "load", **_catalog_fields())


@bp.get("/bookings/dialog")
def open_booking_dialog():
    """Pre-fill the booking dialog for one catalogue service.
    ---
    tags:
      - Bookings
    parameters:
      - name: service
        in: query
        type: string
        required: true
    responses:
      200:
        description: Dialog fields
      404:
        description: Service is not in the catalogue
    """
    name = (request.args.get("service") or "").strip()
    item = next((s for s in current_app.config["SERVICE_CATALOG"] if s["name"] == name), None)
    if item is None:
        return jsonify({"error": "not_found", "message": f"unknown service: {name}"}), 404

    return run_action(
        HOME,
        "open_dialog",
        service=item["name"],
        price=item["price"],
        symbol=current_app.config["CURRENCY_SYMBOL"],
        today=_booking_today(),
    )


@bp.delete("/bookings/dialog")
def close_booking_dialog():
    return run_action(HOME, "close_dialog")


@bp.post("/bookings")
def create_booking():
    """Book a service for the signed-in user.
    ---
    tags:
      - Bookings
    parameters:
      - name: body
        in: body
        required: true
        schema:
          type: object
          properties:
            service:
              type: string
            price:
              type: string
              example: "₹500"
            address:
              type: string
            date:
              type: string
              example: "2026-10-19"
            time:
              type: string
              example: "10:00"
    responses:
      201:
        description: Booking confirmed
      400:
        description: Missing fields, an unreadable price or a past date
      401:
        description: Not signed in
    """
    payload = json_body()

    response, status = run_action(
        HOME,
        "submit_booking",
        success_status=201,
        service=payload_text(payload, "service"),
        price=payload_text(payload, "price"),
        address=payload_text(payload, "address"),
        date=payload_text(payload, "date"),
        time=payload_text(payload, "time"),
        today=_booking_today(),
        symbol=current_app.config["CURRENCY_SYMBOL"],
    )
    if status == 201:
        current_app.logger.info(
            "Booked %s for %s on %s",
            payload_text(payload, "service"),
            current_state().current_user.email,
            payload_text(payload, "date"),
        )
    return response, status


# --- Bookings page ---


@bp.get("/bookings")
def list_bookings():
    """List the signed-in user's bookings.
    ---
    tags:
      - Bookings
    parameters:
      - name: filter
        in: query
        type: string
        enum: [all, Confirmed, Cancelled, Completed]
        default: all
    responses:
      200:
        description: Bookings in the order they were made
      401:
        description: Not signed in
    """
    return run_action(BOOKINGS, "list", status_filter=request.args.get("filter", "all"))


@bp.post("/bookings/<booking_id>/cancel")
def cancel_booking(booking_id: str):
    """Cancel a booking; the request must carry ``{"confirm": true}``.
    ---
    tags:
      - Bookings
    responses:
      200:
        description: Booking cancelled, or no such booking
      401:
        description: Not signed in
      428:
        description: Confirmation missing
    """
    payload = json_body()
    confirmed = payload.get("confirm") is True

    response, status = run_action(BOOKINGS, "cancel", booking_id=booking_id, confirmed=confirmed)
    if status == 200 and confirmed:
        current_app.logger.info("Cancel requested for booking %s", booking_id)
    return response, status


@bp.get("/bookings/total")
def booking_total():
    """Sum of prices of the signed-in user's bookings that are not cancelled."""
    return run_action(BOOKINGS, "total", symbol=current_app.config["CURRENCY_SYMBOL"])


# --- Profile page ---


@bp.get("/profile")
def get_profile():
    return run_action(PROFILE, "load")


@bp.put("/profile")
def update_profile():
    """Update name, phone and address of the signed-in user.
    ---
    tags:
      - Users
    responses:
      200:
        description: Profile updated successfully
      401:
        description: Not signed in
    """
    payload = json_body()
    return run_action(
        PROFILE,
        "update",
        name=payload_text(payload, "name"),
        phone=payload_text(payload, "phone"),
        address=payload_text(payload, "address"),
    )


@bp.put("/profile/avatar")
def update_avatar():
    payload = json_body()
    return run_action(PROFILE, "update_avatar", url=payload_text(payload, "url"))


@bp.get("/profile/stats")
def get_profile_stats():
    return run_action(PROFILE, "stats")


@bp.get("/profile/activity")
def get_recent_activity():
    return run_action(PROFILE, "activity")


def register_routes(app: Flask) -> None:
    feedback_enabled = app.config["FEEDBACK_ENABLED"]
    app.extensions[HANDLERS_KEY] = build_handlers(feedback_enabled)

    app.register_blueprint(bp)
    if feedback_enabled:
        from .routes_feedback import bp_feedback

        app.register_blueprint(bp_feedback)

    app.register_error_handler(StorageError, _handle_storage_error)
    app.register_error_handler(PayloadError, _handle_payload_error)
