"""Feedback routes, registered only when ``FEEDBACK_ENABLED`` is set."""
from __future__ import annotations

from flask import Blueprint, current_app

from .controllers.router import FEEDBACK
from .routes import current_state, json_body, payload_text, run_action

bp_feedback = Blueprint("feedback", __name__)


@bp_feedback.get("/feedback")
def list_feedback():
    """List the signed-in user's feedback, newest first.
    ---
    tags:
      - Feedback
    responses:
      200:
        description: Feedback entries with a five-star scale
      401:
        description: Not signed in
    """
    return run_action(FEEDBACK, "list")


@bp_feedback.post("/feedback")
def submit_feedback():
    """Submit feedback about a service.
    ---
    tags:
      - Feedback
    parameters:
      - name: body
        in: body
        required: true
        schema:
          type: object
          properties:
            email:
              type: string
            phone:
              type: string
              example: "9998887771"
            service:
              type: string
            rating:
              type: integer
              minimum: 1
              maximum: 5
            message:
              type: string
            category:
              type: string
    responses:
      201:
        description: Feedback stored; refreshed stats and list returned
      400:
        description: Invalid email, phone or rating
      401:
        description: Not signed in
    """
    payload = json_body()

    response, status = run_action(
        FEEDBACK,
        "submit",
        success_status=201,
        email=payload_text(payload, "email"),
        phone=payload_text(payload, "phone"),
        service=payload_text(payload, "service"),
        rating=payload.get("rating"),
        message=payload_text(payload, "message"),
        category=payload_text(payload, "category"),
    )
    if status == 201:
        current_app.logger.info(
            "Feedback from %s rated %s", current_state().current_user.email, payload.get("rating")
        )
    return response, status


@bp_feedback.get("/feedback/stats")
def feedback_stats():
    return run_action(FEEDBACK, "stats")


@bp_feedback.post("/feedback/validate")
def validate_field():
    """Check one feedback form field as it is typed or left.
    ---
    tags:
      - Feedback
    parameters:
      - name: body
        in: body
        required: true
        schema:
          type: object
          properties:
            field:
              type: string
              enum: [email, phone]
            event:
              type: string
              enum: [input, blur]
            value:
              type: string
            has_error:
              type: boolean
    responses:
      200:
        description: Cleaned value and the inline error to show
      400:
        description: Unknown field or event
    """
    payload = json_body()
    return run_action(
        FEEDBACK,
        "check_field",
        field=payload_text(payload, "field"),
        event=payload_text(payload, "event"),
        value=payload_text(payload, "value"),
        has_error=bool(payload.get("has_error")),
    )
