"""
To-do routes for the Todo Manager application.

Every route requires a signed-in user and only ever reads or mutates
that user's to-dos. Listing and creation serve HTML forms by default and
JSON when the client asks for it; completion updates and deletions
always answer with JSON.

Routes:
    GET    /todos       - Grouped to-do list (HTML or JSON)
    POST   /todos       - Create a to-do
    PUT    /todos/<id>  - Set the completion flag
    DELETE /todos/<id>  - Delete a to-do
"""

import logging

from flask import Blueprint, flash, g, jsonify, redirect, render_template, url_for

from todo_app.auth import login_required
from todo_app.models import Todo, TodoOwnershipError, ValidationError
from todo_app.routes.helpers import (
    json_error,
    parse_bool,
    parse_todo_id,
    request_data,
    wants_json,
)

logger = logging.getLogger(__name__)

todos_bp = Blueprint("todos", __name__)

UNPROCESSABLE = 422


@todos_bp.route("/todos", methods=["GET"])
@login_required
def list_todos():
    """
    Render the user's to-dos grouped by due date.

    Returns:
        Rendered todos.html, or a JSON object with ``overdue``,
        ``dueToday``, ``dueLater`` and ``completedItems`` lists.
    """
    logger.info("GET /todos - Listing todos for user %s", g.user.id)

    groups = Todo.grouped_for(g.user.id)

    if wants_json():
        return jsonify({
            name: [todo.to_dict() for todo in todos]
            for name, todos in groups.items()
        }), 200

    return render_template("todos.html", user=g.user, **groups)


@todos_bp.route("/todos", methods=["POST"])
@login_required
def create_todo():
    """
    Create a to-do for the signed-in user.

    Request Data (form or JSON):
        title: To-do title (required)
        dueDate: Due date, ``YYYY-MM-DD`` or ISO-8601 timestamp (required)

    Returns:
        Redirect to /todos for form clients; the new to-do with 201 for
        JSON clients, or 422 with an error message if validation fails.
    """
    logger.info("POST /todos - Creating todo for user %s", g.user.id)

    data = request_data()
    try:
        todo = Todo.add_todo(g.user.id, data.get("title"), data.get("dueDate"))
    except ValidationError as exc:
        logger.warning("Todo validation failed: %s", exc)
        if wants_json():
            return json_error(str(exc), UNPROCESSABLE)
        flash(str(exc), "error")
        return redirect(url_for("todos.list_todos"))

    if wants_json():
        return jsonify(todo.to_dict()), 201
    return redirect(url_for("todos.list_todos"))


@todos_bp.route("/todos/<todo_id>", methods=["PUT"])
@login_required
def update_todo(todo_id: str):
    """
    Set the completion flag of one of the user's to-dos.

    Request Data (form or JSON):
        completed: New completion state (required boolean)

    Returns:
        The updated to-do as JSON, or 422 if the value is invalid or the
        to-do id is malformed or does not belong to the user.
    """
    logger.info("PUT /todos/%s - Updating completion", todo_id)

    data = request_data()
    try:
        completed = parse_bool(data.get("completed"), "completed")
        todo = Todo.set_completion_status(parse_todo_id(todo_id), g.user.id, completed)
    except ValidationError as exc:
        logger.warning("Todo %s update rejected: %s", todo_id, exc)
        return json_error(str(exc), UNPROCESSABLE)
    except TodoOwnershipError:
        logger.warning("User %s may not update todo %s", g.user.id, todo_id)
        return json_error("Todo not found", UNPROCESSABLE)

    return jsonify(todo.to_dict()), 200


@todos_bp.route("/todos/<todo_id>", methods=["DELETE"])
@login_required
def delete_todo(todo_id: str):
    """
    Delete one of the user's to-dos.

    Returns:
        ``{"success": true}`` when the row was removed,
        ``{"success": false}`` when no to-do has that id, or 422 when the
        id is malformed or the to-do belongs to another user.
    """
    logger.info("DELETE /todos/%s - Deleting todo", todo_id)

    try:
        deleted = Todo.remove(parse_todo_id(todo_id), g.user.id)
    except (ValidationError, TodoOwnershipError):
        logger.warning("User %s may not delete todo %s", g.user.id, todo_id)
        return jsonify({"success": False, "error": "Todo not found"}), UNPROCESSABLE

    return jsonify({"success": deleted}), 200
