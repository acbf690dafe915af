from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_actor, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/notes", methods=["GET", "POST"], endpoint="notes")
    @login_required
    def notes():
        actor = current_actor()
        if request.method == "POST":
            try:
                container.note_service.add(
                    actor,
                    title=request.form.get("title", ""),
                    description=request.form.get("description", ""),
                )
                flash("Note saved.", "success")
                return redirect(url_for("notes"))
            except ValidationError as e:
                flash(str(e), "danger")

        rows = container.note_service.list_mine(actor)
        return render_template("notes/index.html", notes=rows, active_page="notes")

    @app.route("/notes/<int:note_id>/delete", methods=["POST"], endpoint="delete_note")
    @login_required
    def delete_note(note_id: int):
        try:
            container.note_service.delete(current_actor(), note_id=note_id)
            flash("Note deleted.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("notes"))
