from __future__ import annotations

import logging
from datetime import date

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_actor, roles_required
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance", methods=["GET", "POST"], endpoint="attendance")
    @roles_required(Role.STUDENT)
    def attendance():
        actor = current_actor()

        if request.method == "POST":
            try:
                container.attendance_service.mark(
                    actor,
                    day=request.form.get("date", ""),
                    status=request.form.get("status", AttendanceStatus.PRESENT.value),
                )
                flash("Attendance marked.", "success")
                return redirect(url_for("attendance"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("marking attendance failed")
                flash("System error while marking attendance", "danger")

        rows = container.attendance_service.list_mine(actor)
        return render_template(
            "attendance/index.html",
            records=rows,
            today=date.today().isoformat(),
            statuses=[s.value for s in AttendanceStatus],
            active_page="attendance",
        )
