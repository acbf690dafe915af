from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_actor, roles_required
from ..container import Container
from ..core.enums import InternshipMode, Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)

_FORM_FIELDS = (
    "company_name",
    "company_address",
    "role",
    "field",
    "mode",
    "start_date",
    "end_date",
    "internship_letter_url",
    "company_mentor_email",
    "total_holidays",
)


def register(app: Flask, container: Container) -> None:
    @app.route("/internships", methods=["GET", "POST"], endpoint="my_internships")
    @roles_required(Role.STUDENT)
    def my_internships():
        actor = current_actor()

        if request.method == "POST":
            try:
                container.internship_service.submit(
                    actor,
                    **{name: request.form.get(name, "") for name in _FORM_FIELDS},
                )
                flash("Internship submitted for approval.", "success")
                return redirect(url_for("my_internships"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("submitting internship failed")
                flash("System error while submitting the internship", "danger")

        rows = container.internship_service.list_mine(actor)
        return render_template(
            "internships/index.html",
            internships=rows,
            modes=[m.value for m in InternshipMode],
            active_page="internships",
        )

    @app.route("/mentor/internships", endpoint="mentor_internships")
    @roles_required(Role.COLLEGE_MENTOR)
    def mentor_internships():
        rows = container.internship_service.list_for_mentor(current_actor())
        return render_template("internships/review.html", internships=rows, active_page="internships")

    @app.route("/internships/<internship_id>/approve", methods=["POST"], endpoint="approve_internship")
    @roles_required(Role.COLLEGE_MENTOR)
    def approve_internship(internship_id: str):
        try:
            container.internship_service.approve(current_actor(), internship_id=internship_id)
            flash("Internship approved.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("approving internship failed")
            flash("System error while approving the internship", "danger")
        return redirect(url_for("mentor_internships"))
