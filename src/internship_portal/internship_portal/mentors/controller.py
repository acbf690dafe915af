from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_int
from ..common.web import current_actor, form_flag, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InviteDeliveryError, ValidationError
from ..provisioning.messages import flash_provision_result

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    coordinators = roles_required(Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)

    @app.route("/mentors", methods=["GET", "POST"], endpoint="mentors")
    @coordinators
    def mentors():
        actor = current_actor()

        if request.method == "POST":
            try:
                result = container.mentor_service.add_mentor(
                    actor,
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    department_id=request.form.get("department_id") or None,
                    send_invite=form_flag(request.form, "sendInvite"),
                    contact=optional_int(request.form.get("contact"), "Contact"),
                )
                flash_provision_result(
                    result,
                    role=Role.COLLEGE_MENTOR,
                    added_message="Mentor added successfully.",
                )
                return redirect(url_for("mentors"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("adding mentor failed")
                flash("System error while adding the mentor", "danger")

        rows = container.mentor_service.list_mentors(actor)
        departments = container.department_service.list_choices(actor)
        return render_template(
            "mentors/index.html",
            mentors=rows,
            departments=departments,
            active_page="mentors",
        )

    @app.route("/mentors/<user_id>/delete", methods=["POST"], endpoint="delete_mentor")
    @coordinators
    def delete_mentor(user_id: str):
        try:
            unassigned = container.mentor_service.delete_mentor(current_actor(), user_id=user_id)
            flash("Mentor deleted.", "success")
            if unassigned:
                flash(f"{unassigned} student(s) no longer have a mentor.", "warning")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("deleting mentor failed")
            flash("System error while deleting the mentor", "danger")
        return redirect(url_for("mentors"))

    @app.route("/mentors/<user_id>/invite", methods=["POST"], endpoint="resend_mentor_invite")
    @coordinators
    def resend_mentor_invite(user_id: str):
        try:
            container.mentor_service.resend_invite(current_actor(), user_id=user_id)
            flash("Invite email sent.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except InviteDeliveryError as e:
            flash(str(e), "warning")
        return redirect(url_for("mentors"))
