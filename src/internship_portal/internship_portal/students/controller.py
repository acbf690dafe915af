from __future__ import annotations

import io
import logging
from datetime import datetime

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int
from ..common.web import current_actor, form_flag, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InviteDeliveryError, ValidationError
from ..provisioning.messages import flash_provision_result

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    coordinators = roles_required(Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)
    viewers = roles_required(Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR, Role.COLLEGE_MENTOR)

    @app.route("/students", methods=["GET", "POST"], endpoint="students")
    @viewers
    def students():
        actor = current_actor()

        if request.method == "POST":
            if actor.role == Role.COLLEGE_MENTOR:
                flash("You do not have permission to do this", "danger")
                return redirect(url_for("students"))
            try:
                dob_raw = (request.form.get("dob") or "").strip()
                result = container.student_service.add_student(
                    actor,
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    academic_year=request.form.get("academic_year"),
                    department_id=request.form.get("department_id") or None,
                    college_mentor_id=request.form.get("college_mentor_id") or None,
                    send_invite=form_flag(request.form, "sendInvite"),
                    contact=optional_int(request.form.get("contact"), "Contact"),
                    dob=parse_iso_date(dob_raw, "Date of birth") if dob_raw else None,
                )
                flash_provision_result(
                    result,
                    role=Role.STUDENT,
                    added_message="Student added successfully.",
                )
                return redirect(url_for("students"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("adding student failed")
                flash("System error while adding the student", "danger")

        rows = container.student_service.list_students(actor)
        departments = []
        mentors = []
        if actor.role != Role.COLLEGE_MENTOR:
            departments = container.department_service.list_choices(actor)
            mentors = container.mentor_service.list_mentors(actor)
        return render_template(
            "students/index.html",
            students=rows,
            departments=departments,
            mentors=mentors,
            can_manage=actor.role != Role.COLLEGE_MENTOR,
            active_page="students",
        )

    @app.route("/students/<user_id>/mentor", methods=["POST"], endpoint="assign_student_mentor")
    @coordinators
    def assign_student_mentor(user_id: str):
        try:
            container.student_service.assign_mentor(
                current_actor(),
                student_id=user_id,
                college_mentor_id=request.form.get("college_mentor_id") or None,
            )
            flash("Mentor updated.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("assigning mentor failed")
            flash("System error while updating the student", "danger")
        return redirect(url_for("students"))

    @app.route("/students/<user_id>/delete", methods=["POST"], endpoint="delete_student")
    @coordinators
    def delete_student(user_id: str):
        try:
            container.student_service.delete_student(current_actor(), user_id=user_id)
            flash("Student deleted.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("deleting student failed")
            flash("System error while deleting the student", "danger")
        return redirect(url_for("students"))

    @app.route("/students/<user_id>/invite", methods=["POST"], endpoint="resend_student_invite")
    @coordinators
    def resend_student_invite(user_id: str):
        try:
            container.student_service.resend_invite(current_actor(), user_id=user_id)
            flash("Invite email sent.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except InviteDeliveryError as e:
            flash(str(e), "warning")
        return redirect(url_for("students"))

    @app.route("/students/export", endpoint="export_students")
    @viewers
    def export_students():
        try:
            content = container.student_service.export_students(current_actor())
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
            return redirect(url_for("students"))

        filename = f"students_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
        return send_file(io.BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)
