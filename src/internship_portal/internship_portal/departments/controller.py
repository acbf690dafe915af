from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_actor, form_flag, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InviteDeliveryError, ValidationError
from ..provisioning.messages import flash_provision_result

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    institute_only = roles_required(Role.INSTITUTE_COORDINATOR)

    @app.route("/departments", methods=["GET", "POST"], endpoint="departments")
    @institute_only
    def departments():
        actor = current_actor()

        if request.method == "POST":
            try:
                result = container.department_service.add_department(
                    actor,
                    department_name=request.form.get("departmentName", ""),
                    coordinator_name=request.form.get("departmentCoordinatorName", ""),
                    email=request.form.get("email", ""),
                    send_invite=form_flag(request.form, "sendInvite"),
                )
                flash_provision_result(
                    result,
                    role=Role.DEPARTMENT_COORDINATOR,
                    added_message="Department added successfully.",
                )
                return redirect(url_for("departments"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("adding department failed")
                flash("System error while adding the department", "danger")

        rows = container.department_service.list_departments(actor)
        return render_template("departments/index.html", departments=rows, active_page="departments")

    @app.route("/departments/<user_id>/delete", methods=["POST"], endpoint="delete_department")
    @institute_only
    def delete_department(user_id: str):
        try:
            container.department_service.delete_department(current_actor(), user_id=user_id)
            flash("Department deleted.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("deleting department failed")
            flash("System error while deleting the department", "danger")
        return redirect(url_for("departments"))

    @app.route("/departments/<user_id>/invite", methods=["POST"], endpoint="resend_department_invite")
    @institute_only
    def resend_department_invite(user_id: str):
        try:
            container.department_service.resend_invite(current_actor(), user_id=user_id)
            flash("Invite email sent.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except InviteDeliveryError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("resending department invite failed")
            flash("The invite email could not be sent", "danger")
        return redirect(url_for("departments"))
