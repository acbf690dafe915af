from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = bool(remember)
                session.update(s_user.to_session())

                flash("Logged in successfully!", "success")
                return redirect(url_for("dashboard"))
            except (AuthenticationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while logging in: {e}", "danger")
                else:
                    flash("System error while logging in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/roles/switch", methods=["POST"], endpoint="switch_role")
    @login_required
    def switch_role():
        try:
            role = Role(request.form.get("role", ""))
            s_user = container.auth_service.switch_role(session["user_id"], role)
            permanent = session.permanent
            session.clear()
            session.permanent = permanent
            session.update(s_user.to_session())
            flash(f"Switched to {role.label}.", "info")
        except ValueError:
            flash("Unknown role", "danger")
        except (AuthenticationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("dashboard"))

    @app.route("/invites/<token>", methods=["GET", "POST"], endpoint="accept_invite")
    def accept_invite(token: str):
        try:
            _, user = container.invite_service.get_pending(token)
        except AuthenticationError as e:
            flash(str(e), "danger")
            return redirect(url_for("login"))

        if request.method == "POST":
            try:
                container.invite_service.accept(
                    token,
                    password=request.form.get("password", ""),
                    confirm=request.form.get("confirm_password", ""),
                )
                flash("Your account is ready. Please log in.", "success")
                return redirect(url_for("login"))
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("accepting invite failed")
                flash("System error while activating your account", "danger")

        return render_template("accept_invite.html", user=user, token=token)
