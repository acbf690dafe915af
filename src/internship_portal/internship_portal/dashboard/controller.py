from __future__ import annotations

from flask import Flask, render_template

from ..common.web import current_actor, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        actor = current_actor()
        data = container.dashboard_service.for_user(actor)
        return render_template("dashboard.html", dashboard=data, actor=actor, active_page="dashboard")
