from __future__ import annotations

from flask import flash

from ..core.enums import Role
from .model import ProvisionResult


def flash_provision_result(result: ProvisionResult, *, role: Role, added_message: str) -> None:
    """Turn a provisioning outcome into user-facing flash messages."""
    if result.is_new_user:
        flash(added_message, "success")
    else:
        flash(f"User already exists, assigned {role.label} role.", "success")

    if result.invite_error:
        flash(
            f"The invite email could not be sent ({result.invite_error}). You can resend it later.",
            "warning",
        )
    elif result.invited:
        flash("Invite email sent.", "info")
