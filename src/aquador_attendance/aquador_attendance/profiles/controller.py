from __future__ import annotations

from flask import Flask, send_file

from ..common.qr import make_qr_png
from ..container import Container
from ..core.exceptions import ProfileNotFound


def register(app: Flask, container: Container) -> None:
    @app.route("/api/profiles/<profile_id>/qr.png", methods=["GET"], endpoint="profile_qr")
    def profile_qr(profile_id: str):
        profile = container.profiles_repo.get_by_id(profile_id)
        if not profile:
            raise ProfileNotFound("Profil introuvable.")

        return send_file(
            make_qr_png(profile.profile_id),
            mimetype="image/png",
            as_attachment=False,
            download_name=f"aquador_qr_{profile.profile_id}.png",
        )
