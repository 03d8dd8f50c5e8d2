from __future__ import annotations

from flask import Blueprint, jsonify

from app.fairgroup.db import db_session
from app.fairgroup.modules.public.service import THANK_YOU_MESSAGE, create_public_contact
from app.fairgroup.utils import json_body

bp = Blueprint("public", __name__)


@bp.post("/signup")
def signup():
    s = db_session()
    create_public_contact(s, json_body())
    s.commit()
    return jsonify({"message": THANK_YOU_MESSAGE}), 201
