"""Chirp endpoints."""

from __future__ import annotations

import uuid

from flask import Blueprint, request

from chirpy.api.deps import (
    chirp_service,
    current_identity,
    json_response,
    no_content,
    require_auth,
    timing,
)
from chirpy.schemas import ChirpCreateSchema, ChirpListQuerySchema, ChirpSchema
from chirpy.services import ChirpCreateIn, ChirpListIn

bp = Blueprint("chirps", __name__)

create_schema = ChirpCreateSchema()
list_query_schema = ChirpListQuerySchema()
chirp_schema = ChirpSchema()
chirps_schema = ChirpSchema(many=True)


@bp.post("")
@timing
@require_auth
def create_chirp():
    """Post a chirp as the authenticated user."""

    data = create_schema.load(request.get_json(silent=True) or {})
    chirp = chirp_service().create_chirp(current_identity(), ChirpCreateIn(body=data["body"]))
    return json_response({"data": chirp_schema.dump(chirp)}, status=201)


@bp.get("")
@timing
def list_chirps():
    """List chirps by creation time, optionally filtered by ``author_id``."""

    query = list_query_schema.load(request.args)
    chirps = chirp_service().list_chirps(
        ChirpListIn(author_id=query["author_id"], sort=query["sort"])
    )
    return json_response({"data": chirps_schema.dump(chirps)})


@bp.get("/<uuid:chirp_id>")
@timing
def get_chirp(chirp_id: uuid.UUID):
    chirp = chirp_service().get_chirp(chirp_id)
    return json_response({"data": chirp_schema.dump(chirp)})


@bp.delete("/<uuid:chirp_id>")
@timing
@require_auth
def delete_chirp(chirp_id: uuid.UUID):
    """Delete a chirp; only its author may do so."""

    chirp_service().delete_chirp(current_identity(), chirp_id)
    return no_content()
