from rest_framework import serializers

from .scope import parse_group_scope


def scope_from_request(request):
    """Read the ``group`` query parameter; malformed values become a 400."""
    try:
        return parse_group_scope(request.query_params.get("group"))
    except ValueError as exc:
        raise serializers.ValidationError({"group": str(exc)})
