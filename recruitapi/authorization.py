"""Group-based authorization for request handlers."""

from __future__ import annotations

import enum
import logging
from http import HTTPStatus
from typing import Any, Callable, Mapping

from recruitapi.common import HttpResponse, request_error_response

Handler = Callable[[Mapping[str, Any], Mapping[str, Any]], HttpResponse]

USER_GROUP_KEY = "UserGroup"
_GROUPS_CLAIM = "cognito:groups"


class UserGroup(str, enum.Enum):
    """User groups known to the identity provider."""

    ADMIN = "admin"
    USER = "user"


def user_group_from_claims(claims: Mapping[str, str] | None) -> UserGroup:
    """Read the user group from a JWT's ``cognito:groups`` claim, e.g. ``[admin]``."""
    if not claims or _GROUPS_CLAIM not in claims:
        raise ValueError("user group (cognito:groups claim) not found in JWT claims")
    raw = claims[_GROUPS_CLAIM]
    inner = raw.removeprefix("[")
    if not (raw.startswith("[") and inner.endswith("]")):
        raise ValueError(f"failed to inspect user group from JWT group claims: {inner.removesuffix(']')}")
    inner = inner[:-1]
    try:
        return UserGroup(inner)
    except ValueError:
        raise ValueError(f"invalid user group: {inner}") from None


def _jwt_claims(request: Mapping[str, Any]) -> Mapping[str, str] | None:
    context = request.get("requestContext") or {}
    authorizer = context.get("authorizer") or {}
    jwt = authorizer.get("jwt") or {}
    return jwt.get("claims")


def authorization_middleware(next_handler: Handler, logger: Any, *args: UserGroup | str) -> Handler:
    """Wrap ``next_handler`` so only members of the given groups reach it.

    The caller's group is added to the context under ``USER_GROUP_KEY``.
    """
    allowed_groups = tuple(UserGroup(group) for group in args)
    forbidden = int(HTTPStatus.FORBIDDEN)

    def handler(ctx: Mapping[str, Any], request: Mapping[str, Any]) -> HttpResponse:
        group: UserGroup | None = None
        failure: ValueError | None = None
        try:
            group = user_group_from_claims(_jwt_claims(request))
        except ValueError as err:
            failure = err
        logger.log(
            "User Group information retrieved from JWT claims",
            logging.INFO,
            "UserGroup",
            group.value if group is not None else "",
        )
        if failure is not None:
            return request_error_response(forbidden, f"Failed to get user group {failure}", logger)
        if group not in allowed_groups:
            return request_error_response(forbidden, "Not authorized to perform operation", logger)
        logger.log("User is whitelisted", logging.INFO, "AllowedGroups", allowed_groups[0].value)
        return next_handler({**ctx, USER_GROUP_KEY: group}, request)

    return handler