"""User management backed by an identity provider's user pool."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from recruitapi.authorization import UserGroup
from recruitapi.services import AuthProviderAccessParams

_USERNAME_EXISTS = "UsernameExistsException"


def _is_username_exists(err: BaseException | None) -> bool:
    while err is not None:
        if type(err).__name__ == _USERNAME_EXISTS:
            return True
        response = getattr(err, "response", None)
        if isinstance(response, Mapping):
            error = response.get("Error") or {}
            if isinstance(error, Mapping) and error.get("Code") == _USERNAME_EXISTS:
                return True
        err = err.__cause__
    return False


def sub_attribute_value(attributes: Iterable[Mapping[str, Any]] | None) -> str | None:
    """Return the value of the first ``sub`` attribute, or None if it has none."""
    if attributes is None:
        return None
    for attribute in attributes:
        if attribute.get("Name") == "sub":
            return attribute.get("Value")
    return None


class CognitoAuthProvider:
    """Creates and deletes users through an identity-provider admin client.

    The client takes the provider's request shapes as keyword arguments:
    ``admin_create_user``, ``admin_add_user_to_group`` and ``admin_delete_user``.
    """

    def __init__(self, client: Any):
        self._client = client

    def create_user(self, params: AuthProviderAccessParams) -> str:
        """Create the user, add it to the user group and return its ``sub`` identifier."""
        try:
            output = self._client.admin_create_user(
                UserPoolId=params.userpool_id,
                Username=params.email,
                DesiredDeliveryMediums=["EMAIL"],
            )
        except Exception as err:
            if _is_username_exists(err):
                raise RuntimeError(
                    f"user {params.email} already exists in the user pool: {err}"
                ) from err
            raise RuntimeError(
                f"user creation for {params.email} encountered an unexpected issue. "
                f"Please check service configuration or logs for details: {err}"
            ) from err

        user = (output or {}).get("User") or {}
        try:
            self._client.admin_add_user_to_group(
                GroupName=UserGroup.USER.value,
                UserPoolId=params.userpool_id,
                Username=user.get("Username"),
            )
        except Exception as err:
            raise RuntimeError(f"failed to add user to user group: {err}") from err

        cognito_id = sub_attribute_value(user.get("Attributes"))
        if not cognito_id:
            raise RuntimeError("failed to retrieve Cognito 'sub' ID after user creation")
        return cognito_id

    def delete_user(self, params: AuthProviderAccessParams) -> None:
        """Delete the user from the pool."""
        try:
            self._client.admin_delete_user(UserPoolId=params.userpool_id, Username=params.email)
        except Exception as err:
            raise RuntimeError(f"failed to delete user: {err}") from err