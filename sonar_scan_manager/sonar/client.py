# This file is intended to hold the setup for the authenticated httpx client.

"""Sets up the authenticated httpx client for the SonarQube Web API."""

import httpx

from sonar_scan_manager.configuration.models import SonarAuthenticationType


def get_sonar_token_client(sonar_token: str, sonar_url: str) -> httpx.AsyncClient:
    """Returns an httpx client authenticated with a SonarQube user token.

    SonarQube expects the token as the basic auth user with an empty password.
    """
    return httpx.AsyncClient(base_url=sonar_url, auth=httpx.BasicAuth(sonar_token, ""))


def get_sonar_basic_client(sonar_user: str, sonar_password: str, sonar_url: str) -> httpx.AsyncClient:
    """Returns an httpx client authenticated with a SonarQube user and password."""
    return httpx.AsyncClient(base_url=sonar_url, auth=httpx.BasicAuth(sonar_user, sonar_password))


def get_sonar_client(
    sonar_auth_type: SonarAuthenticationType,
    sonar_token: str | None,
    sonar_user: str | None,
    sonar_password: str | None,
    sonar_url: str,
) -> httpx.AsyncClient:
    """Returns an authenticated httpx client using either a token or user/password credentials.

    Raises RuntimeError if the credentials required by the authentication type are missing.
    """
    if sonar_auth_type == SonarAuthenticationType.TOKEN:
        if not sonar_token:
            raise RuntimeError("SonarQube token authentication requires sonar_token in config.")
        return get_sonar_token_client(sonar_token, sonar_url)
    elif sonar_auth_type == SonarAuthenticationType.BASIC:
        if not (sonar_user and sonar_password):
            raise RuntimeError("SonarQube basic authentication requires sonar_user and sonar_password in config.")
        return get_sonar_basic_client(sonar_user, sonar_password, sonar_url)
    raise RuntimeError(f"Unsupported SonarQube authentication type: {sonar_auth_type}")
