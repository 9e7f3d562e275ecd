"""GitHub REST API client with pagination, rate limiting and retry logic."""

import time
import logging
import os
from typing import List, Optional, Dict, Any
import requests

from orgclone.domain.repository import Organization

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails."""
    pass


class AuthenticationError(GitHubAPIError):
    """Raised when GitHub rejects the token."""
    pass


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class ClientInitializationError(Exception):
    """Raised when the API client cannot be constructed."""
    pass


class GitHubRESTClient:
    """Client for the GitHub REST API, scoped to the authenticated user."""

    DEFAULT_HOST = "github.com"
    MAX_RETRIES = 5
    RETRY_DELAY_SECONDS = 1
    PER_PAGE = 100
    TIMEOUT_SECONDS = 30

    def __init__(self, token: Optional[str] = None, host: Optional[str] = None):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub access token. If None, uses GITHUB_TOKEN, then GH_TOKEN.
            host: GitHub host. If None, uses GH_HOST, then github.com.

        Raises:
            ClientInitializationError: If no token is available
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
        if not token:
            raise ClientInitializationError(
                "No GitHub token found. Set GITHUB_TOKEN or GH_TOKEN."
            )
        if host is None:
            host = os.getenv("GH_HOST", self.DEFAULT_HOST)

        self.token = token
        self.host = host
        self.api_url = self._api_url_for(host)
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
        }

    @staticmethod
    def _api_url_for(host: str) -> str:
        if host == "github.com":
            return "https://api.github.com"
        # GitHub Enterprise Server
        return f"https://{host}/api/v3"

    def _request(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Issue a GET request with retry logic.

        Args:
            url: Absolute URL to fetch
            params: Query parameters

        Returns:
            The successful response

        Raises:
            AuthenticationError: If the token is rejected
            RateLimitExceeded: If rate limit is exceeded after retries
            GitHubAPIError: If request fails after retries
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                response = requests.get(
                    url,
                    params=params,
                    headers=self.headers,
                    timeout=self.TIMEOUT_SECONDS
                )
            except requests.exceptions.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.RETRY_DELAY_SECONDS * (2 ** attempt)  # Exponential backoff
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. Retrying in {delay}s...")
                    time.sleep(delay)
                    continue
                raise GitHubAPIError(f"Request to {url} failed: {e}") from e

            if response.status_code == 200:
                return response

            if response.status_code == 401:
                raise AuthenticationError("Authentication failed. Check your GitHub token.")

            if response.status_code == 403:
                remaining = int(response.headers.get("X-RateLimit-Remaining", 1))
                reset_time = int(response.headers.get("X-RateLimit-Reset", 0))

                if remaining == 0:
                    if attempt < self.MAX_RETRIES - 1:
                        wait_time = max(reset_time - int(time.time()), 0) + 10
                        logger.warning(f"Rate limit exceeded. Waiting {wait_time} seconds...")
                        time.sleep(wait_time)
                        continue
                    raise RateLimitExceeded("Rate limit exceeded")
                raise GitHubAPIError(f"Forbidden: {response.text}")

            if response.status_code >= 500:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.RETRY_DELAY_SECONDS * (2 ** attempt)  # Exponential backoff
                    logger.warning(f"Server error {response.status_code} (attempt {attempt + 1}/{self.MAX_RETRIES}). Retrying in {delay}s...")
                    time.sleep(delay)
                    continue

            raise GitHubAPIError(
                f"GET {url} returned {response.status_code}: {response.text}"
            )

        raise GitHubAPIError("Max retries exceeded")

    def _get_paginated(self, path: str) -> List[Dict[str, Any]]:
        """Fetch every page of a list endpoint, following Link headers."""
        url: Optional[str] = f"{self.api_url}/{path}"
        params: Optional[Dict[str, Any]] = {"per_page": self.PER_PAGE}
        items: List[Dict[str, Any]] = []

        while url:
            response = self._request(url, params)
            try:
                page = response.json()
            except ValueError as e:
                raise GitHubAPIError(f"Invalid JSON from {url}: {e}") from e
            if not isinstance(page, list):
                raise GitHubAPIError(f"Expected a list from {url}, got {type(page).__name__}")
            items.extend(page)

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        return items

    def list_organizations(self) -> List[Organization]:
        """
        Fetch organizations the authenticated user is a member of.

        Returns:
            Organizations in the order the API lists them
        """
        orgs = [Organization(login=item["login"]) for item in self._get_paginated("user/orgs")]
        logger.info(f"Fetched {len(orgs)} organizations")
        return orgs

    def list_organization_repositories(self, login: str) -> List[Dict[str, Any]]:
        """
        Fetch the raw repository payloads of one organization.

        Args:
            login: Organization login

        Returns:
            Repository payloads in the order the API lists them
        """
        repos = self._get_paginated(f"orgs/{login}/repos")
        logger.info(f"Fetched {len(repos)} repositories for {login}")
        return repos
