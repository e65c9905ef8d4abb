"""
WordPress REST API adapter for publishing articles.

Provides integration with WordPress sites using the WordPress REST API v2
and Application Password authentication. Every failure is raised as a
single WordPressError carrying a WordPressErrorKind.
"""

import base64
import ipaddress
import logging
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlparse

import httpx

logger = logging.getLogger(__name__)

WP_USER_AGENT = "ArticleForge/1.0 (+WordPress REST client)"

_BLOCKED_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}


class WordPressErrorKind(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    REST_API_UNAVAILABLE = "rest_api_unavailable"
    CONNECTION_FAILED = "connection_failed"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    WordPressErrorKind.INVALID_CREDENTIALS: (
        "Invalid credentials. Please check your username and password."
    ),
    WordPressErrorKind.REST_API_UNAVAILABLE: (
        "WordPress REST API not found. Please ensure your site has REST API enabled."
    ),
    WordPressErrorKind.CONNECTION_FAILED: (
        "Failed to connect to WordPress site. Please check your site URL and credentials."
    ),
}


class WordPressError(Exception):
    """Raised for any failed WordPress call."""

    def __init__(
        self,
        kind: WordPressErrorKind,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.kind = kind
        self.detail = detail
        self.status_code = status_code
        super().__init__(kind.message)


def classify_status(status_code: int) -> WordPressErrorKind:
    """Map an HTTP error status onto an error kind."""
    if status_code == 401:
        return WordPressErrorKind.INVALID_CREDENTIALS
    if status_code == 404:
        return WordPressErrorKind.REST_API_UNAVAILABLE
    return WordPressErrorKind.CONNECTION_FAILED


def ensure_public_url(url: str, label: str = "URL") -> None:
    """
    Reject URLs the server must not fetch: non-HTTP schemes, localhost and
    private, loopback, link-local or reserved IP addresses.

    Raises:
        ValueError: If the URL is not a public http(s) address.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"Invalid {label}")

    hostname = parsed.hostname.lower()
    if hostname in _BLOCKED_HOSTS:
        raise ValueError(f"{label} cannot point to localhost")

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return  # hostname is not an IP
    if ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved:
        raise ValueError(f"{label} cannot point to a private network")


def normalize_site_url(site_url: str) -> str:
    """
    Normalize a user-entered site URL and reject internal targets.

    Adds ``https://`` when no scheme is given and strips trailing slashes.

    Raises:
        ValueError: If the URL has no host or points at localhost or a
            private network.
    """
    url = site_url.strip()
    if "://" not in url:
        url = f"https://{url}"
    url = url.rstrip("/")

    ensure_public_url(url, label="WordPress URL")
    return url


class WordPressAdapter:
    """
    WordPress REST API adapter for content publishing.

    Uses WordPress Application Passwords for authentication via Basic Auth.
    Supports probing credentials, creating, updating, listing and deleting
    posts, and uploading media.
    """

    def __init__(
        self,
        site_url: str,
        username: str,
        app_password: str,
        timeout: float = 30,
        probe_timeout: float = 10,
    ):
        """
        Initialize WordPress adapter.

        Args:
            site_url: WordPress site URL (e.g., "https://example.com")
            username: WordPress username
            app_password: WordPress Application Password (spaces are stripped)
            timeout: Request timeout in seconds for regular calls
            probe_timeout: Request timeout in seconds for the credential probe
        """
        self.site_url = site_url.rstrip("/")
        self.username = username
        self.app_password = app_password.replace(" ", "")
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def api_base_url(self) -> str:
        return f"{self.site_url}/wp-json/wp/v2"

    def _auth_header(self) -> str:
        credentials = f"{self.username}:{self.app_password}"
        return f"Basic {base64.b64encode(credentials.encode()).decode()}"

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client with auth headers."""
        if self._client is None:
            # No default Content-Type: json= and files= set their own
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": self._auth_header(),
                    "Accept": "application/json",
                    "User-Agent": WP_USER_AGENT,
                },
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self):
        """Close the HTTP client connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _build_url(self, endpoint: str) -> str:
        return urljoin(self.api_base_url + "/", endpoint)

    async def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Send one request and classify failures.

        Raises:
            WordPressError: On an HTTP error status or a transport failure.
        """
        client = self._get_client()
        try:
            response = await client.request(method, self._build_url(endpoint), **kwargs)
        except httpx.TimeoutException as e:
            logger.error("WordPress %s %s timed out: %s", method, endpoint, e)
            raise WordPressError(WordPressErrorKind.CONNECTION_FAILED, "Connection timeout") from e
        except httpx.HTTPError as e:
            logger.error("WordPress %s %s failed: %s", method, endpoint, e)
            raise WordPressError(WordPressErrorKind.CONNECTION_FAILED, str(e)) from e

        if response.status_code >= 400:
            kind = classify_status(response.status_code)
            detail = response.text[:200] if response.text else None
            logger.error(
                "WordPress API error [%s] on %s %s: %s",
                response.status_code,
                method,
                endpoint,
                detail,
            )
            raise WordPressError(kind, detail, status_code=response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error("Failed to parse WordPress API response: %s", e)
            raise WordPressError(
                WordPressErrorKind.CONNECTION_FAILED, "Invalid JSON response"
            ) from e

    async def test_connection(self) -> Dict[str, Any]:
        """
        Probe ``users/me`` with the probe timeout.

        Returns:
            Blog info with site_url, site_name, user_role and capabilities
        """
        logger.info("Testing WordPress connection to %s", self.site_url)
        response = await self._request("GET", "users/me", timeout=self.probe_timeout)
        user_data = self._json(response)

        roles = user_data.get("roles") or []
        logger.info("WordPress connection successful as %s", user_data.get("name", "unknown"))
        return {
            "site_url": self.site_url,
            "site_name": user_data.get("name"),
            "user_role": roles[0] if roles else "unknown",
            "capabilities": user_data.get("capabilities") or {},
        }

    async def upload_media(
        self,
        image_url: str,
        filename: Optional[str] = None,
        alt_text: str = "",
    ) -> Dict[str, Any]:
        """
        Download an image and upload it to the media library.

        Returns:
            Media object with id, source_url, etc.
        """
        try:
            ensure_public_url(image_url, label="Image URL")
        except ValueError as e:
            logger.warning("Refusing to download image %s: %s", image_url, e)
            raise WordPressError(WordPressErrorKind.CONNECTION_FAILED, str(e)) from e

        # Redirects are not followed; a public URL could bounce to an internal one
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=False
            ) as download_client:
                image_response = await download_client.get(image_url)
                image_response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to download image %s: %s", image_url, e)
            raise WordPressError(
                WordPressErrorKind.CONNECTION_FAILED, f"Image download failed: {e}"
            ) from e

        content_type = image_response.headers.get("content-type", "image/jpeg").split(";")[0]
        if not filename:
            name = urlparse(image_url).path.rsplit("/", 1)[-1] or "image"
            extension = content_type.split("/")[-1] if content_type.startswith("image/") else "jpg"
            filename = name if "." in name else f"{name}.{extension}"

        data = {"alt_text": alt_text} if alt_text else {}
        logger.info("Uploading image to WordPress: %s (%d bytes)", filename, len(image_response.content))
        response = await self._request(
            "POST",
            "media",
            files={"file": (filename, image_response.content, content_type)},
            data=data,
        )
        media = self._json(response)
        logger.info("Media uploaded. ID: %s, URL: %s", media.get("id"), media.get("source_url"))
        return media

    async def create_post(
        self,
        title: str,
        content: str,
        status: str = "draft",
        categories: Optional[List[int]] = None,
        featured_media_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Create a new WordPress post.

        Returns:
            Post object with id, link, status, etc.
        """
        post_data: Dict[str, Any] = {"title": title, "content": content, "status": status}
        if categories:
            post_data["categories"] = categories
        if featured_media_id:
            post_data["featured_media"] = featured_media_id

        logger.info("Creating WordPress post: %s (status: %s)", title, status)
        post = self._json(await self._request("POST", "posts", json=post_data))
        logger.info("Post created. ID: %s, Link: %s", post.get("id"), post.get("link"))
        return post

    async def update_post(self, post_id: int, **fields) -> Dict[str, Any]:
        """Update an existing post. None-valued fields are not sent."""
        update_data = {k: v for k, v in fields.items() if v is not None}
        logger.info("Updating WordPress post %s", post_id)
        return self._json(await self._request("POST", f"posts/{post_id}", json=update_data))

    async def delete_post(self, post_id: int, force: bool = False) -> Dict[str, Any]:
        """Move a post to the trash, or delete it permanently with ``force``."""
        logger.info("Deleting WordPress post %s (force=%s)", post_id, force)
        params = {"force": "true"} if force else None
        return self._json(await self._request("DELETE", f"posts/{post_id}", params=params))

    async def list_posts(self, page: int = 1, per_page: int = 10) -> Dict[str, Any]:
        """
        List posts with embedded media.

        Returns:
            ``{posts, total, total_pages}``; totals come from the
            X-WP-Total and X-WP-TotalPages headers.
        """
        response = await self._request(
            "GET",
            "posts",
            params={"page": page, "per_page": per_page, "_embed": "true"},
        )
        posts = [self._summarize_post(post) for post in self._json(response)]
        return {
            "posts": posts,
            "total": int(response.headers.get("X-WP-Total", 0) or 0),
            "total_pages": int(response.headers.get("X-WP-TotalPages", 0) or 0),
        }

    @staticmethod
    def _summarize_post(post: Dict[str, Any]) -> Dict[str, Any]:
        media = ((post.get("_embedded") or {}).get("wp:featuredmedia") or [{}])[0]
        return {
            "id": post.get("id"),
            "title": (post.get("title") or {}).get("rendered", ""),
            "content": (post.get("content") or {}).get("rendered", ""),
            "excerpt": (post.get("excerpt") or {}).get("rendered", ""),
            "status": post.get("status"),
            "date": post.get("date"),
            "link": post.get("link"),
            "featured_image": media.get("source_url"),
        }
