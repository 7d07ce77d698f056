"""GitHub Contents API adapter - one JSON document per repository file."""

import base64
import binascii
import json
import logging

import requests

from furikaeri.config import Config, load_config
from furikaeri.ports.document_store import RemoteDocument, WriteResult

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
MISSING_SETTINGS = "GitHub settings are required (run 'furikaeri settings set')."


def encode_content(content: dict) -> str:
    """JSON (indent 2, UTF-8) wrapped in base64, as the Contents API expects."""
    text = json.dumps(content, indent=2, ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(encoded: str) -> dict:
    """Inverse of encode_content. The API wraps base64 at 60 columns."""
    raw = base64.b64decode("".join(encoded.split()))
    return json.loads(raw.decode("utf-8"))


def _error_message(resp: requests.Response) -> str:
    try:
        return resp.json().get("message") or f"HTTP {resp.status_code}"
    except (ValueError, AttributeError):
        return f"HTTP {resp.status_code}"


class GitHubContentsStore:
    """
    GitHub Contents API adapter.

    Implements DocumentStore protocol. Writes follow a two-step protocol: read
    the file's current SHA, then PUT against it. The SHA is read again on every
    write, so the window for a concurrent writer is only the gap between those
    two requests; whoever writes last wins.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    def is_configured(self) -> bool:
        return self.config.has_credentials

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.github_token}",
            "Accept": "application/vnd.github+json",
        }

    def _contents_url(self, path: str) -> str:
        return f"{API_BASE}/repos/{self.config.github_repo}/contents/{path}"

    def _get_contents(self, path: str) -> dict | None:
        """Raw Contents API payload for a file, or None if unconfigured, missing or unreachable."""
        if not self.is_configured():
            return None

        try:
            resp = self._session.get(
                self._contents_url(path),
                params={"ref": self.config.github_branch},
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"GitHub fetch of {path} failed: {e}")
            return None

        if not resp.ok:
            if resp.status_code != 404:
                logger.warning(f"GitHub fetch of {path} returned {resp.status_code}: {_error_message(resp)}")
            return None

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"GitHub returned a non-JSON response for {path}: {e}")
            return None
        return data if isinstance(data, dict) else None

    def fetch_document(self, path: str) -> RemoteDocument | None:
        """Read a document. Returns None if unconfigured, missing, or unreadable."""
        data = self._get_contents(path)
        if data is None:
            return None

        try:
            content = decode_content(data["content"])
            if not isinstance(content, dict):
                raise ValueError("document is not a JSON object")
            return RemoteDocument(path=path, content=content, revision=data["sha"])
        except (ValueError, KeyError, TypeError, binascii.Error) as e:
            logger.error(f"GitHub returned an unreadable {path}: {e}")
            return None

    def read_revision(self, path: str) -> str | None:
        """
        Current SHA of a file, or None when it does not exist yet.

        The content is not decoded, so a file that exists but is not valid
        JSON still yields its SHA and can be overwritten.
        """
        data = self._get_contents(path)
        return data.get("sha") if data else None

    def put_document(self, path: str, content: dict, revision: str | None) -> WriteResult:
        """PUT a document. ``revision`` must come from an immediately preceding read."""
        if not self.is_configured():
            return WriteResult(False, MISSING_SETTINGS)

        body = {
            "message": f"Update {path}",
            "content": encode_content(content),
            "branch": self.config.github_branch,
        }
        if revision:
            body["sha"] = revision

        try:
            resp = self._session.put(
                self._contents_url(path),
                json=body,
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"GitHub save of {path} failed: {e}")
            return WriteResult(False, f"Save error: {e}")

        if not resp.ok:
            message = _error_message(resp)
            logger.error(f"GitHub save of {path} returned {resp.status_code}: {message}")
            return WriteResult(False, f"Save error: {message}")

        return WriteResult(True, "Saved")

    def write_document(
        self, path: str, content: dict, known_revision: str | None = None
    ) -> WriteResult:
        """
        Read the current revision, then write against it.

        ``known_revision`` is accepted for callers that hold one but is never
        used: the write always goes out against the SHA read just before it.
        """
        if not self.is_configured():
            return WriteResult(False, MISSING_SETTINGS)

        revision = self.read_revision(path)
        if known_revision and revision != known_revision:
            logger.debug(f"{path} moved from {known_revision} to {revision} since last read")
        return self.put_document(path, content, revision)

    def test_connection(self) -> WriteResult:
        """Check that the repository is reachable with the configured token."""
        if not self.is_configured():
            return WriteResult(False, "Settings are required")

        try:
            resp = self._session.get(
                f"{API_BASE}/repos/{self.config.github_repo}",
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            return WriteResult(False, str(e))

        if resp.ok:
            return WriteResult(True, "Connected!")
        return WriteResult(False, _error_message(resp))
