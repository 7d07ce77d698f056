"""Configuration management for Furikaeri."""

import base64
import binascii
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urldefrag

logger = logging.getLogger(__name__)

FURIKAERI_HOME = Path(os.environ.get("FURIKAERI_HOME", Path.home() / "furikaeri"))
CONFIG_FILE = FURIKAERI_HOME / "config" / "furikaeri.conf"
DATA_DIR = FURIKAERI_HOME / "data"
CACHE_DIR = DATA_DIR / "cache"

SHARE_PREFIX = "config="


@dataclass
class Config:
    """Furikaeri configuration."""

    github_repo: str = ""
    github_token: str = ""
    github_branch: str = "main"
    request_timeout: int = 30
    cache_dir: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.github_repo and self.github_token)


def _unquote(value: str) -> str:
    """Strip quotes or an unquoted inline comment from a value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from furikaeri.conf file."""
    path = path or CONFIG_FILE
    config = Config()

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "github_repo":
                config.github_repo = value
            case "github_token":
                config.github_token = value
            case "github_branch":
                config.github_branch = value or "main"
            case "request_timeout":
                try:
                    config.request_timeout = int(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid REQUEST_TIMEOUT: {value!r}")
            case "cache_dir":
                config.cache_dir = value

    return config


def save_config(config: Config, path: Path | None = None) -> None:
    """Write configuration back to furikaeri.conf. The file holds a token, so it is 0600."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f'GITHUB_REPO="{config.github_repo}"',
        f'GITHUB_TOKEN="{config.github_token}"',
        f'GITHUB_BRANCH="{config.github_branch or "main"}"',
        f"REQUEST_TIMEOUT={config.request_timeout}",
    ]
    if config.cache_dir:
        lines.append(f'CACHE_DIR="{config.cache_dir}"')
    path.write_text("\n".join(lines) + "\n")
    path.chmod(0o600)


def resolve_cache_dir(config: Config) -> Path:
    if config.cache_dir:
        return Path(config.cache_dir).expanduser()
    return CACHE_DIR


# ============== Share links ==============


def generate_share_url(config: Config, base_url: str) -> str | None:
    """
    Build a link that carries the GitHub settings in its fragment.

    Returns None when repo or token is not configured.
    """
    if not config.has_credentials:
        return None

    payload = json.dumps(
        {
            "repo": config.github_repo,
            "token": config.github_token,
            "branch": config.github_branch or "main",
        }
    )
    encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    base, _ = urldefrag(base_url)
    return f"{base}#{SHARE_PREFIX}{encoded}"


def load_config_from_url(url: str, base: Config | None = None) -> tuple[Config | None, str]:
    """
    Decode settings from a share link's fragment.

    Returns (config, url_without_fragment). Config is None when the link has
    no config fragment or it cannot be decoded. Fields missing from the link
    keep their values from ``base``.
    """
    stripped, fragment = urldefrag(url)
    if not fragment.startswith(SHARE_PREFIX):
        return None, url

    try:
        raw = base64.b64decode(fragment[len(SHARE_PREFIX):], validate=True)
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise ValueError("config payload is not an object")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        logger.warning(f"Failed to parse config from URL: {e}")
        return None, stripped

    current = base or Config()
    config = Config(
        github_repo=data.get("repo") or current.github_repo,
        github_token=data.get("token") or current.github_token,
        github_branch=data.get("branch") or current.github_branch or "main",
        request_timeout=current.request_timeout,
        cache_dir=current.cache_dir,
    )
    return config, stripped
