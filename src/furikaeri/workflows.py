"""Shared workflow layer for the CLI.

Wires config to adapters and hands back a hydrated orchestrator.
"""

from .adapters.file_mirror import FileMirror
from .adapters.github_contents import GitHubContentsStore
from .config import Config, resolve_cache_dir
from .core.session import Session
from .sync import SyncOrchestrator


def get_mirror(config: Config) -> FileMirror:
    """Resolve mirror directory from config."""
    return FileMirror(resolve_cache_dir(config))


def get_remote(config: Config) -> GitHubContentsStore:
    return GitHubContentsStore(config)


def build_orchestrator(config: Config, session: Session | None = None) -> SyncOrchestrator:
    return SyncOrchestrator(session or Session(), get_mirror(config), get_remote(config))


def open_session(config: Config, offline: bool = False) -> SyncOrchestrator:
    """Build an orchestrator and load documents: mirror only, or mirror then GitHub."""
    orchestrator = build_orchestrator(config)
    if offline:
        orchestrator.load_local()
    else:
        orchestrator.hydrate()
    return orchestrator
