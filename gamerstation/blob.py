"""Public blob storage URL helpers."""

from typing import Optional

from decouple import config

BLOB_BASE_ENV_VARS = ("BLOB_BASE_URL", "NEXT_PUBLIC_BLOB_BASE_URL")


def _normalize_path(path: Optional[str]) -> str:
    return str(path if path is not None else "").strip().lstrip("/")


def _normalize_base(base: Optional[str]) -> str:
    return str(base if base is not None else "").strip().rstrip("/")


def get_blob_base_url() -> str:
    """Configured blob origin, preferring the server-only variable."""
    for name in BLOB_BASE_ENV_VARS:
        value = config(name, default="")
        if value:
            return value
    return ""


def blob_url(path: Optional[str], base: Optional[str] = None) -> str:
    """Resolve a blob pathname to a public URL.

    Returns an absolute URL when a base is configured, otherwise a
    root-relative ``/<path>``. An empty path resolves to ``/``.
    """
    pathname = _normalize_path(path)
    if not pathname:
        return "/"

    if base is None:
        base = get_blob_base_url()
    if not base:
        return f"/{pathname}"

    return f"{_normalize_base(base)}/{pathname}"


blob = blob_url
