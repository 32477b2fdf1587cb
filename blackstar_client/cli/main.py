from __future__ import annotations

import contextlib
import json
import mimetypes
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import requests

from ..application.collection import ChunkCollection
from ..application.dto import ClientOptions
from ..client import Client
from ..domain.errors import ContractError
from ..domain.models import Chunk, MediaFile
from ..infrastructure.config import blackstar_url, is_truthy
from ..infrastructure.logging import get_logger
from .parsers import build_parser

logger = get_logger("blackstar_client.cli")


def _parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse a simple .env file (KEY=VALUE per line, '#' comments, quotes stripped)."""
    env: Dict[str, str] = {}
    if dotenv_path.exists():
        with contextlib.suppress(OSError):
            for raw in dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines():
                s = raw.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k:
                    env[k] = v
    return env


def _env_get(key: str) -> Optional[str]:
    """Get environment value from process env, falling back to .env in CWD."""
    v = os.getenv(key)
    if v is not None and v.strip():
        return v.strip()
    local = _parse_dotenv(Path(".env"))
    v2 = local.get(key)
    return v2.strip() if v2 is not None and v2.strip() else None


def build_client(ns) -> Client:
    """Create a Client from --url/--token, falling back to BLACKSTAR_* env/.env values."""
    url = getattr(ns, "url", None) or _env_get("BLACKSTAR_URL") or blackstar_url()
    token = getattr(ns, "token", None) or _env_get("BLACKSTAR_TOKEN")
    show_edit = is_truthy(_env_get("BLACKSTAR_SHOW_EDIT_CONTROLS"))
    return Client(url, ClientOptions(show_edit_controls=show_edit, token=token))


def run(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))

    client = build_client(ns)
    try:
        return dispatch_commands(ns, client)
    except ContractError as ex:
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 2
    except Exception as ex:  # keep CLI concise and user-friendly
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 3
    finally:
        client.close()


def dispatch_commands(ns, client: Client) -> int:
    """
    Dispatches CLI commands to the Blackstar client.

    Commands:
    - get: exactly one of --id / --name / --tag (each repeatable)
    - get-all, tags, admin-search, media-search: read-only listings
    - create, update, delete: chunk writes
    - upload-media, delete-media: media library writes
    - url-for: print the CMS edit URL of a chunk id (no network call)
    """
    if ns.cmd == "get":
        return get_chunks(ns, client)
    if ns.cmd == "get-all":
        return _print_chunks(client.get_all())
    if ns.cmd == "tags":
        print(json.dumps({"status": "ok", "result": client.get_all_tags()}, indent=2))
        return 0
    if ns.cmd == "admin-search":
        return _print_chunks(client.admin_search(str(ns.q)))
    if ns.cmd == "media-search":
        print(json.dumps({"status": "ok", "result": client.media_search(str(ns.q))}, indent=2))
        return 0

    if ns.cmd == "create":
        return _print_response(client.create(_chunk_from_args(ns)))
    if ns.cmd == "update":
        return _print_response(client.update(_chunk_from_args(ns)))
    if ns.cmd == "delete":
        return _print_response(client.delete(int(ns.id)))

    if ns.cmd == "upload-media":
        return upload_media(ns, client)
    if ns.cmd == "delete-media":
        return _print_response(client.delete_media(str(ns.hash)))
    if ns.cmd == "url-for":
        print(json.dumps({"status": "ok", "result": client.url_for({"id": int(ns.id)})}, indent=2))
        return 0

    print(json.dumps({"status": "error", "error": f"Unknown command: {ns.cmd}"}))
    return 2


def _query_from_args(ns) -> Dict[str, Any]:
    """Collect only the selectors given on the command line; validation happens in the client."""
    query: Dict[str, Any] = {}
    for key in ("ids", "names", "tags"):
        values = getattr(ns, key, None)
        if values is not None:
            query[key] = values
    return query


def get_chunks(ns, client: Client) -> int:
    query = _query_from_args(ns)
    logger.info("Get request | query=%s", query)
    return _print_chunks(client.get(query))


def _chunk_from_args(ns) -> Chunk:
    return Chunk(
        id=getattr(ns, "id", None),
        name=str(ns.name),
        tags=tuple(t.strip() for t in (ns.tags or []) if t and t.strip()),
        value=ns.value,
    )


def _load_media_file(path: Path) -> MediaFile:
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return MediaFile(filename=path.name, content=path.read_bytes(), content_type=content_type)


def upload_media(ns, client: Client) -> int:
    paths = [Path(p).expanduser() for p in ns.files]
    missing = [str(p) for p in paths if not p.is_file()]
    if missing:
        print(json.dumps({"status": "error", "error": "File(s) not found", "missing": missing}, indent=2))
        return 2
    files = [_load_media_file(p) for p in paths]
    logger.info("Upload request | files=%d", len(files))
    return _print_response(client.create_media(files))


def _serialize_chunks(chunks: ChunkCollection) -> list:
    return [c.to_dict() for c in chunks]


def _print_chunks(chunks: ChunkCollection) -> int:
    print(json.dumps({"status": "ok", "count": len(chunks), "result": _serialize_chunks(chunks)}, indent=2))
    return 0


def _response_body(r: requests.Response) -> Any:
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


def _print_response(r: requests.Response) -> int:
    print(json.dumps({"status": "ok", "http_status": r.status_code, "result": _response_body(r)}, indent=2))
    return 0


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
