from __future__ import annotations

"""
HTTP file server for a Files collection.

Exposes the virtual filesystem over HTTP with FastAPI so embedded assets
can be served exactly like a directory on disk.

Usage:
    from embedfs.interface.web.app import create_app

    assets = new_static_assets(Config(use_embedded=True))
    app = create_app(assets)          # then run with any ASGI server
"""

import html
import logging
import mimetypes
from email.utils import formatdate
from typing import List
from urllib.parse import quote

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, Response

from embedfs.core.files import Files
from embedfs.domain.models import FileInfo
from embedfs.infra.fs import join_logical, normalize_logical

logger = logging.getLogger(__name__)

DEFAULT_INDEX_FILE = "index.html"


def create_app(
        files: Files,
        *,
        index_file: str = DEFAULT_INDEX_FILE,
        title: str = "embedfs",
) -> FastAPI:
    """
    Build an ASGI app serving every path of a Files collection.

    Directories answer with their index_file when present, otherwise with
    an HTML listing sorted by name.

    Args:
        files: Collection to serve.
        index_file: Name served for directory requests.
        title: OpenAPI title.

    Returns:
        FastAPI: The application.
    """
    app = FastAPI(title=title)

    @app.get("/{file_path:path}")
    def serve(file_path: str) -> Response:
        name = normalize_logical("/" + file_path)
        try:
            with files.open(name) as handle:
                info = handle.stat()
                if not info.is_dir:
                    return _file_response(info, handle.read())

            try:
                with files.open(join_logical(name, index_file)) as handle:
                    index_info = handle.stat()
                    if not index_info.is_dir:
                        return _file_response(index_info, handle.read())
            except FileNotFoundError:
                pass

            return HTMLResponse(_render_listing(name, files.read_dir(name)))
        except FileNotFoundError:
            raise HTTPException(status_code=404, detail=f"Not found: {name}")
        except OSError as e:
            logger.error(f"Failed to serve '{name}': {e}")
            raise HTTPException(status_code=500, detail="Internal error")

    return app


# -----------------------------------------------------------------------------
# Rendering helpers
# -----------------------------------------------------------------------------

def _file_response(info: FileInfo, data: bytes) -> Response:
    media_type, _ = mimetypes.guess_type(info.name)
    return Response(
        content=data,
        media_type=media_type or "application/octet-stream",
        headers={"Last-Modified": formatdate(info.mod_time, usegmt=True)},
    )


def _render_listing(name: str, entries: List[FileInfo]) -> str:
    rows = []
    for fi in entries:
        href = quote(join_logical(name, fi.name)) + ("/" if fi.is_dir else "")
        label = html.escape(fi.name + ("/" if fi.is_dir else ""))
        rows.append(f'<a href="{href}">{label}</a>')
    return "<pre>\n" + "\n".join(rows) + "\n</pre>\n"
