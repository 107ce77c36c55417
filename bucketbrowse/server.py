"""WSGI application serving bucket objects, listings and static assets."""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional, Union
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from bucketbrowse.bucket import Bucket, DirectoryBucket, list_directory_contents
from bucketbrowse.mime import path_mime_type
from bucketbrowse.views import render_page

log = logging.getLogger(__name__)

_REASONS = {
    200: "OK",
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
}


@dataclass
class _Response:
    code: int
    body: bytes = b""
    content_type: Optional[str] = None
    extra_headers: list[tuple[str, str]] = field(default_factory=list)

    @property
    def status(self) -> str:
        return f"{self.code} {_REASONS[self.code]}"

    @property
    def headers(self) -> list[tuple[str, str]]:
        headers = list(self.extra_headers)
        if self.content_type is not None:
            headers.append(("Content-Type", self.content_type))
        headers.append(("Content-Length", str(len(self.body))))
        return headers


def _error(code: int, message: str = "") -> _Response:
    return _Response(code, message.encode("utf-8"), "text/plain; charset=utf-8")


def _read_arguments(environ: dict) -> dict:
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    raw = environ["wsgi.input"].read(length) if length > 0 else b""
    content_type = environ.get("CONTENT_TYPE", "")
    if content_type.startswith("application/json"):
        try:
            data = json.loads(raw or b"{}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"malformed JSON body: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object")
        return data
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("body is not valid UTF-8") from exc
    return {name: values[0] for name, values in parse_qs(text, keep_blank_values=True).items()}


class Explorer:
    """Serve bucket objects directly and directory paths as an HTML explorer."""

    def __init__(
        self, bucket: Bucket, assets_dir: Optional[Union[str, os.PathLike]] = None
    ) -> None:
        self.bucket = bucket
        self.assets_dir = Path(assets_dir) if assets_dir is not None else None
        self._server_functions: dict[str, Callable[[dict], _Response]] = {
            "list_directory_contents": self._list_directory_contents,
        }

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        response = self._dispatch(environ)
        start_response(response.status, response.headers)
        return [response.body]

    def _dispatch(self, environ: dict) -> _Response:
        raw_path = environ.get("PATH_INFO", "")
        try:
            path = raw_path.encode("latin-1").decode("utf-8")
        except UnicodeError:
            return _error(500, "request path is not valid UTF-8")
        key_prefix = path.lstrip("/")
        readable = key_prefix or "/"

        if readable.startswith("api/") or readable.endswith("/"):
            return self._route(environ, key_prefix)

        obj = self.bucket.get(key_prefix)
        if obj is None:
            return _Response(404)
        body = obj.body if obj.body is not None else b""
        return _Response(200, body, "application/octet-stream")

    def _route(self, environ: dict, key_prefix: str) -> _Response:
        method = environ.get("REQUEST_METHOD", "GET").upper()
        if key_prefix.startswith("api/"):
            handler = self._server_functions.get(key_prefix[len("api/"):])
            if handler is None:
                return _Response(404)
            if method != "POST":
                return _Response(405, extra_headers=[("Allow", "POST")])
            return handler(environ)
        if method in ("GET", "HEAD"):
            return self._page(environ, key_prefix)
        return self._serve_static(key_prefix)

    def _page(self, environ: dict, key_prefix: str) -> _Response:
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        state_values = query.get("state")
        state_string = state_values[0] if state_values else None
        try:
            html = render_page(self.bucket, "/" + key_prefix, state_string)
        except ValueError:
            log.exception("Rendering /%s failed", key_prefix)
            return _error(500, "failed to render page")
        return _Response(200, html.encode("utf-8"), "text/html; charset=utf-8")

    def _list_directory_contents(self, environ: dict) -> _Response:
        try:
            arguments = _read_arguments(environ)
        except ValueError as exc:
            return _error(400, str(exc))
        prefix = arguments.get("prefix")
        if not isinstance(prefix, str):
            return _error(400, "missing argument: prefix")
        try:
            entries = list_directory_contents(self.bucket, prefix)
        except Exception as exc:  # reported to the caller like a server function error
            log.exception("Listing %s failed", prefix)
            return _error(500, str(exc))
        body = json.dumps([entry.to_dict() for entry in entries]).encode("utf-8")
        return _Response(200, body, "application/json")

    def _static_file(self, asset: str) -> Optional[bytes]:
        if self.assets_dir is None:
            return None
        parts = [part for part in asset.split("/") if part]
        if any(part in (".", "..") for part in parts):
            return None
        target = self.assets_dir.joinpath(*parts)
        if target.is_dir():
            target = target / "index.html"
        if not target.is_file():
            return None
        return target.read_bytes()

    def _serve_static(self, asset: str) -> _Response:
        data = self._static_file(asset)
        if data is None:
            return _Response(404)
        return _Response(200, data, path_mime_type(asset))


def main(argv: Optional[list[str]] = None) -> int:
    """Serve a local directory as a bucket over HTTP."""
    parser = argparse.ArgumentParser(
        prog="bucketbrowse", description="Browse a directory of objects in a web page."
    )
    parser.add_argument("root", help="directory whose files form the bucket")
    parser.add_argument("--assets", help="directory of static assets")
    parser.add_argument("--host", default="127.0.0.1", help="address to listen on")
    parser.add_argument("--port", type=int, default=8787, help="port to listen on")
    args = parser.parse_args(argv)
    if not Path(args.root).is_dir():
        parser.error(f"not a directory: {args.root}")
    if args.assets is not None and not Path(args.assets).is_dir():
        parser.error(f"not a directory: {args.assets}")

    logging.basicConfig(level=logging.DEBUG)
    app = Explorer(DirectoryBucket(args.root), args.assets)
    with make_server(args.host, args.port, app) as httpd:
        log.info("Serving on http://%s:%d/", args.host, args.port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0