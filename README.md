# bucketbrowse

A small WSGI application that shows the contents of an object bucket as an
expandable HTML directory tree and serves the objects themselves as
downloads.

Each page lists the folders and files under the current path, with file
sizes in decimal units (`1.50 kB`, `2 MB`) and upload times in UTC. Clicking
a folder opens it in place; the set of open folders is kept in the `state`
query parameter (the sorted keys joined with `|` and base64-encoded), so a
link to a page brings its open tree with it.

## Installation

```
pip install .
```

## Running

Serve a local directory as though it were a bucket:

```
bucketbrowse path/to/directory
```

Options:

- `--assets DIR`: directory of static assets (see below)
- `--host HOST`: address to listen on (default `127.0.0.1`)
- `--port PORT`: port to listen on (default `8787`)

The server uses the standard library's `wsgiref` server and logs at debug
level.

## How requests are answered

- A path that does not end in `/` (and does not start with `/api/`) is an
  object key. The object's bytes come back as `application/octet-stream`,
  or a 404 if there is no such object. This includes `/styles.css`, which
  every page links to: it is looked up in the bucket like any other key.
- A `GET` or `HEAD` for a path ending in `/` returns the HTML page for that
  folder, with a `../` link to the parent folder where there is one.
- Other methods on a path ending in `/` are answered from the assets
  directory, if one was given; a directory there answers with its
  `index.html`. The content type comes from the file extension.
- `POST /api/list_directory_contents` takes a `prefix` argument, as a JSON
  object or a form-encoded body, and returns the entries directly under it
  as JSON: folders as `{"key": ..., "type": "Directory"}`, files as
  `{"key": ..., "type": {"File": {"size": ..., "uploaded": ...}}}`. Other
  methods get a 405; unknown names under `/api/` get a 404.

## Using it from Python

`Explorer` is the WSGI application. It takes any bucket that has `get` and
`list`, plus an optional assets directory:

```python
from datetime import datetime, timezone
from wsgiref.simple_server import make_server

from bucketbrowse.bucket import MemoryBucket
from bucketbrowse.server import Explorer

bucket = MemoryBucket()
bucket.put("dir1/file1.txt", b"hello", datetime(2024, 1, 1, tzinfo=timezone.utc))
bucket.put("dir1/dir2/file3.jpg", b"...", datetime(2024, 1, 2, tzinfo=timezone.utc))

app = Explorer(bucket)
make_server("127.0.0.1", 8787, app).serve_forever()
```

`DirectoryBucket(root)` gives the same interface over the files below a
directory on disk, using each file's modification time as its upload time.

The smaller pieces can be used on their own:

- `bucketbrowse.bucket.list_directory_contents(bucket, prefix)` returns the
  `Entry` values directly under a prefix: folders first, then files.
  `Entry.to_dict()` gives the JSON form shown above.
- `bucketbrowse.state.encode_expanded_keys(keys)` and
  `decode_expanded_keys(state_string)` convert between a set of keys and the
  `state` string; a malformed string decodes to `{""}`.
- `bucketbrowse.emoji.file_emoji(extension)` picks an icon for a file
  extension, ignoring case.
- `bucketbrowse.mime.path_mime_type(path)` picks the content type used for
  static assets, defaulting to `text/plain`.
- `bucketbrowse.views.render_page(bucket, path, state_string)` renders a
  whole page as an HTML string; `format_size` and `relative_name` are the
  helpers it uses.

## What it does not do

- It talks to no remote object-storage service. The buckets provided are
  `MemoryBucket` and `DirectoryBucket`; anything else must be supplied as an
  object with the same `get` and `list` methods.
- Pages are plain server-rendered HTML with no scripts: opening or closing a
  folder loads a new page.
- It has no upload, delete or authentication.

## Tests

```
pip install .[test]
pytest
```