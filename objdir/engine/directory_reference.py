from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit


class DirectoryEscapeError(ValueError):
    def __init__(self, candidate_path: str, escaped_path: str, enclosing_path: str):
        self.candidate_path = candidate_path
        self.escaped_path = escaped_path
        self.enclosing_path = enclosing_path
        super().__init__(
            f'Attempted directory escape. Path "{candidate_path}" escapes enclosing path '
            f'"{enclosing_path}" --> "{escaped_path}"'
        )


def normalize_url_path(path: str) -> str:
    """
    Collapse duplicate separators, "." and ".." segments of an absolute URL path.
    ".." never climbs above the root. A trailing separator is kept.
    """
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    if not segments:
        return "/"

    normalized = "/" + "/".join(segments)
    if path.endswith("/"):
        normalized += "/"
    return normalized


class DirectoryReference:
    """
    A directory location in URL form.

    canonical_url never has a trailing slash (except for the root itself).
    Contents are addressed by name and must stay inside the directory.
    """

    def __init__(self, directory_url: str):
        parts = urlsplit(directory_url)
        path = normalize_url_path(parts.path or "/")

        canonical_path = path.rstrip("/") or "/"
        self._scheme = parts.scheme
        self._netloc = parts.netloc
        self._canonical_path = canonical_path
        self._path_with_slash = canonical_path if canonical_path == "/" else canonical_path + "/"

        self.canonical_url = self._url(canonical_path)

    def _url(self, path: str) -> str:
        return urlunsplit((self._scheme, self._netloc, path, "", ""))

    @property
    def canonical_path(self) -> str:
        return self._canonical_path

    def contents_url(self, name: str) -> str:
        if name.startswith("/"):
            joined = name
        else:
            joined = self._path_with_slash + name
        resolved = normalize_url_path(joined)

        if not resolved.startswith(self._path_with_slash):
            raise DirectoryEscapeError(name, resolved, self._canonical_path)

        return self._url(resolved)
