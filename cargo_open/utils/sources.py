from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from cargo_open.utils.constants import (
    SOURCE_KIND_DIRECTORY,
    SOURCE_KIND_DISCRIMINANTS,
    SOURCE_KIND_GIT,
    SOURCE_KIND_LOCAL_REGISTRY,
    SOURCE_KIND_PATH,
    SOURCE_KIND_REGISTRY,
    SOURCE_KIND_SPARSE,
)
from cargo_open.utils.hashing import hash_discriminant, hash_str, short_hash

SOURCE_PREFIXES = {
    "registry+": SOURCE_KIND_REGISTRY,
    "sparse+": SOURCE_KIND_SPARSE,
    "git+": SOURCE_KIND_GIT,
    "path+": SOURCE_KIND_PATH,
    "local-registry+": SOURCE_KIND_LOCAL_REGISTRY,
    "directory+": SOURCE_KIND_DIRECTORY,
}


class SourceParseError(ValueError):
    pass


@dataclass(frozen=True)
class SourceId:
    """Where a locked package came from, parsed from its ``source`` string."""

    kind: str
    url: str
    reference: Optional[str] = None
    precise: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> "SourceId":
        for prefix, kind in SOURCE_PREFIXES.items():
            if value.startswith(prefix):
                break
        else:
            raise SourceParseError(f"unsupported source protocol in {value!r}")
        url = value[len(prefix) :]
        if not url:
            raise SourceParseError(f"missing URL in source {value!r}")
        if kind == SOURCE_KIND_SPARSE:
            # Sparse registries keep the protocol as part of their URL.
            return cls(kind=kind, url=value)
        if kind == SOURCE_KIND_GIT:
            parts = urlsplit(url)
            base = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
            return cls(
                kind=kind,
                url=base,
                reference=parts.query or None,
                precise=parts.fragment or None,
            )
        return cls(kind=kind, url=url)

    @property
    def is_registry(self) -> bool:
        return self.kind in (SOURCE_KIND_REGISTRY, SOURCE_KIND_SPARSE)

    @property
    def is_git(self) -> bool:
        return self.kind == SOURCE_KIND_GIT

    @property
    def host(self) -> str:
        url = self.url
        if url.startswith("sparse+"):
            url = url[len("sparse+") :]
        return urlsplit(url).hostname or ""

    @property
    def canonical_url(self) -> str:
        """The URL git sources are keyed by, so equivalent remotes share a checkout."""
        parts = urlsplit(self.url)
        scheme, netloc, path = parts.scheme, parts.netloc, parts.path
        if "@" not in netloc:
            netloc = netloc.lower()
        if len(path) > 1 and path.endswith("/"):
            path = path[:-1]
        if parts.hostname == "github.com":
            scheme = "https"
            path = path.lower()
        if path.endswith(".git"):
            path = path[: -len(".git")]
        return urlunsplit((scheme, netloc, path, "", ""))

    def short_name(self) -> str:
        """Directory name of this source under ``registry/{index,cache,src}``."""
        discriminant = SOURCE_KIND_DISCRIMINANTS[self.kind]
        digest = short_hash(hash_discriminant(discriminant), hash_str(self.url))
        return f"{self.host}-{digest}"

    def checkout_name(self) -> str:
        """Directory name of this git source under ``git/checkouts``."""
        url = self.canonical_url
        ident = urlsplit(url).path.rstrip("/").rsplit("/", 1)[-1] or "_empty"
        return f"{ident}-{short_hash(hash_str(url))}"
