"""
Locate unpacked dependency sources inside Cargo's home directory.

Nothing here asks Cargo where anything is: the paths are rebuilt from the
layout Cargo uses on disk::

    $CARGO_HOME/registry/src/<host>-<hash>/<name>-<version>
    $CARGO_HOME/git/checkouts/<repo>-<hash>/<short-rev>

That layout is not a public interface. If a Cargo release changes the naming
or the hash, these functions keep returning well-formed paths that no longer
exist, without any error. Callers that care should check the result exists.
"""

import logging
from pathlib import Path

from cargo_open.exceptions import UnsupportedSource
from cargo_open.utils.constants import GIT_SHORT_ID_LENGTH
from cargo_open.utils.sources import SourceId, SourceParseError

logger = logging.getLogger(__name__)


def registry_source_root(cache_root, source_id: SourceId) -> Path:
    return Path(cache_root) / "registry" / "src" / source_id.short_name()


def git_checkout_root(cache_root, source_id: SourceId) -> Path:
    return Path(cache_root) / "git" / "checkouts" / source_id.checkout_name()


def derive_source_path(identity, cache_root) -> Path:
    """Return where Cargo unpacked *identity*'s sources under *cache_root*.

    :param PackageIdentity identity: The locked package.
    :param cache_root: Cargo's home directory.
    :raises UnsupportedSource: For path dependencies and sources Cargo does not
        unpack into its home directory.
    """
    if identity.source is None:
        raise UnsupportedSource(str(identity))
    try:
        source_id = SourceId.parse(identity.source)
    except SourceParseError as e:
        raise UnsupportedSource(str(identity), identity.source) from e
    if source_id.is_registry:
        path = registry_source_root(cache_root, source_id) / (
            f"{identity.name}-{identity.version}"
        )
    elif source_id.is_git:
        if not source_id.precise:
            raise UnsupportedSource(str(identity), identity.source)
        path = git_checkout_root(cache_root, source_id) / (
            source_id.precise[:GIT_SHORT_ID_LENGTH]
        )
    else:
        raise UnsupportedSource(str(identity), identity.source)
    logger.debug("Derived %s for %s from %s", path, identity, identity.source)
    return path
