"""
Cargo.lock file handling utilities.

This module reads the lockfile Cargo writes next to a project's manifest and
answers "which locked package does this name refer to?". It never resolves
anything itself; the dependency graph in the lockfile is taken as given.
"""

import difflib
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlsplit

import tomlkit
from tomlkit.exceptions import TOMLKitError

from cargo_open.exceptions import (
    AmbiguousPackage,
    LockfileParseError,
    LockfileVersionError,
    NotAProject,
    PackageNotFound,
)
from cargo_open.utils.constants import LOCKFILE_NAME, MAX_LOCKFILE_VERSION
from cargo_open.utils.sources import SOURCE_PREFIXES, SourceId, SourceParseError


class SpecParseError(ValueError):
    """Raised when a package ID specification cannot be parsed."""

    pass


@dataclass(frozen=True)
class PackageIdentity:
    """One locked package: exactly one ``[[package]]`` entry of the lockfile."""

    name: str
    version: str
    source: Optional[str] = None

    def __str__(self):
        return f"{self.name}@{self.version}"


def _strip_source_prefix(url):
    for prefix in SOURCE_PREFIXES:
        if url.startswith(prefix):
            return url[len(prefix) :]
    return url


def _comparable_url(url):
    parts = urlsplit(_strip_source_prefix(url))
    return f"{parts.scheme}://{parts.netloc}{parts.path}".rstrip("/")


def _split_version(version):
    """Split a version into its dotted core, pre-release and build metadata."""
    version, _, build = version.partition("+")
    core, _, pre = version.partition("-")
    return core.split("."), pre or None, build or None


@dataclass(frozen=True)
class PackageIdSpec:
    """A query for a locked package, in Cargo's package ID specification syntax.

    Accepted forms::

        serde
        serde@1.0.200
        serde:1.0.200
        https://github.com/rust-lang/crates.io-index#serde@1.0
        https://github.com/serde-rs/serde#1.0.200
    """

    name: str
    version: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def parse(cls, spec: str) -> "PackageIdSpec":
        spec = spec.strip()
        if not spec:
            raise SpecParseError("package ID specification must not be empty")
        if "://" in spec:
            return cls._parse_url(spec)
        for separator in ("@", ":"):
            if separator in spec:
                name, _, version = spec.partition(separator)
                if not name or not version:
                    raise SpecParseError(f"invalid package ID specification {spec!r}")
                return cls(name=name, version=version)
        return cls(name=spec)

    @classmethod
    def _parse_url(cls, spec):
        url, _, fragment = spec.partition("#")
        path_name = urlsplit(_strip_source_prefix(url)).path.rstrip("/")
        path_name = path_name.rsplit("/", 1)[-1]
        if path_name.endswith(".git"):
            path_name = path_name[: -len(".git")]
        name, version = path_name, None
        if fragment:
            for separator in ("@", ":"):
                if separator in fragment:
                    name, _, version = fragment.partition(separator)
                    break
            else:
                if fragment[0].isdigit():
                    version = fragment
                else:
                    name = fragment
        if not name:
            raise SpecParseError(f"package ID specification {spec!r} has no package name")
        return cls(name=name, version=version or None, url=url)

    def matches_version(self, version: str) -> bool:
        """Match *version* the way Cargo matches a partial version.

        Missing minor or patch components match anything. Pre-releases match
        only when the spec names the same pre-release, and build metadata is
        compared only when the spec carries some.
        """
        if self.version is None:
            return True
        wanted_core, wanted_pre, wanted_build = _split_version(self.version)
        core, pre, build = _split_version(version)
        if pre != wanted_pre:
            return False
        if wanted_build is not None and build != wanted_build:
            return False
        return len(wanted_core) <= len(core) and core[: len(wanted_core)] == wanted_core

    def matches_source(self, source: Optional[str]) -> bool:
        if self.url is None:
            return True
        if source is None:
            return False
        return _comparable_url(self.url) == _comparable_url(source)

    def matches(self, package: PackageIdentity) -> bool:
        return (
            package.name == self.name
            and self.matches_version(package.version)
            and self.matches_source(package.source)
        )

    def __str__(self):
        value = self.name
        if self.version:
            value = f"{value}@{self.version}"
        if self.url:
            value = f"{self.url}#{value}"
        return value


@dataclass
class CargoLockFile:
    """Represents a parsed Cargo.lock file."""

    path: Path
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "CargoLockFile":
        """Load a Cargo.lock file from the given path.

        Args:
            path: Path to the Cargo.lock file

        Returns:
            A CargoLockFile instance

        Raises:
            NotAProject: If the file doesn't exist
            LockfileParseError: If the file is not a valid Cargo.lock file
            LockfileVersionError: If the lockfile version is not supported
        """
        if isinstance(path, str):
            path = Path(path)

        if not path.is_file():
            raise NotAProject(filename=str(path), project_directory=str(path.parent))

        try:
            with open(path, encoding="utf-8") as f:
                data = tomlkit.parse(f.read()).unwrap()
        except (OSError, UnicodeDecodeError, TOMLKitError) as e:
            raise LockfileParseError(str(path), error_text=str(e)) from e

        lockfile = cls(path=path, data=data)
        lockfile.validate()
        return lockfile

    def validate(self) -> None:
        """Check the format version and every package entry, so queries never
        see a broken graph."""
        version = self.version
        if not isinstance(version, int) or not 1 <= version <= MAX_LOCKFILE_VERSION:
            raise LockfileVersionError(str(self.path), version)
        for entry in self._package_entries():
            self._package_from_entry(entry)

    @property
    def version(self) -> int:
        """Get the lockfile format version. Files without one are version 1."""
        return self.data.get("version", 1)

    @property
    def packages(self) -> List[PackageIdentity]:
        """Get every locked package, including a version 1 ``[root]`` package."""
        return [self._package_from_entry(entry) for entry in self._package_entries()]

    def _package_entries(self):
        entries = []
        root = self.data.get("root")
        if root is not None:
            entries.append(root)
        package_entries = self.data.get("package", [])
        if not isinstance(package_entries, list):
            raise LockfileParseError(
                str(self.path), error_text="`package` must be an array of tables"
            )
        entries.extend(package_entries)
        return entries

    def _package_from_entry(self, entry) -> PackageIdentity:
        if not isinstance(entry, dict):
            raise LockfileParseError(
                str(self.path), error_text=f"invalid package entry {entry!r}"
            )
        name = entry.get("name")
        version = entry.get("version")
        source = entry.get("source")
        if not isinstance(name, str) or not name:
            raise LockfileParseError(
                str(self.path), error_text=f"package entry without a name: {entry!r}"
            )
        if not isinstance(version, str) or not version:
            raise LockfileParseError(
                str(self.path), error_text=f"package {name!r} has no version"
            )
        if source is not None:
            if not isinstance(source, str):
                raise LockfileParseError(
                    str(self.path), error_text=f"package {name!r} has an invalid source"
                )
            try:
                SourceId.parse(source)
            except SourceParseError as e:
                raise LockfileParseError(str(self.path), error_text=str(e)) from e
        return PackageIdentity(name=name, version=version, source=source)

    def package_names(self) -> List[str]:
        return sorted({package.name for package in self.packages})

    def query(self, spec: Union[str, PackageIdSpec]) -> PackageIdentity:
        """Find the single locked package matching *spec*.

        Raises:
            PackageNotFound: If nothing matches
            AmbiguousPackage: If more than one package matches
        """
        if isinstance(spec, str):
            spec = PackageIdSpec.parse(spec)
        matches = [package for package in self.packages if spec.matches(package)]
        if not matches:
            suggestions = difflib.get_close_matches(spec.name, self.package_names())
            raise PackageNotFound(str(spec), suggestions=suggestions)
        if len(matches) > 1:
            raise AmbiguousPackage(str(spec), _describe_candidates(matches))
        return matches[0]


def _describe_candidates(packages):
    short = [str(package) for package in packages]
    described = []
    for package, label in zip(packages, short):
        if short.count(label) > 1 and package.source:
            label = f"{_strip_source_prefix(package.source).split('#', 1)[0]}#{label}"
        described.append(label)
    return described


def find_lock_file(directory: Union[str, Path] = None) -> Optional[Path]:
    """Find a Cargo.lock file in the given directory.

    Args:
        directory: Directory to search in, defaults to current directory

    Returns:
        Path to the Cargo.lock file if found, None otherwise
    """
    if directory is None:
        directory = os.getcwd()

    if isinstance(directory, str):
        directory = Path(directory)

    lock_path = directory / LOCKFILE_NAME
    if lock_path.is_file():
        return lock_path

    return None


def load(path: Union[str, Path]) -> CargoLockFile:
    """Load and validate the lock graph stored at *path*."""
    return CargoLockFile.from_path(path)
