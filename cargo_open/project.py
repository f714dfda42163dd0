import logging
import os
from pathlib import Path

from cargo_open.environments import Setting
from cargo_open.exceptions import CargoOpenUsageError, NotAProject
from cargo_open.utils.cache import derive_source_path
from cargo_open.utils.cargolock import (
    PackageIdentity,
    SpecParseError,
    find_lock_file,
    load,
)
from cargo_open.utils.constants import LOCKFILE_NAME
from cargo_open.utils.shell import normalize_path

logger = logging.getLogger(__name__)


class Project:
    """A Cargo project, rooted at the directory that holds its ``Cargo.lock``.

    ``environ`` replaces ``os.environ`` for every setting the project reads.
    ``lockfile_loader`` replaces :func:`~cargo_open.utils.cargolock.load`.
    Tests use both to avoid touching the real environment or parsing real files.
    """

    def __init__(self, project_directory=None, environ=None, lockfile_loader=None):
        self._original_dir = os.path.abspath(os.curdir)
        self._project_directory = normalize_path(
            project_directory or os.curdir, base=self._original_dir
        )
        self._lockfile = None
        self._lockfile_loader = lockfile_loader or load
        self.s = Setting(environ)

    @property
    def project_directory(self) -> str:
        return str(self._project_directory)

    @property
    def lockfile_location(self) -> str:
        return str(self._project_directory / LOCKFILE_NAME)

    @property
    def lockfile_exists(self) -> bool:
        return find_lock_file(self._project_directory) is not None

    @property
    def lockfile(self):
        """The project's lock graph, loaded on first use."""
        if self._lockfile is None:
            if not self.lockfile_exists:
                raise NotAProject(
                    filename=self.lockfile_location,
                    project_directory=self.project_directory,
                )
            logger.debug("Loading %s", self.lockfile_location)
            self._lockfile = self._lockfile_loader(self.lockfile_location)
        return self._lockfile

    @property
    def cargo_home(self) -> Path:
        return self.s.cargo_home

    def resolve_package(self, package_name: str) -> PackageIdentity:
        """Find the locked package *package_name* refers to.

        :raises NotAProject: If the project has no lockfile.
        :raises LockfileParseError: If the lockfile is malformed.
        :raises AmbiguousOrMissingPackage: Unless exactly one package matches.
        """
        try:
            package = self.lockfile.query(package_name)
        except SpecParseError as e:
            raise CargoOpenUsageError(str(e)) from e
        logger.debug("Resolved %r to %s (%s)", package_name, package, package.source)
        return package

    def source_path(self, package: PackageIdentity) -> Path:
        return derive_source_path(package, self.cargo_home)


def resolve(project_directory, package_name, lockfile_loader=None) -> PackageIdentity:
    return Project(project_directory, lockfile_loader=lockfile_loader).resolve_package(
        package_name
    )
