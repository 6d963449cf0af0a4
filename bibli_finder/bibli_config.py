import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

"""Default config file name"""
DEFAULT_CONFIG_FILE = ".bibli.toml"

"""Default file extensions"""
DEFAULT_EXTENSIONS = ["pdf"]


@dataclass
class FinderConfig:
    """
    Configs for finding files associated to entries
    """

    strategy: str = "citekey"
    """Only `citekey` is supported"""

    exact_key_only: bool = False
    """Only associate files whose name is exactly the citation key"""

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    """File extensions to look for, without the leading dot"""

    directories: list[str] = field(default_factory=lambda: [])
    """Directories searched recursively"""


@dataclass
class BackendConfig:
    """
    Config for backends
    """

    backend_type: str = "bibfile"
    """Only `bibfile` is supported"""

    bibfiles: list[str] = field(default_factory=lambda: [])
    """List of bibfile paths to load"""


EXPECTED_VALUES = {
    "backend_type": ["bibfile"],
    "finder.strategy": ["citekey"],
}


@dataclass
class BibliTomlConfig:
    """
    All configurations used by bibli_finder
    """

    finder: FinderConfig = field(default_factory=lambda: FinderConfig())
    """See `FinderConfig`"""

    backends: dict[str, BackendConfig] = field(default_factory=lambda: {})
    """Dictionary of backend configs"""

    def check_expected(self, field, value) -> bool:
        if value not in EXPECTED_VALUES[field]:
            logger.error(
                f"Unexpected value in {field}: {value}",
            )
            return False
        return True

    def sanitize(self) -> bool:
        valid = True
        for _, v in self.backends.items():
            valid &= self.check_expected("backend_type", v.backend_type)

        valid &= self.check_expected("finder.strategy", self.finder.strategy)

        for ext in self.finder.extensions:
            if ext.startswith("."):
                logger.warning(f"Extension `{ext}` should not start with a dot")
        self.finder.extensions = [ext.lstrip(".") for ext in self.finder.extensions]
        return valid

    def resolve_paths(self, root: str) -> None:
        """Make relative bibfiles and directories relative to `root`"""

        def resolve(path: str) -> str:
            return path if os.path.isabs(path) else os.path.join(root, path)

        self.finder.directories = [resolve(d) for d in self.finder.directories]
        for v in self.backends.values():
            v.bibfiles = [resolve(b) for b in v.bibfiles]

    def bibfiles(self) -> list[str]:
        return [b for v in self.backends.values() for b in v.bibfiles]


def load_config(config_file: str) -> BibliTomlConfig:
    """Load a config file, paths in it are relative to its directory.

    Raise `FileNotFoundError` if the file does not exist.
    """
    import tosholi

    with open(config_file, "rb") as f:
        config: BibliTomlConfig = tosholi.load(BibliTomlConfig, f)  # type: ignore

    logger.info(f"Loaded configs from `{config_file}`")
    config.resolve_paths(os.path.dirname(os.path.abspath(config_file)))
    return config
