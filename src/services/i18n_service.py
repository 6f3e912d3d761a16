"""Localized message lookup keyed by dotted paths, with default-language fallback."""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union

import structlog

from src.config import get_settings
from src.services.translation_defaults import TRANSLATION_DEFAULTS

logger = structlog.get_logger(__name__)

PACKAGE_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


def _freeze(node: Any) -> Any:
    """Recursively wrap nested dicts in read-only proxies."""
    if isinstance(node, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in node.items()})
    return node


def default_candidate_dirs(extra: Iterable[Union[str, Path]] = ()) -> list[Path]:
    """Catalog directories in lookup order: configured, packaged, working tree."""
    dirs = [Path(d) for d in extra]
    dirs.append(PACKAGE_LOCALES_DIR)
    dirs.append(Path.cwd() / "src" / "locales")
    return dirs


def load_catalog_dir(path: Path) -> dict[str, dict]:
    """Read every ``<language>.json`` file in a directory.

    Raises:
        OSError: If the directory or a file cannot be read
        ValueError: If a file is not valid JSON or not a JSON object
    """
    catalog: dict[str, dict] = {}
    for file in sorted(path.glob("*.json")):
        data = json.loads(file.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{file.name} must contain a JSON object")
        catalog[file.stem] = data
    return catalog


class Translator:
    """Resolve message keys such as ``auth.invalid_credentials`` to text.

    The catalog maps language code -> nested mapping and is read-only once
    constructed. The default language is the only mutable state.
    """

    def __init__(
        self,
        catalog: Mapping[str, Mapping[str, Any]],
        default_language: str = "en",
        source: str = "memory",
    ):
        if not catalog:
            catalog = TRANSLATION_DEFAULTS
            source = "builtin"
        self._catalog = _freeze(catalog)
        self.source = source
        self._default_language = (
            default_language if default_language in self._catalog else next(iter(self._catalog))
        )

    @classmethod
    def load(
        cls,
        candidate_dirs: Optional[Iterable[Union[str, Path]]] = None,
        default_language: str = "en",
    ) -> "Translator":
        """Build a Translator from the first loadable catalog directory.

        Directories are tried in order. The first one that exists, holds at
        least one ``*.json`` file and parses completely is adopted as the
        whole catalog. If none qualifies, the bundled defaults are used.
        """
        dirs = default_candidate_dirs() if candidate_dirs is None else [Path(d) for d in candidate_dirs]

        for path in dirs:
            if not path.is_dir():
                continue
            try:
                catalog = load_catalog_dir(path)
            except (OSError, ValueError) as e:
                logger.warning("translations_load_failed", path=str(path), error=str(e))
                continue
            if not catalog:
                continue
            logger.info(
                "translations_loaded",
                path=str(path),
                languages=sorted(catalog),
            )
            return cls(catalog, default_language=default_language, source=str(path))

        logger.warning("translations_not_found_using_defaults")
        return cls(TRANSLATION_DEFAULTS, default_language=default_language, source="builtin")

    @property
    def default_language(self) -> str:
        return self._default_language

    def _lookup(self, language: str, parts: list[str]) -> Optional[str]:
        node: Any = self._catalog.get(language)
        for part in parts:
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def translate(self, key: str, language: Optional[str] = None) -> str:
        """Return the message for ``key``, falling back to the default language, then to ``key``."""
        parts = key.split(".")
        if language and language in self._catalog:
            value = self._lookup(language, parts)
            if value is not None:
                return value
        value = self._lookup(self._default_language, parts)
        return value if value is not None else key

    def get_supported_languages(self) -> list[str]:
        return list(self._catalog)

    def set_default_language(self, language: str) -> None:
        """Switch the fallback language; ignored for languages not in the catalog."""
        if language in self._catalog:
            self._default_language = language


# Process-wide instance, built at startup by init_translator()
_translator: Optional[Translator] = None


def init_translator() -> Translator:
    """Load the process-wide Translator from the configured candidate directories."""
    global _translator

    settings = get_settings()
    _translator = Translator.load(
        default_candidate_dirs(settings.locales_dirs_list),
        default_language=settings.default_language,
    )
    return _translator


def get_translator() -> Translator:
    """Return the process-wide Translator, initializing it on first use."""
    if _translator is None:
        return init_translator()
    return _translator
