"""
Tabula Configuration Management
================================

Centralized configuration for the Tabula toolkit using Python
dataclasses and TOML-based persistence.

Architecture follows the Twelve-Factor App methodology for configuration
management (Wiggins, 2011), separating config from code.

Example ``tabula.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "logs/tabula.log"

    [vigenere]
    policy = "letters"
    chunk_size = 4096
    use_marker = false

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - PEP 681 -- Data Class Transforms (2022).
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional, get_args, get_type_hints

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "tabula.toml"

_DEFAULT_MARKER = "M%S$&#%"

_TYPE_LABELS: dict[type, str] = {
    bool: "a boolean",
    int: "an integer",
    str: "a string",
}


def _expected_type(hint: Any) -> type:
    """Runtime type for a field annotation; ``Optional[X]`` maps to ``X``."""
    args = [arg for arg in get_args(hint) if arg is not type(None)]
    return args[0] if args else hint


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class VigenereConfig:
    """Configuration for the Vigenère cipher tool.

    ``chunk_size`` is the number of bytes pulled from an input file per
    read; ``batch_size`` is the number of output symbols written per
    write. The identifying ``marker`` is prepended before enciphering and
    checked after deciphering when ``use_marker`` is set.
    """

    policy: str = "unicode"
    chunk_size: int = 32
    batch_size: int = 4
    use_marker: bool = True
    marker: str = _DEFAULT_MARKER
    encoding: str = "utf-8"
    output_format: str = "console"

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"vigenere.chunk_size must be positive, got {self.chunk_size}")
        if self.batch_size <= 0:
            raise ValueError(f"vigenere.batch_size must be positive, got {self.batch_size}")


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared across all Tabula tools.

    Controls logging verbosity, log destinations and debug mode.
    """

    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class TabulaConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = TabulaConfig.load()                  # from default path
        >>> config = TabulaConfig.load("custom.toml")     # from custom path
        >>> print(config.vigenere.policy)
        'unicode'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    vigenere: VigenereConfig = field(default_factory=VigenereConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> TabulaConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``tabula.toml`` in the
        project root. Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`TabulaConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
            ValueError: If a section is not a table or a value has the
                wrong type.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(
                GlobalConfig, "global", raw.get("global", {})
            ),
            vigenere=cls._build_section(
                VigenereConfig, "vigenere", raw.get("vigenere", {})
            ),
        )

    # ------------------------------------------------------------------ #
    #  Serialisation helpers
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, section: str, data: Any) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code. Known
        keys must carry the declared type.

        Raises:
            ValueError: If *data* is not a table or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"[{section}] must be a table")

        hints = get_type_hints(cls)
        filtered: dict[str, Any] = {}
        for name, value in data.items():
            if name not in hints:
                continue
            expected = _expected_type(hints[name])
            if not isinstance(value, expected) or (
                expected is int and isinstance(value, bool)
            ):
                label = _TYPE_LABELS.get(expected, expected.__name__)
                raise ValueError(f"{section}.{name} must be {label}, got {value!r}")
            filtered[name] = value
        return cls(**filtered)


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> TabulaConfig:
    """Module-level convenience wrapper around :meth:`TabulaConfig.load`.

    Caches the result so that repeated imports share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = TabulaConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
