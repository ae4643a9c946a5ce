"""
Runtime Configuration

Central configuration for hashing, leaf encoding and tree construction.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from dotenv import load_dotenv

from merkle_allowlist.crypto.hashing import DEFAULT_HASH_ALGORITHM, get_hasher

if TYPE_CHECKING:
    from merkle_allowlist.crypto.hashing import Hasher
    from merkle_allowlist.merkle.leaf import LeafEncoder

load_dotenv()


@dataclass
class HashConfig:
    """Hash function used for leaves and pair combination."""
    algorithm: str = DEFAULT_HASH_ALGORITHM


@dataclass
class EncodingConfig:
    """Fixed widths of the canonical leaf encoding."""
    identity_width: int = 20
    index_width: int = 32


@dataclass
class BuildConfig:
    """Tree construction settings."""
    max_workers: Optional[int] = None
    # Layers with fewer pairs than this are always combined sequentially
    parallel_threshold: int = 1024


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    hashing: HashConfig = field(default_factory=HashConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ALLOWLIST_HASH_ALGORITHM: keccak256 or sha256
        - ALLOWLIST_IDENTITY_WIDTH: identity width in bytes
        - ALLOWLIST_INDEX_WIDTH: index width in bytes
        - ALLOWLIST_MAX_WORKERS: thread pool size for tree construction
        - ALLOWLIST_PARALLEL_THRESHOLD: minimum pairs per layer to parallelize
        """
        overrides: dict[str, Any] = {}

        if os.getenv("ALLOWLIST_HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv(
                "ALLOWLIST_HASH_ALGORITHM"
            )

        identity_width = _env_int("ALLOWLIST_IDENTITY_WIDTH")
        if identity_width is not None:
            overrides.setdefault("encoding", {})["identity_width"] = identity_width
        index_width = _env_int("ALLOWLIST_INDEX_WIDTH")
        if index_width is not None:
            overrides.setdefault("encoding", {})["index_width"] = index_width

        max_workers = _env_int("ALLOWLIST_MAX_WORKERS")
        if max_workers is not None:
            overrides.setdefault("build", {})["max_workers"] = max_workers
        threshold = _env_int("ALLOWLIST_PARALLEL_THRESHOLD")
        if threshold is not None:
            overrides.setdefault("build", {})["parallel_threshold"] = threshold

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        encoding_data = data.get("encoding", {})
        build_data = data.get("build", {})

        hashing = HashConfig(**hashing_data) if hashing_data else HashConfig()
        encoding = EncodingConfig(**encoding_data) if encoding_data else EncodingConfig()
        build = BuildConfig(**build_data) if build_data else BuildConfig()

        # Fail fast on an unknown algorithm rather than at first build
        get_hasher(hashing.algorithm)

        return cls(
            hashing=hashing,
            encoding=encoding,
            build=build,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("hashing", "encoding", "build"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        get_hasher(new_config.hashing.algorithm)
        return new_config

    def hasher(self) -> "Hasher":
        """Resolve the configured hasher."""
        return get_hasher(self.hashing.algorithm)

    def encoder(self) -> "LeafEncoder":
        """Build a leaf encoder from the configured widths and hasher."""
        from merkle_allowlist.merkle.leaf import LeafEncoder
        return LeafEncoder(
            identity_width=self.encoding.identity_width,
            index_width=self.encoding.index_width,
            hasher=self.hasher(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
            },
            "encoding": {
                "identity_width": self.encoding.identity_width,
                "index_width": self.encoding.index_width,
            },
            "build": {
                "max_workers": self.build.max_workers,
                "parallel_threshold": self.build.parallel_threshold,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
