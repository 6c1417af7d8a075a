"""
Configuration classes for reading, triangulation and export.

Each configuration is a dataclass validated on construction, with
dictionary round-tripping so the CLI can build it from its JSON settings.
"""

import logging
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, Optional, ClassVar, Tuple

# Set up logging
logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: Tuple[str, ...] = (
    '.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tif', '.tiff', '.webp', '.tga'
)


@dataclass
class BaseConfig:
    """
    Base configuration class.

    Unknown keys passed through ``from_dict`` are kept in ``extra`` instead of
    being rejected, so settings files written by newer versions still load.
    """
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If configuration is invalid
        """

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result = asdict(self)
        # Remove extra if empty
        if not result['extra']:
            del result['extra']
        return result

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'BaseConfig':
        """
        Create configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            New configuration instance
        """
        names = [f.name for f in fields(cls) if f.name != 'extra']
        known_params = {k: v for k, v in config_dict.items() if k in names}
        extra_params = {k: v for k, v in config_dict.items() if k not in names}

        config = cls(**known_params)
        config.extra.update(extra_params)
        return config


@dataclass
class ReaderConfig(BaseConfig):
    """Configuration for heightmap readers."""
    format: str = 'auto'
    image_backend: str = 'pillow'
    strict_shape: bool = True
    elevation_divisor: float = 32.0
    dither: bool = True

    valid_formats: ClassVar[Tuple[str, ...]] = ('auto', 'text', 'image')
    valid_backends: ClassVar[Tuple[str, ...]] = ('pillow', 'opencv')

    def validate(self) -> None:
        if self.format not in self.valid_formats:
            raise ValueError(
                f"format must be one of {list(self.valid_formats)}, got '{self.format}'"
            )
        if self.image_backend not in self.valid_backends:
            raise ValueError(
                f"image_backend must be one of {list(self.valid_backends)}, "
                f"got '{self.image_backend}'"
            )
        if self.elevation_divisor <= 0:
            raise ValueError(f"elevation_divisor must be positive, got {self.elevation_divisor}")


@dataclass
class MeshConfig(BaseConfig):
    """Configuration for the run-merge triangulator."""
    merge_runs: bool = True
    max_run_length: Optional[int] = None

    def validate(self) -> None:
        if self.max_run_length is not None and self.max_run_length < 1:
            raise ValueError(f"max_run_length must be at least 1 or None, got {self.max_run_length}")


@dataclass
class ExportConfig(BaseConfig):
    """Configuration for STL export."""
    atomic: bool = True
    drop_degenerate: bool = False
