"""
Render settings loaded from YAML with OmegaConf.

Examples:
    >>> settings = load_render_settings()
    >>> settings = load_render_settings(overrides={"capture": {"timeout_ms": 5000}})
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
RENDER_SETTINGS_PATH = Path(
    os.getenv(
        "FOLIO_RENDER_SETTINGS",
        str(Path(__file__).resolve().parents[2] / "configs" / "render_settings.yaml"),
    )
)


@dataclass
class BrowserSettings:
    executable_path: Optional[str] = None
    candidates: List[str] = field(
        default_factory=lambda: ["chromium", "chromium-browser", "google-chrome"]
    )
    fallback_paths: List[str] = field(
        default_factory=lambda: ["/data/data/com.termux/files/usr/bin/chromium"]
    )
    disable_sandbox: bool = True
    extra_args: List[str] = field(default_factory=list)


@dataclass
class CaptureSettings:
    page_format: str = "A4"
    timeout_ms: int = 60000
    print_background: bool = True
    header_template: str = "<div></div>"


@dataclass
class AdmissionSettings:
    max_concurrent: int = 2
    acquire_timeout_s: float = 120


@dataclass
class CompressionSettings:
    enabled: bool = True
    binary: str = "gs"
    pdf_settings: str = "/ebook"
    compatibility_level: str = "1.4"
    subset_fonts: bool = True
    compress_fonts: bool = True
    detect_duplicate_images: bool = True
    timeout_s: float = 120


@dataclass
class RenderSettings:
    browser: BrowserSettings = field(default_factory=BrowserSettings)
    capture: CaptureSettings = field(default_factory=CaptureSettings)
    admission: AdmissionSettings = field(default_factory=AdmissionSettings)
    compression: CompressionSettings = field(default_factory=CompressionSettings)


def load_render_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> RenderSettings:
    """
    Load render settings, merging the YAML file and overrides onto the dataclass schema.

    Args:
        config_path: YAML file (defaults to FOLIO_RENDER_SETTINGS env / packaged file)
        overrides: Nested dict applied last

    Returns:
        RenderSettings

    Raises:
        omegaconf.errors.ValidationError: If a value has the wrong type
        omegaconf.errors.ConfigKeyError: If the YAML contains an unknown key
    """
    if config_path is None:
        config_path = RENDER_SETTINGS_PATH

    schema = OmegaConf.structured(RenderSettings)
    layers = [schema]
    if config_path is not None and Path(config_path).exists():
        layers.append(OmegaConf.load(config_path))
    if overrides:
        layers.append(OmegaConf.create(overrides))

    merged = OmegaConf.merge(*layers)
    return OmegaConf.to_object(merged)
