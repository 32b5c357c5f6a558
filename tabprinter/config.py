"""
Configuration loading and serialization for table rendering.

A TableConfig describes a table's style, columns and render options in a
JSON-serializable form, so a table layout can be kept in a file and
applied to CSV data from the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence
import json
from pathlib import Path

try:
    import json5
    _HAS_JSON5 = True
except ImportError:
    _HAS_JSON5 = False

from .ansi import DEFAULT_PALETTE, ColorSpec, Palette, supports_color
from .column import DEFAULT_MARKER, Alignment, validate_marker
from .errors import ConfigError, InvalidColor, UnknownStyle
from .styles import parse_style, style_definition
from .table import Table

COLOR_MODES = ("auto", "always", "never")


@dataclass
class ColumnSpec:
    """Serializable specification for a column."""
    header: str
    width: int = 10
    align: str = "left"

    def to_dict(self) -> dict:
        return {"header": self.header, "width": self.width, "align": self.align}

    @classmethod
    def from_dict(cls, data: dict) -> "ColumnSpec":
        return cls(
            header=data.get("header", ""),
            width=data.get("width", 10),
            align=data.get("align", "left"),
        )


@dataclass
class TableConfig:
    """
    Complete table configuration.

    This is the top-level config that gets serialized to/from JSON.
    """
    style: str = "simple"
    color: str = "auto"  # auto | always | never
    truncation_marker: str = DEFAULT_MARKER
    padding: int = 0
    page_size: Optional[int] = None
    columns: List[ColumnSpec] = field(default_factory=list)
    palette: Optional[dict] = None  # Per-role overrides, see Palette.from_dict

    def to_dict(self) -> dict:
        """Convert config to JSON-serializable dict."""
        d = {
            "style": self.style,
            "color": self.color,
            "truncation_marker": self.truncation_marker,
            "padding": self.padding,
            "page_size": self.page_size,
            "columns": [c.to_dict() for c in self.columns],
        }
        if self.palette is not None:
            d["palette"] = self.palette
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "TableConfig":
        """Create config from dict (e.g., from JSON)."""
        return cls(
            style=data.get("style", "simple"),
            color=data.get("color", "auto"),
            truncation_marker=data.get("truncation_marker", DEFAULT_MARKER),
            padding=data.get("padding", 0),
            page_size=data.get("page_size"),
            columns=[ColumnSpec.from_dict(c) for c in data.get("columns", [])],
            palette=data.get("palette"),
        )

    def resolve_palette(self) -> Optional[Palette]:
        """Palette with config overrides applied over the style's own colors.

        Returns None when the config does not override any color.
        """
        if not self.palette:
            return None
        base = style_definition(self.style).palette or DEFAULT_PALETTE
        return Palette.from_dict(self.palette, base=base)

    def use_color(self, stream: Any = None) -> bool:
        """Whether to emit color on ``stream`` given the color mode."""
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return supports_color(stream)

    def build_table(self, rows: Iterable[Sequence[Any]] = ()) -> Table:
        """
        Create a Table with this config's style, options and columns.

        Raises:
            ConfigError: If the config is invalid (lists every problem)
            ColumnCountMismatch: If a row does not match the columns
        """
        errors = validate_config(self)
        if errors:
            raise ConfigError(errors)
        table = Table(
            self.style,
            truncation_marker=self.truncation_marker,
            padding=self.padding,
            page_size=self.page_size,
            palette=self.resolve_palette(),
        )
        for col in self.columns:
            table.add_column(col.header, col.width, col.align)
        table.add_rows(rows)
        return table


def load_config(path: str | Path) -> TableConfig:
    """
    Load a table configuration from a JSON file.

    Supports JSON with comments (JSONC) if json5 is installed.

    Args:
        path: Path to JSON config file

    Returns:
        TableConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        json.JSONDecodeError: If JSON is invalid
        ValueError: If config structure is invalid
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        if _HAS_JSON5:
            data = json5.load(f)
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Table config must be a JSON object, got {type(data).__name__}")
    return TableConfig.from_dict(data)


def save_config(config: TableConfig, path: str | Path) -> None:
    """
    Save a table configuration to a JSON file.

    Args:
        config: TableConfig to save
        path: Path to output file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: TableConfig) -> List[str]:
    """
    Validate a configuration and return list of error messages.

    Returns empty list if config is valid.
    """
    errors = []

    try:
        parse_style(config.style)
    except UnknownStyle as e:
        errors.append(str(e))

    if config.color not in COLOR_MODES:
        errors.append(f"color must be one of {', '.join(COLOR_MODES)}, got {config.color!r}")

    try:
        validate_marker(config.truncation_marker)
    except ValueError as e:
        errors.append(str(e))

    if not _is_int(config.padding) or config.padding < 0:
        errors.append(f"padding must be a non-negative integer, got {config.padding!r}")

    if config.page_size is not None and (not _is_int(config.page_size) or config.page_size <= 0):
        errors.append(f"page_size must be a positive integer, got {config.page_size!r}")

    # Check columns
    for i, col in enumerate(config.columns):
        label = f"Column {i} ('{col.header}')"
        if not _is_int(col.width) or col.width <= 0:
            errors.append(f"{label} width must be a positive integer, got {col.width!r}")
        try:
            Alignment.parse(col.align)
        except ValueError as e:
            errors.append(f"{label}: {e}")

    # Check palette
    if config.palette is not None:
        if not isinstance(config.palette, dict):
            errors.append("palette must be an object mapping roles to colors")
        else:
            for role, spec in config.palette.items():
                if role not in ("border", "header", "cell"):
                    errors.append(f"Unknown palette role: {role}. Valid: border, header, cell")
                elif not isinstance(spec, dict):
                    errors.append(f"Palette role '{role}' must be an object")
                else:
                    try:
                        ColorSpec.from_dict(spec)
                    except InvalidColor as e:
                        errors.extend(f"Palette role '{role}': {msg}" for msg in e.errors)

    return errors
