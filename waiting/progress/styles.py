"""Text and bar styles for progress lines."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional

from waiting.shared.config import load_config, section

DEFAULT_GLYPHS = "█"
DEFAULT_SLIDE_RATIO = 1.0 / 6.0

# Keyword options accepted by SessionConfig.update() and progress()
SESSION_OPTIONS = ("title", "text_style", "bar_style", "max_width", "with_elapsed", "clear_on_end")


class _ParsableEnum(Enum):

    @classmethod
    def parse(cls, value):
        """Accept a member or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            choices = ", ".join(m.name.lower() for m in cls)
            raise ValueError(
                f"Unknown {cls.__name__} {value!r} (expected one of: {choices})"
            ) from None


class ProgressStyle(_ParsableEnum):
    """Numeric suffix printed after the title."""
    BARE = "bare"
    PERCENT = "percent"
    FRACTION = "fraction"


class SlideStyle(_ParsableEnum):
    """Motion of the sliding segment when the total is unknown."""
    WRAPPING = "wrapping"
    LINEAR = "linear"
    SMOOTH = "smooth"


@dataclass(frozen=True)
class BarStyle:
    """Look and animation of the bar body.

    Attributes:
        glyphs: Texture repeated over filled cells, never empty.
        slide: Motion law used when the total is unknown.
        slide_speed: Speed of the sliding segment; negative reverses it.
        rotation_speed: Glyphs per second the texture shifts by.
        slide_ratio: Share of the bar taken by the sliding segment, in (0, 1].
            Larger values are clamped to 1 when rendering.
        left_end: Literal text drawn before the bar.
        right_end: Literal text drawn after the bar.
    """

    glyphs: str = DEFAULT_GLYPHS
    slide: SlideStyle = SlideStyle.WRAPPING
    slide_speed: float = 1.0
    rotation_speed: float = 0.0
    slide_ratio: float = DEFAULT_SLIDE_RATIO
    left_end: str = ""
    right_end: str = ""

    def __post_init__(self):
        for name in ("glyphs", "left_end", "right_end"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"BarStyle.{name} must be a string, got {type(value).__name__}")
        if not self.glyphs:
            raise ValueError("BarStyle.glyphs must contain at least one character")
        for name in ("slide_speed", "rotation_speed", "slide_ratio"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if self.slide_ratio <= 0:
            raise ValueError(f"BarStyle.slide_ratio must be positive, got {self.slide_ratio}")
        object.__setattr__(self, "slide", SlideStyle.parse(self.slide))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "BarStyle":
        """Build a style from a config mapping, ignoring unknown keys."""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Bar style config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class SessionConfig:
    """Everything a progress session can be configured with."""

    title: str = ""
    text_style: ProgressStyle = ProgressStyle.PERCENT
    bar_style: BarStyle = field(default_factory=BarStyle)
    max_width: Optional[int] = None
    show_elapsed: bool = False
    clear_on_end: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SessionConfig":
        """Build a config from the 'progress' section of config.yaml.

        Example:
            progress:
              title: Working
              text_style: fraction
              with_elapsed: true
              bar:
                glyphs: "--==##=="
                left_end: "["
                right_end: "]"
        """
        if not data:
            return cls()
        options = {k: data[k] for k in SESSION_OPTIONS if k in data and k != "bar_style"}
        if "bar" in data:
            options["bar_style"] = BarStyle.from_dict(data["bar"])
        return cls().update(**options)

    def update(self, title=None, text_style=None, bar_style=None, max_width=None,
               with_elapsed=None, clear_on_end=None) -> "SessionConfig":
        """Apply the given options in place; None leaves a field unchanged."""
        if title is not None:
            self.title = str(title)
        if text_style is not None:
            self.text_style = ProgressStyle.parse(text_style)
        if bar_style is not None:
            if not isinstance(bar_style, BarStyle):
                raise TypeError(f"bar_style expects a BarStyle, got {type(bar_style).__name__}")
            self.bar_style = bar_style
        if max_width is not None:
            self.max_width = validate_max_width(max_width)
        if with_elapsed is not None:
            self.show_elapsed = bool(with_elapsed)
        if clear_on_end is not None:
            self.clear_on_end = bool(clear_on_end)
        return self


def validate_max_width(value) -> int:
    """Return ``value`` as a column count, rejecting negatives and non-integers."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"max_width must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"max_width must not be negative, got {value}")
    return value


def load_session_config(config: Optional[Dict[str, Any]] = None) -> SessionConfig:
    """SessionConfig from the 'progress' section of config.yaml.

    ``config`` is an already loaded config dict; when omitted the file is
    read with load_config(). A missing file gives the defaults.

    Usage:
        bar = Progress(paths, config=load_session_config()).title("Copying")
    """
    if config is None:
        config = load_config(fallback={})
    return SessionConfig.from_dict(section(config, "progress"))
