"""Tests for waiting.progress.styles module."""

import dataclasses
from unittest import mock

import pytest

import waiting.shared.config as config_module
from waiting.progress.styles import (
    DEFAULT_GLYPHS,
    BarStyle,
    ProgressStyle,
    SessionConfig,
    SlideStyle,
    load_session_config,
    validate_max_width,
)


class TestParse:
    """Tests for enum name parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("bare", ProgressStyle.BARE),
        ("Percent", ProgressStyle.PERCENT),
        (" FRACTION ", ProgressStyle.FRACTION),
        (ProgressStyle.FRACTION, ProgressStyle.FRACTION),
    ])
    def test_progress_style(self, value, expected):
        assert ProgressStyle.parse(value) is expected

    def test_slide_style(self):
        assert SlideStyle.parse("smooth") is SlideStyle.SMOOTH

    def test_unknown_name_lists_choices(self):
        with pytest.raises(ValueError, match="bare, percent, fraction"):
            ProgressStyle.parse("spinner")


class TestBarStyle:
    """Tests for BarStyle."""

    def test_defaults(self):
        style = BarStyle()
        assert style.glyphs == DEFAULT_GLYPHS == "█"
        assert style.slide is SlideStyle.WRAPPING
        assert style.slide_speed == 1.0
        assert style.rotation_speed == 0.0
        assert style.slide_ratio == pytest.approx(1 / 6)
        assert style.left_end == ""
        assert style.right_end == ""

    def test_empty_glyphs_rejected(self):
        with pytest.raises(ValueError, match="glyphs"):
            BarStyle(glyphs="")

    @pytest.mark.parametrize("field", ["glyphs", "left_end", "right_end"])
    @pytest.mark.parametrize("value", [12, None, ["#"]])
    def test_text_fields_must_be_strings(self, field, value):
        with pytest.raises(TypeError, match=field):
            BarStyle(**{field: value})

    def test_from_dict_rejects_numeric_glyphs(self):
        with pytest.raises(TypeError, match="glyphs"):
            BarStyle.from_dict({'glyphs': 12})

    @pytest.mark.parametrize("ratio", [0, -0.5])
    def test_non_positive_slide_ratio_rejected(self, ratio):
        with pytest.raises(ValueError, match="slide_ratio"):
            BarStyle(slide_ratio=ratio)

    def test_ratio_above_one_is_accepted(self):
        assert BarStyle(slide_ratio=3).slide_ratio == 3.0

    def test_slide_name_is_parsed(self):
        assert BarStyle(slide="linear").slide is SlideStyle.LINEAR

    def test_numeric_fields_are_floats(self):
        style = BarStyle(slide_speed=2, rotation_speed=-30)
        assert isinstance(style.slide_speed, float)
        assert style.rotation_speed == -30.0

    def test_non_numeric_speed_rejected(self):
        with pytest.raises(ValueError):
            BarStyle(slide_speed="fast")

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            BarStyle().glyphs = "#"

    def test_replace_keeps_other_fields(self):
        style = dataclasses.replace(BarStyle(left_end="["), glyphs="=")
        assert style.glyphs == "="
        assert style.left_end == "["

    def test_from_dict(self):
        style = BarStyle.from_dict({
            'glyphs': '--==##==',
            'slide': 'smooth',
            'slide_ratio': 0.5,
            'left_end': '[',
            'right_end': ']',
            'colour': 'red',
        })
        assert style.glyphs == '--==##=='
        assert style.slide is SlideStyle.SMOOTH
        assert style.slide_ratio == 0.5
        assert (style.left_end, style.right_end) == ('[', ']')

    def test_from_dict_empty(self):
        assert BarStyle.from_dict(None) == BarStyle()

    def test_from_dict_non_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            BarStyle.from_dict("##")


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_defaults(self):
        config = SessionConfig()
        assert config.title == ""
        assert config.text_style is ProgressStyle.PERCENT
        assert config.bar_style == BarStyle()
        assert config.max_width is None
        assert config.show_elapsed is False
        assert config.clear_on_end is True

    def test_instances_do_not_share_bar_style(self):
        a, b = SessionConfig(), SessionConfig()
        a.update(bar_style=BarStyle(glyphs="#"))
        assert b.bar_style.glyphs == DEFAULT_GLYPHS

    def test_update_returns_self(self):
        config = SessionConfig()
        assert config.update(title="Job") is config
        assert config.title == "Job"

    def test_update_none_leaves_fields(self):
        config = SessionConfig(title="Job", max_width=10)
        config.update()
        assert config.title == "Job"
        assert config.max_width == 10

    def test_update_rejects_non_bar_style(self):
        with pytest.raises(TypeError):
            SessionConfig().update(bar_style={'glyphs': '#'})

    def test_from_dict(self):
        config = SessionConfig.from_dict({
            'title': 'Copying',
            'text_style': 'fraction',
            'max_width': 30,
            'with_elapsed': True,
            'clear_on_end': False,
            'bar': {'glyphs': '=', 'slide': 'linear'},
        })
        assert config.title == 'Copying'
        assert config.text_style is ProgressStyle.FRACTION
        assert config.max_width == 30
        assert config.show_elapsed is True
        assert config.clear_on_end is False
        assert config.bar_style == BarStyle(glyphs='=', slide=SlideStyle.LINEAR)

    def test_from_dict_empty(self):
        assert SessionConfig.from_dict({}) == SessionConfig()

    def test_from_dict_bad_style(self):
        with pytest.raises(ValueError):
            SessionConfig.from_dict({'text_style': 'spinner'})


class TestValidateMaxWidth:
    """Tests for validate_max_width()."""

    def test_accepts_zero_and_positive(self):
        assert validate_max_width(0) == 0
        assert validate_max_width(80) == 80

    @pytest.mark.parametrize("value", [-1, "5", 2.5, True])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            validate_max_width(value)


class TestLoadSessionConfig:
    """Tests for load_session_config()."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        with mock.patch.object(config_module, 'CONFIG_PATH', path):
            yield path

    def test_missing_file_gives_defaults(self, config_file):
        assert load_session_config() == SessionConfig()

    def test_reads_progress_section(self, config_file):
        config_file.write_text(
            "progress:\n"
            "  title: Copying\n"
            "  text_style: fraction\n"
            "  bar:\n"
            "    glyphs: '#'\n"
        )
        config = load_session_config()
        assert config.title == "Copying"
        assert config.text_style is ProgressStyle.FRACTION
        assert config.bar_style == BarStyle(glyphs="#")

    def test_loaded_dict_skips_file(self, config_file):
        config_file.write_text("progress:\n  title: From file\n")
        config = load_session_config({"progress": {"title": "Given"}})
        assert config.title == "Given"

    def test_bad_glyphs_fail_on_load(self, config_file):
        config_file.write_text("progress:\n  bar:\n    glyphs: 12\n")
        with pytest.raises(TypeError, match="glyphs"):
            load_session_config()
